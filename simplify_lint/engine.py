"""The simplification engine: one object holding everything dispatch needs."""

import logging
from typing import Callable, Optional

from simplify_lint.capabilities import CapabilityProbe
from simplify_lint.core.config import Config
from simplify_lint.core.finding import Diagnostic
from simplify_lint.core.forms import CallForm
from simplify_lint.core.report import Emitter
from simplify_lint.gate import WarningGate
from simplify_lint.host import EmacsBatchHost, Host
from simplify_lint.rules import default_registry
from simplify_lint.rules.base import RuleRegistry

logger = logging.getLogger(__name__)


class Engine:
    """
    Dispatches observed calls to the matchers registered for their callee.

    Attributes:
        registry: Frozen callee -> matchers mapping
        capabilities: Memoized host capability probe
        gate: Decides whether the "simplify" category is enabled
        emitter: Receives the diagnostic produced for a call
        is_rule_enabled: Predicate for skipping individual matchers
    """

    def __init__(
        self,
        registry: RuleRegistry,
        capabilities: CapabilityProbe,
        gate: WarningGate,
        emitter: Optional[Emitter] = None,
        is_rule_enabled: Optional[Callable[[str], bool]] = None,
    ):
        self.registry = registry
        self.capabilities = capabilities
        self.gate = gate
        self.emitter = emitter
        self.is_rule_enabled = is_rule_enabled or (lambda name: True)

    @classmethod
    def create(
        cls,
        config: Optional[Config] = None,
        host: Optional[Host] = None,
        sink: Optional[Callable[[str], None]] = None,
        emitter: Optional[Emitter] = None,
    ) -> "Engine":
        """Build an engine with the default rules, probing Emacs unless a host is given.

        Diagnostics go to `emitter` when one is given, otherwise to `sink`.
        """
        if config is None:
            config = Config()
        if host is None:
            host = EmacsBatchHost(config.emacs, timeout=config.probe_timeout)
        if emitter is None and sink is not None:
            emitter = Emitter(sink)

        return cls(
            registry=default_registry(),
            capabilities=CapabilityProbe(host),
            gate=WarningGate(config.warning_configuration),
            emitter=emitter,
            is_rule_enabled=config.is_rule_enabled,
        )

    def dispatch(self, call_form: CallForm) -> Optional[Diagnostic]:
        """
        Check one observed call.

        Returns:
            The first diagnostic a matcher produced, or None.
        """
        if not self.gate.enabled():
            return None

        callee = call_form.callee
        if callee is None:
            return None

        for matcher in self.registry.matchers_for(callee):
            if not self.is_rule_enabled(matcher.name):
                continue
            diagnostic = matcher.match(callee, call_form, self.capabilities)
            if diagnostic is None:
                continue

            logger.debug("%s matched %s", matcher.name, diagnostic.original)
            if self.emitter is not None:
                self.emitter.emit(diagnostic)
            return diagnostic

        return None
