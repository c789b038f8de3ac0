"""Probing which optional-argument behaviors the running host supports."""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from simplify_lint.host import Host

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capability:
    """
    A boolean fact about the host, decided by evaluating a probe form.

    Attributes:
        name: Capability identifier used by matchers
        description: What the capability means
        form: Form evaluated in a scratch context; success means present
        requires: Host version class that introduced the behavior
    """
    name: str
    description: str
    form: str
    requires: str


KILL_BUFFER_OPTIONAL = "kill-buffer-optional"
DELETE_WINDOW_OPTIONAL = "delete-window-optional"
LIST_NAVIGATION_OPTIONAL = "list-navigation-optional"

CAPABILITIES: Dict[str, Capability] = {
    KILL_BUFFER_OPTIONAL: Capability(
        name=KILL_BUFFER_OPTIONAL,
        description="kill-buffer accepts zero arguments",
        form="(with-temp-buffer (kill-buffer))",
        requires="Emacs 23 up",
    ),
    DELETE_WINDOW_OPTIONAL: Capability(
        name=DELETE_WINDOW_OPTIONAL,
        description="delete-window accepts zero arguments",
        form="(save-window-excursion (split-window) (delete-window))",
        requires="Emacs 22 up",
    ),
    LIST_NAVIGATION_OPTIONAL: Capability(
        name=LIST_NAVIGATION_OPTIONAL,
        description="down-list, up-list and backward-up-list accept zero arguments",
        form=('(with-temp-buffer (insert "(())") (goto-char (point-min))'
              " (down-list) (up-list) (backward-up-list))"),
        requires="Emacs 22 up",
    ),
}


class CapabilityProbe:
    """
    Lazily probes capabilities and remembers the answers.

    Each capability is probed at most once per probe object. A failing
    probe is an answer ("absent"), never an error.
    """

    def __init__(self, host: Optional[Host], capabilities: Optional[Dict[str, Capability]] = None):
        self.host = host
        self.capabilities = dict(CAPABILITIES if capabilities is None else capabilities)
        self._results: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def probe(self, name: str) -> bool:
        """Check if the host has capability `name`."""
        try:
            return self._results[name]
        except KeyError:
            pass

        # Computed outside the lock; a racing duplicate computes the same answer.
        present = self._compute(name)
        with self._lock:
            return self._results.setdefault(name, present)

    def describe(self, name: str) -> Optional[Capability]:
        """Get the definition of a capability."""
        return self.capabilities.get(name)

    def requires(self, name: str) -> Optional[str]:
        """Get the host version class a capability stands for."""
        capability = self.capabilities.get(name)
        return capability.requires if capability else None

    def known(self) -> Dict[str, bool]:
        """Snapshot of the capabilities probed so far."""
        with self._lock:
            return dict(self._results)

    def _compute(self, name: str) -> bool:
        capability = self.capabilities.get(name)
        if capability is None:
            logger.warning("Unknown capability %r treated as absent", name)
            return False
        if self.host is None:
            logger.debug("No host to probe %s, treated as absent", name)
            return False

        try:
            with self.host.scratch() as session:
                session.evaluate(capability.form)
        except Exception as e:
            logger.debug("Capability %s absent: %s", name, e)
            return False

        logger.debug("Capability %s present", name)
        return True
