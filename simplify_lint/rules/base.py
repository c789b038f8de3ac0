"""Base classes for the rule registry."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from simplify_lint.core.errors import RegistryFrozenError
from simplify_lint.core.finding import Diagnostic, Suggestion
from simplify_lint.core.forms import CallForm, render

if TYPE_CHECKING:
    from simplify_lint.capabilities import CapabilityProbe


class Matcher(ABC):
    """
    Base class for simplification matchers.

    A matcher looks at one call and either returns a Diagnostic or None.
    Calls of an unexpected shape are simply not matched.
    """

    #: Short name for this matcher, used in configuration and output.
    name: str = ""

    #: Human-readable description of what this matcher detects.
    description: str = ""

    #: Capability the matcher depends on, if any.
    capability: Optional[str] = None

    #: Callees this matcher is registered for by default.
    callees: Tuple[str, ...] = ()

    @abstractmethod
    def match(self, callee: str, call_form: CallForm, capabilities: "CapabilityProbe") -> Optional[Diagnostic]:
        """
        Check a call for a simpler spelling.

        Args:
            callee: Name of the function being called
            call_form: The observed call
            capabilities: Probe for host capabilities

        Returns:
            A Diagnostic if the call can be simplified, or None.
        """
        pass

    def diagnostic(self, call_form: CallForm, *suggestions: Suggestion) -> Diagnostic:
        """Build a diagnostic for `call_form` attributed to this matcher."""
        return Diagnostic(rule=self.name, original=render(call_form), suggestions=tuple(suggestions))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class RuleRegistry:
    """
    Maps callee names to the ordered matchers tried for them.

    Populated once at startup and frozen; lookups of unknown callees
    return no matchers.
    """

    def __init__(self):
        self._rules: Dict[str, List[Matcher]] = {}
        self._frozen = False

    def register(self, callee: str, matchers: Iterable[Matcher]) -> None:
        """
        Append matchers for a callee, after any already registered.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {callee!r}: registry is frozen")
        self._rules.setdefault(callee, []).extend(matchers)

    def freeze(self) -> "RuleRegistry":
        """Make the registry read-only."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def matchers_for(self, callee: str) -> Tuple[Matcher, ...]:
        """Get the matchers for a callee, in registration order."""
        return tuple(self._rules.get(callee, ()))

    def callees(self) -> List[str]:
        """Get all callees with registered matchers."""
        return sorted(self._rules)

    def rules(self) -> List[Matcher]:
        """Get every distinct registered matcher."""
        seen: List[Matcher] = []
        for matchers in self._rules.values():
            for matcher in matchers:
                if matcher not in seen:
                    seen.append(matcher)
        return seen

    def __contains__(self, callee: str) -> bool:
        return callee in self._rules
