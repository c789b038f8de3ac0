"""
Extension point through which a compiler reports the calls it compiles.

The compiler reaches calls through more than one path (whole forms, and
paths specialised by argument count). Every path normalizes to a CallForm
and notifies the observers once, so the engine sees a single event per call.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, List

from simplify_lint.core.forms import CallForm, Symbol

if TYPE_CHECKING:
    from simplify_lint.engine import Engine

logger = logging.getLogger(__name__)

CallObserver = Callable[[CallForm], Any]


class CompilerHooks:
    """Registry of call observers plus the entry points that feed them."""

    def __init__(self):
        self._observers: List[CallObserver] = []

    @property
    def observers(self) -> List[CallObserver]:
        return list(self._observers)

    def add_call_observer(self, observer: CallObserver) -> None:
        """Register an observer; adding it twice has no effect."""
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_call_observer(self, observer: CallObserver) -> None:
        """Unregister an observer; removing an unknown observer has no effect."""
        if observer in self._observers:
            self._observers.remove(observer)

    def compile_call(self, form: CallForm) -> None:
        """Entry point for a whole call form."""
        self._notify(form)

    def compile_call_args(self, head: Any, *args: Any) -> None:
        """Entry point for paths that receive the callee and arguments separately."""
        if isinstance(head, str):
            head = Symbol(head)
        self._notify(CallForm(head, tuple(args)))

    def _notify(self, form: CallForm) -> None:
        for observer in list(self._observers):
            observer(form)


class Installation:
    """Handle for an engine installed on a set of hooks."""

    def __init__(self, hooks: CompilerHooks, observer: CallObserver):
        self.hooks = hooks
        self.observer = observer

    @property
    def installed(self) -> bool:
        return self.observer in self.hooks.observers

    def uninstall(self) -> None:
        """Remove the engine's observer from the hooks."""
        self.hooks.remove_call_observer(self.observer)
        logger.debug("Uninstalled call observer")


def install(engine: "Engine", hooks: CompilerHooks) -> Installation:
    """Register `engine.dispatch` as a call observer on `hooks`."""
    observer = engine.dispatch
    hooks.add_call_observer(observer)
    logger.debug("Installed call observer")
    return Installation(hooks, observer)
