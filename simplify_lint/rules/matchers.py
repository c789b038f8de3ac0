"""Matchers for calls with a simpler equivalent spelling."""

from typing import Optional, Tuple

from simplify_lint.capabilities import (
    DELETE_WINDOW_OPTIONAL,
    KILL_BUFFER_OPTIONAL,
    LIST_NAVIGATION_OPTIONAL,
    CapabilityProbe,
)
from simplify_lint.core.finding import Diagnostic, Suggestion
from simplify_lint.core.forms import NIL, CallForm, Symbol, call, is_bare_call, is_nil, render
from simplify_lint.rules.base import Matcher
from simplify_lint.rules.fixed_pattern import fixed_pattern_text


def _sole_argument(call_form: CallForm):
    if len(call_form.args) != 1:
        return None
    return call_form.args[0]


class PointArgumentMatcher(Matcher):
    """(char-after (point)) is (char-after)."""

    name = "point-argument"
    description = "Position argument that defaults to (point)"
    callees: Tuple[str, ...] = ("char-after", "char-before")

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        if not is_bare_call(_sole_argument(call_form), "point"):
            return None
        return self.diagnostic(call_form, Suggestion(render(call(callee))))


class SelectedWindowMatcher(Matcher):
    """(delete-window (selected-window)) is (delete-window) where the window is optional."""

    name = "selected-window"
    description = "Window argument that defaults to (selected-window)"
    capability = DELETE_WINDOW_OPTIONAL
    callees: Tuple[str, ...] = ("delete-window",)

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        if not is_bare_call(_sole_argument(call_form), "selected-window"):
            return None
        if not capabilities.probe(self.capability):
            return None
        return self.diagnostic(
            call_form,
            Suggestion(render(call(callee)), requires=capabilities.requires(self.capability)),
        )


class KillCurrentBufferMatcher(Matcher):
    """
    (kill-buffer (current-buffer)) is (kill-buffer nil).

    Where kill-buffer's argument is optional, (kill-buffer) is offered too.
    """

    name = "kill-current-buffer"
    description = "Buffer argument that defaults to (current-buffer)"
    callees: Tuple[str, ...] = ("kill-buffer",)

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        if not is_bare_call(_sole_argument(call_form), "current-buffer"):
            return None

        suggestions = [Suggestion(render(call(callee, NIL)))]
        if capabilities.probe(KILL_BUFFER_OPTIONAL):
            suggestions.append(Suggestion(render(call(callee)), requires=capabilities.requires(KILL_BUFFER_OPTIONAL)))
        return self.diagnostic(call_form, *suggestions)


class KillNilBufferMatcher(Matcher):
    """(kill-buffer nil) is (kill-buffer) where the argument is optional."""

    name = "kill-nil-buffer"
    description = "Explicit nil buffer argument"
    capability = KILL_BUFFER_OPTIONAL
    callees: Tuple[str, ...] = ("kill-buffer",)

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        if len(call_form.args) != 1 or not is_nil(call_form.args[0]):
            return None
        if not capabilities.probe(self.capability):
            return None
        return self.diagnostic(
            call_form,
            Suggestion(render(call(callee)), requires=capabilities.requires(self.capability)),
        )


# Limit argument that equals the default bound, per search direction.
SEARCH_BOUNDS = {
    "search-forward": "point-max",
    "re-search-forward": "point-max",
    "search-backward": "point-min",
    "re-search-backward": "point-min",
}


class SearchLimitMatcher(Matcher):
    """
    A search bounded by the end it would stop at anyway.

    (search-forward "x" (point-max)) is (search-forward "x"), and the limit
    becomes nil when further arguments follow.
    """

    name = "search-limit"
    description = "Search bound equal to (point-max) or (point-min)"
    callees: Tuple[str, ...] = tuple(SEARCH_BOUNDS)

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        bound = SEARCH_BOUNDS.get(callee)
        args = call_form.args
        if bound is None or len(args) < 2 or not is_bare_call(args[1], bound):
            return None

        if len(args) == 2:
            simpler = call(callee, args[0])
        else:
            simpler = call(callee, args[0], NIL, *args[2:])
        return self.diagnostic(call_form, Suggestion(render(simpler)))


# Plain search equivalent of each regexp search.
PLAIN_SEARCHES = {
    "re-search-forward": "search-forward",
    "re-search-backward": "search-backward",
}


class FixedRegexpMatcher(Matcher):
    """(re-search-forward "abc") is (search-forward "abc")."""

    name = "fixed-regexp"
    description = "Regexp search for a pattern that matches only a literal string"
    callees: Tuple[str, ...] = tuple(PLAIN_SEARCHES)

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        plain = PLAIN_SEARCHES.get(callee)
        args = call_form.args
        if plain is None or not args:
            return None

        # Only string literals; a symbol or call could be anything at run time.
        pattern = args[0]
        if not isinstance(pattern, str):
            return None
        text = fixed_pattern_text(pattern)
        if text is None:
            return None

        simpler = CallForm(Symbol(plain), (text,) + tuple(args[1:]))
        return self.diagnostic(call_form, Suggestion(render(simpler)))


class ListCountMatcher(Matcher):
    """(down-list 1) is (down-list) where the count is optional."""

    name = "list-count"
    description = "List motion by an explicit count of 1"
    capability = LIST_NAVIGATION_OPTIONAL
    callees: Tuple[str, ...] = ("down-list", "up-list", "backward-up-list")

    def match(self, callee: str, call_form: CallForm, capabilities: CapabilityProbe) -> Optional[Diagnostic]:
        count = _sole_argument(call_form)
        if type(count) is not int or count != 1:
            return None
        if not capabilities.probe(self.capability):
            return None
        return self.diagnostic(
            call_form,
            Suggestion(render(call(callee)), requires=capabilities.requires(self.capability)),
        )


# Registration order is match order: for regexp searches the literal-pattern
# check runs before the redundant-limit check.
DEFAULT_MATCHERS = (
    PointArgumentMatcher(),
    SelectedWindowMatcher(),
    KillCurrentBufferMatcher(),
    KillNilBufferMatcher(),
    FixedRegexpMatcher(),
    SearchLimitMatcher(),
    ListCountMatcher(),
)
