"""Tests for the simplification matchers."""

import pytest

from simplify_lint.capabilities import (
    DELETE_WINDOW_OPTIONAL,
    KILL_BUFFER_OPTIONAL,
    LIST_NAVIGATION_OPTIONAL,
)
from simplify_lint.core.forms import NIL, Symbol, call
from simplify_lint.rules.matchers import (
    FixedRegexpMatcher,
    KillCurrentBufferMatcher,
    KillNilBufferMatcher,
    ListCountMatcher,
    PointArgumentMatcher,
    SearchLimitMatcher,
    SelectedWindowMatcher,
)


def forms(diagnostic):
    return [s.form for s in diagnostic.suggestions]


def test_char_after_point(make_probe):
    """Test that (char-after (point)) drops its argument."""
    diagnostic = PointArgumentMatcher().match("char-after", call("char-after", call("point")), make_probe())

    assert diagnostic is not None
    assert diagnostic.original == "(char-after (point))"
    assert forms(diagnostic) == ["(char-after)"]
    assert diagnostic.category == "simplify"
    assert diagnostic.to_dict()["suggestions"] == [{"form": "(char-after)", "requires": None}]


def test_char_before_other_position(make_probe):
    """Test that a position other than (point) is left alone."""
    matcher = PointArgumentMatcher()

    assert matcher.match("char-before", call("char-before", call("point-min")), make_probe()) is None
    assert matcher.match("char-before", call("char-before", call("point", 1)), make_probe()) is None
    assert matcher.match("char-before", call("char-before"), make_probe()) is None


def test_delete_selected_window_with_capability(make_probe):
    """Test that deleting the selected window drops the argument when it is optional."""
    call_form = call("delete-window", call("selected-window"))
    diagnostic = SelectedWindowMatcher().match("delete-window", call_form, make_probe(DELETE_WINDOW_OPTIONAL))

    assert forms(diagnostic) == ["(delete-window)"]
    assert diagnostic.suggestions[0].requires == "Emacs 22 up"
    assert "(Emacs 22 up)" in diagnostic.message


def test_delete_selected_window_without_capability(make_probe):
    """Test that the window rule stays quiet when the host needs the argument."""
    call_form = call("delete-window", call("selected-window"))

    assert SelectedWindowMatcher().match("delete-window", call_form, make_probe()) is None


def test_kill_current_buffer_without_capability(make_probe):
    """Test that killing the current buffer suggests nil when the argument is required."""
    call_form = call("kill-buffer", call("current-buffer"))
    diagnostic = KillCurrentBufferMatcher().match("kill-buffer", call_form, make_probe())

    assert forms(diagnostic) == ["(kill-buffer nil)"]
    assert diagnostic.suggestions[0].requires is None
    assert diagnostic.message == "`(kill-buffer (current-buffer))' can be simplified to `(kill-buffer nil)'"


def test_kill_current_buffer_with_capability(make_probe):
    """Test that both the nil and the no-argument forms are offered when the argument is optional."""
    call_form = call("kill-buffer", call("current-buffer"))
    diagnostic = KillCurrentBufferMatcher().match("kill-buffer", call_form, make_probe(KILL_BUFFER_OPTIONAL))

    assert forms(diagnostic) == ["(kill-buffer nil)", "(kill-buffer)"]
    assert [s.requires for s in diagnostic.suggestions] == [None, "Emacs 23 up"]
    assert diagnostic.message == ("`(kill-buffer (current-buffer))' can be simplified to "
                                  "`(kill-buffer nil)', or `(kill-buffer)' (Emacs 23 up)")


def test_kill_nil_buffer(make_probe):
    """Test that (kill-buffer nil) drops nil only when the argument is optional."""
    matcher = KillNilBufferMatcher()
    call_form = call("kill-buffer", NIL)

    assert matcher.match("kill-buffer", call_form, make_probe()) is None
    diagnostic = matcher.match("kill-buffer", call_form, make_probe(KILL_BUFFER_OPTIONAL))
    assert forms(diagnostic) == ["(kill-buffer)"]
    assert diagnostic.suggestions[0].requires == "Emacs 23 up"


def test_kill_named_buffer(make_probe):
    """Test that killing some other buffer is not reported."""
    call_form = call("kill-buffer", "*scratch*")
    probe = make_probe(KILL_BUFFER_OPTIONAL)

    assert KillCurrentBufferMatcher().match("kill-buffer", call_form, probe) is None
    assert KillNilBufferMatcher().match("kill-buffer", call_form, probe) is None


@pytest.mark.parametrize(
    "callee, bound",
    [
        ("search-forward", "point-max"),
        ("re-search-forward", "point-max"),
        ("search-backward", "point-min"),
        ("re-search-backward", "point-min"),
    ],
)
def test_search_limit_is_default_bound(make_probe, callee, bound):
    """Test that a bound equal to the end of the search direction is dropped."""
    diagnostic = SearchLimitMatcher().match(callee, call(callee, Symbol("str"), call(bound)), make_probe())

    assert forms(diagnostic) == [f"({callee} str)"]


def test_search_limit_replaced_by_nil_before_more_args(make_probe):
    """Test that the limit becomes nil when NOERROR follows it."""
    call_form = call("search-forward", "x", call("point-max"), Symbol("t"))
    diagnostic = SearchLimitMatcher().match("search-forward", call_form, make_probe())

    assert forms(diagnostic) == ['(search-forward "x" nil t)']


def test_search_limit_wrong_direction(make_probe):
    """Test that (point-min) is a real bound for a forward search."""
    matcher = SearchLimitMatcher()

    assert matcher.match("search-forward", call("search-forward", "x", call("point-min")), make_probe()) is None
    assert matcher.match("search-backward", call("search-backward", "x", call("point-max")), make_probe()) is None
    assert matcher.match("search-forward", call("search-forward", "x"), make_probe()) is None


def test_fixed_regexp_to_plain_search(make_probe):
    """Test that a literal regexp search becomes a plain search."""
    call_form = call("re-search-backward", "foo\\.el", NIL, Symbol("t"))
    diagnostic = FixedRegexpMatcher().match("re-search-backward", call_form, make_probe())

    assert forms(diagnostic) == ['(search-backward "foo.el" nil t)']
    assert diagnostic.original == '(re-search-backward "foo\\\\.el" nil t)'


def test_fixed_regexp_needs_string_literal(make_probe):
    """Test that a pattern held in a variable is never reported."""
    matcher = FixedRegexpMatcher()

    assert matcher.match("re-search-forward", call("re-search-forward", Symbol("regexp")), make_probe()) is None
    assert matcher.match("re-search-forward", call("re-search-forward", "a.b"), make_probe()) is None
    assert matcher.match("re-search-forward", call("re-search-forward"), make_probe()) is None


@pytest.mark.parametrize("callee", ["down-list", "up-list", "backward-up-list"])
def test_list_count_with_capability(make_probe, callee):
    """Test that a count of 1 is dropped where the count is optional."""
    diagnostic = ListCountMatcher().match(callee, call(callee, 1), make_probe(LIST_NAVIGATION_OPTIONAL))

    assert forms(diagnostic) == [f"({callee})"]
    assert diagnostic.suggestions[0].requires == "Emacs 22 up"


def test_list_count_without_capability(make_probe):
    """Test that a count of 1 is kept where list motion needs its argument."""
    assert ListCountMatcher().match("down-list", call("down-list", 1), make_probe()) is None


def test_list_count_other_counts(make_probe):
    """Test that counts other than the integer 1 are left alone."""
    matcher = ListCountMatcher()
    probe = make_probe(LIST_NAVIGATION_OPTIONAL)

    assert matcher.match("up-list", call("up-list", 2), probe) is None
    assert matcher.match("up-list", call("up-list", True), probe) is None
    assert matcher.match("up-list", call("up-list", "1"), probe) is None


def test_capability_not_probed_when_shape_differs(make_probe):
    """Test that gated matchers only probe once the call shape matched."""
    probe = make_probe(LIST_NAVIGATION_OPTIONAL)

    ListCountMatcher().match("up-list", call("up-list", 3), probe)

    assert probe.known() == {}
    assert probe.host.opened == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
