"""
Recognising regexps that can only match one literal string.

The check is syntactic and deliberately narrow. A pattern is fixed when it is
made only of ordinary characters, backslash-escaped special characters and
single-character bracket classes such as ``[.]``. Anything else, including
every backslash-letter construct (``\\w``, ``\\b``, ``\\_<``), is not fixed.
"""

import re
from typing import Optional

SPECIAL_CHARS = ".*+?[^$\\"

_SPECIAL_CLASS = re.escape(SPECIAL_CHARS)

_FIXED_PATTERN_RE = re.compile(
    rf"(?:[^{_SPECIAL_CLASS}]"  # ordinary character
    rf"|\\[{_SPECIAL_CLASS}]"  # escaped special
    r"|\[[^\]^]\])*"  # single-character class
)

_ATOM_RE = re.compile(rf"\\([{_SPECIAL_CLASS}])|\[([^\]^])\]|(.)", re.DOTALL)


def is_fixed_pattern(pattern: str) -> bool:
    """Check if a regexp matches exactly one literal string."""
    return _FIXED_PATTERN_RE.fullmatch(pattern) is not None


def fixed_pattern_text(pattern: str) -> Optional[str]:
    """
    Get the literal string a fixed regexp matches.

    Returns:
        The unescaped text, or None if the pattern is not fixed.
    """
    if not is_fixed_pattern(pattern):
        return None
    return "".join(m.group(1) or m.group(2) or m.group(3) for m in _ATOM_RE.finditer(pattern))
