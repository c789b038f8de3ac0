"""Data structures for representing simplification diagnostics."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

CATEGORY = "simplify"


@dataclass(frozen=True)
class Suggestion:
    """
    A simpler spelling of a call.

    Attributes:
        form: The suggested form, printed as Lisp
        requires: Host version class the form needs (e.g. "Emacs 23 up"),
            or None when it is valid everywhere
    """
    form: str
    requires: Optional[str] = None

    def __str__(self) -> str:
        if self.requires:
            return f"`{self.form}' ({self.requires})"
        return f"`{self.form}'"


@dataclass(frozen=True)
class Diagnostic:
    """
    Represents a single simplification found in an observed call.

    No location is carried; the sink the diagnostic is emitted to knows
    where the compiler currently is.

    Attributes:
        rule: Name of the matcher that produced this diagnostic
        original: The observed call, printed as Lisp
        suggestions: Simpler forms, most portable first
        category: Warning category, always "simplify"
    """
    rule: str
    original: str
    suggestions: Tuple[Suggestion, ...]
    category: str = CATEGORY

    @property
    def message(self) -> str:
        """Format the diagnostic as a compiler warning message."""
        alternatives = ", or ".join(str(s) for s in self.suggestions)
        return f"`{self.original}' can be simplified to {alternatives}"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Convert diagnostic to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "rule": self.rule,
            "original": self.original,
            "suggestions": [{"form": s.form, "requires": s.requires} for s in self.suggestions],
            "message": self.message,
        }


@dataclass
class Finding:
    """
    A warning message with the location the host attached to it.

    Attributes:
        source: Name of the input the call was read from
        line: Line number (1-indexed)
        message: The formatted diagnostic message
        category: Warning category of the message
        rule: Name of the matcher that produced the message, if known
        context: Optional extra text (e.g. the enclosing top-level form)
    """
    source: str
    line: int
    message: str
    category: str = CATEGORY
    rule: Optional[str] = None
    context: Optional[str] = field(default=None)

    def __str__(self) -> str:
        """Format finding as human-readable string."""
        return f"{self.source}:{self.line}: warning ({self.category}): {self.message}"

    def to_dict(self) -> dict:
        """Convert finding to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "line": self.line,
            "category": self.category,
            "rule": self.rule,
            "message": self.message,
            "context": self.context,
        }
