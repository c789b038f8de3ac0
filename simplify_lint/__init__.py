"""
simplify-lint - Simplification warnings for Emacs Lisp byte compilation.

This package inspects call forms as the compiler observes them and reports
calls that have a simpler equivalent spelling, such as an argument that
equals its default or a regexp search for a literal string.
"""

__version__ = "0.1.0"

from simplify_lint.core.config import Config
from simplify_lint.core.finding import Diagnostic, Finding
from simplify_lint.core.forms import CallForm, Symbol, call
from simplify_lint.engine import Engine

__all__ = ["CallForm", "Config", "Diagnostic", "Engine", "Finding", "Symbol", "call", "__version__"]
