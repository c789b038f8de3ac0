"""Core data structures and utilities for simplify_lint."""

from simplify_lint.core.config import Config
from simplify_lint.core.finding import Diagnostic, Finding, Suggestion
from simplify_lint.core.forms import CallForm, Symbol

__all__ = ["CallForm", "Config", "Diagnostic", "Finding", "Suggestion", "Symbol"]
