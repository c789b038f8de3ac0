"""
Simplification rules.

Each matcher recognises one call shape with a simpler equivalent. The
default registry maps every callee to its matchers in match order.
"""

from typing import Dict, Iterable

from simplify_lint.rules.base import Matcher, RuleRegistry
from simplify_lint.rules.fixed_pattern import fixed_pattern_text, is_fixed_pattern
from simplify_lint.rules.matchers import DEFAULT_MATCHERS


def build_registry(matchers: Iterable[Matcher]) -> RuleRegistry:
    """Register matchers under their callees, in the given order, and freeze."""
    registry = RuleRegistry()
    for matcher in matchers:
        for callee in matcher.callees:
            registry.register(callee, [matcher])
    return registry.freeze()


def default_registry() -> RuleRegistry:
    """Build the registry of all built-in matchers."""
    return build_registry(DEFAULT_MATCHERS)


def list_rules() -> Dict[str, Dict]:
    """List all available rules."""
    return {
        matcher.name: {
            "description": matcher.description,
            "callees": list(matcher.callees),
            "capability": matcher.capability,
        }
        for matcher in DEFAULT_MATCHERS
    }


__all__ = [
    "Matcher",
    "RuleRegistry",
    "build_registry",
    "default_registry",
    "fixed_pattern_text",
    "is_fixed_pattern",
    "list_rules",
]
