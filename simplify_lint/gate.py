"""Deciding whether the "simplify" warning category is currently enabled."""

import logging
from typing import Any, Callable

from simplify_lint.core.config import AllWarnings, ExcludeWarnings, IncludeWarnings
from simplify_lint.core.finding import CATEGORY

logger = logging.getLogger(__name__)


class WarningGate:
    """
    Reads the host's warning configuration on every check.

    The configuration is owned by the host and may change between any two
    calls, so nothing is cached. Shapes the gate does not recognise count as
    disabled.
    """

    def __init__(self, read_configuration: Callable[[], Any], category: str = CATEGORY):
        self.read_configuration = read_configuration
        self.category = category

    def enabled(self) -> bool:
        """Check if the category is enabled right now."""
        try:
            configuration = self.read_configuration()
        except Exception as e:
            logger.warning("Cannot read warning configuration, %s disabled: %s", self.category, e)
            return False

        if isinstance(configuration, AllWarnings):
            return True
        if isinstance(configuration, ExcludeWarnings):
            return self.category not in configuration.categories
        if isinstance(configuration, IncludeWarnings):
            return self.category in configuration.categories
        return False
