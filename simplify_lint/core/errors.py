"""Exception types for simplify_lint."""


class SimplifyLintError(Exception):
    """Base class for all simplify_lint errors."""


class FormError(SimplifyLintError, ValueError):
    """Raised when call-form data cannot be decoded."""


class HostError(SimplifyLintError):
    """Raised when the host fails to evaluate a form."""


class ConfigError(SimplifyLintError):
    """Raised when a configuration file cannot be read."""


class RegistryFrozenError(SimplifyLintError):
    """Raised when registering matchers after the registry was frozen."""
