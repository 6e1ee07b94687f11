"""Exceptions raised while building a dependency overview."""


class ConfigurationError(ValueError):
    """Raised when user configuration cannot be parsed."""


class DependencyResolutionError(RuntimeError):
    """Raised when a project's dependency tree cannot be obtained."""
