"""Problem matcher exceptions."""


class ProblemMatcherError(Exception):
    """Base exception for all problem matcher errors."""

    pass


class ConfigError(ProblemMatcherError):
    """Raised when a matcher description is missing, malformed or references bad capture groups."""

    pass


class InputError(ProblemMatcherError):
    """Raised when there is no tool output to match against."""

    pass


class UnsupportedConfigurationError(ProblemMatcherError):
    """Raised when the shape of a matcher description is not one the engine can run."""

    pass
