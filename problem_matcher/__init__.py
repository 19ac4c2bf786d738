"""
Problem matcher engine.

Turns unstructured tool output (compiler and linter logs) into diagnostic
records using a declarative matcher description.
"""

from .core.matcher import ProblemMatcher, match
from .errors import ConfigError, InputError, ProblemMatcherError, UnsupportedConfigurationError
from .schemas.matcher import PatternDescription, Record, SubPattern

__version__ = "1.0.0"

__all__ = [
    'match',
    'ProblemMatcher',
    'PatternDescription',
    'SubPattern',
    'Record',
    'ProblemMatcherError',
    'ConfigError',
    'InputError',
    'UnsupportedConfigurationError',
]
