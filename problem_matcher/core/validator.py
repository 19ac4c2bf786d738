"""
Precondition checks run once per invocation, before any line is examined.

These only look at the structure of a matcher description. Capture group
indices are checked lazily by the field extractor when a line matches.
"""

from collections.abc import Mapping
from typing import Any, Optional

from ..errors import ConfigError, InputError


def _attribute(matcher: Any, name: str) -> Any:
    """Read an attribute from either a raw mapping or a PatternDescription"""
    if isinstance(matcher, Mapping):
        return matcher.get(name)
    return getattr(matcher, name, None)


def validate_matcher(matcher: Any) -> None:
    """
    Check that a matcher description is structurally well-formed.

    Args:
        matcher: raw mapping (as loaded from a matcher file) or PatternDescription

    Raises:
        ConfigError: if the description, its owner or its pattern list is missing,
            or the pattern list is not a non-empty sequence
    """
    if matcher is None:
        raise ConfigError("No matcher provided")

    if not _attribute(matcher, 'owner'):
        raise ConfigError("No matcher.owner provided")

    pattern = _attribute(matcher, 'pattern')
    if pattern is None:
        raise ConfigError("No matcher.pattern provided")

    if not isinstance(pattern, (list, tuple)) or len(pattern) < 1:
        raise ConfigError("matcher.pattern must be an array with at least one value")


def validate_input(input_text: Optional[str]) -> None:
    """
    Check that there is tool output to match.

    Raises:
        InputError: if the input is missing, empty or not text
    """
    if input_text is None or input_text == "":
        raise InputError("No input provided")

    if not isinstance(input_text, str):
        raise InputError(f"Input must be a string, got {type(input_text).__name__}")
