"""
Matcher file loading.

Matcher files are JSON or YAML documents in one of three shapes:
- {"problemMatcher": [matcher, ...]} as registered with CI runners
- a bare list of matchers
- a single matcher object
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .core.validator import validate_matcher
from .errors import ConfigError
from .schemas.matcher import PatternDescription

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def _read_document(path: Path) -> Any:
    """Parse a matcher file according to its extension"""
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ConfigError(f"Matcher file {path} is not valid UTF-8: {e}") from e

    suffix = path.suffix.lower()

    try:
        if suffix == '.json':
            return json.loads(text)
        if suffix in YAML_SUFFIXES:
            return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse matcher file {path}: {e}") from e

    raise ConfigError(f"Unsupported matcher file type '{path.suffix}' (expected .json, .yaml or .yml)")


def parse_matchers(document: Any) -> List[PatternDescription]:
    """Build matcher descriptions from an already parsed document"""
    if isinstance(document, dict) and 'problemMatcher' in document:
        entries = document['problemMatcher']
    elif isinstance(document, list):
        entries = document
    else:
        entries = [document]

    if not isinstance(entries, list) or not entries:
        raise ConfigError("Matcher file does not contain any matchers")

    matchers = []
    for entry in entries:
        validate_matcher(entry)
        matchers.append(PatternDescription.from_dict(entry))
    return matchers


def load_matchers(path: Path) -> List[PatternDescription]:
    """
    Load every matcher from a JSON or YAML matcher file.

    Args:
        path: Path to the matcher file

    Returns:
        Matchers in file order

    Raises:
        FileNotFoundError: if the file does not exist
        ConfigError: if the file cannot be parsed or holds an invalid matcher
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Matcher file not found: {path}")

    matchers = parse_matchers(_read_document(path))
    logger.info("Loaded %d matcher(s) from %s: %s", len(matchers), path,
                ', '.join(matcher.owner for matcher in matchers))
    return matchers


def select_matcher(matchers: List[PatternDescription], owner: Optional[str] = None) -> PatternDescription:
    """
    Pick the matcher to run.

    Without an owner the list must hold exactly one matcher.
    """
    if owner is None:
        if len(matchers) != 1:
            owners = ', '.join(matcher.owner for matcher in matchers)
            raise ConfigError(f"Matcher file defines several matchers ({owners}); choose one with --owner")
        return matchers[0]

    for matcher in matchers:
        if matcher.owner == owner:
            logger.debug("Selected matcher %s", owner)
            return matcher

    raise ConfigError(f"No matcher with owner '{owner}' found")
