"""
Matcher description and diagnostic record schema.

A matcher description is the declarative input of the engine: an owner, an
optional default severity and an ordered list of sub-patterns. The field
mapping of a sub-pattern is open-ended, so records are plain string mappings
rather than a fixed structure.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ConfigError

# Field name -> trimmed captured value
Record = Dict[str, str]

# Well-known record fields. Matchers may declare any other field name.
KNOWN_FIELDS = ('file', 'line', 'column', 'severity', 'message', 'code')

RESERVED_KEYS = ('regexp', 'loop')


def compile_regexp(index: int, regexp: str) -> re.Pattern:
    """Compile a sub-pattern expression, reporting failures as ConfigError"""
    try:
        return re.compile(regexp)
    except re.error as e:
        raise ConfigError(f"matcher.pattern[{index}].regexp is not a valid regular expression: {e}") from e


def _group_index(value: Any) -> Any:
    """Numeric strings such as "2" (common in YAML files) name a group like 2 does"""
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


@dataclass
class SubPattern:
    """One regular expression plus its field to capture group mapping"""
    regexp: str
    fields: Dict[str, int] = field(default_factory=dict)
    loop: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"regexp": self.regexp}
        result.update(self.fields)
        if self.loop:
            result["loop"] = True
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "SubPattern":
        """Build a sub-pattern; every key except regexp and loop is a field mapping"""
        if not isinstance(data, Mapping):
            raise ConfigError(f"matcher.pattern[{index}] must be an object")

        regexp = data.get("regexp")
        if not isinstance(regexp, str):
            raise ConfigError(f"matcher.pattern[{index}].regexp must be a string")
        compile_regexp(index, regexp)

        return cls(
            regexp=regexp,
            fields={key: _group_index(value) for key, value in data.items() if key not in RESERVED_KEYS},
            loop=bool(data.get("loop", False)),
        )


@dataclass
class PatternDescription:
    """
    A complete problem matcher.

    Only two shapes can be run: a single sub-pattern, or any number of header
    sub-patterns followed by one trailing sub-pattern with loop set.
    """
    owner: str
    pattern: List[SubPattern] = field(default_factory=list)
    severity: Optional[str] = None

    @property
    def loop_pattern(self) -> Optional[SubPattern]:
        """The trailing repeating sub-pattern, if the description has one"""
        if self.pattern and self.pattern[-1].loop:
            return self.pattern[-1]
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the mapping format used by matcher files"""
        result: Dict[str, Any] = {"owner": self.owner}
        if self.severity is not None:
            result["severity"] = self.severity
        result["pattern"] = [sub_pattern.to_dict() for sub_pattern in self.pattern]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatternDescription":
        """
        Build a PatternDescription from a raw mapping.

        The mapping must already have passed validate_matcher; sub-patterns are
        checked here as they are built.
        """
        return cls(
            owner=data["owner"],
            pattern=[SubPattern.from_dict(entry, index) for index, entry in enumerate(data["pattern"])],
            severity=data.get("severity"),
        )
