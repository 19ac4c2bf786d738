"""
Field extraction for a single line.

This is the only place capture group indices are checked, so a broken field
mapping surfaces the first time one of its lines matches.
"""

import re
from typing import Optional

from ..errors import ConfigError
from ..schemas.matcher import Record, SubPattern


def extract(regex: re.Pattern, line: str, sub_pattern: SubPattern,
            default_severity: Optional[str] = None) -> Optional[Record]:
    """
    Apply a sub-pattern expression to one line and resolve its fields.

    Args:
        regex: compiled expression of the sub-pattern
        line: one line of tool output
        sub_pattern: supplies the field to capture group mapping
        default_severity: used when the sub-pattern does not capture a severity

    Returns:
        Record of trimmed captures, or None if the line does not match

    Raises:
        ConfigError: if a field maps to group 0 or to a group that did not capture
    """
    match = regex.search(line)
    if not match:
        return None

    group_count = len(match.groups())
    record: Record = {}

    for name, index in sub_pattern.fields.items():
        valid_type = isinstance(index, int) and not isinstance(index, bool)
        if valid_type and index == 0:
            raise ConfigError("Group 0 is not a valid capture group (it contains the entire matched string)")

        value = None
        if valid_type and 0 < index <= group_count:
            value = match.group(index)

        if not value:
            raise ConfigError(
                f"Invalid capture group provided. Group {index} ({name}) does not exist in regexp"
            )

        record[name] = value.strip()

    if not record.get('severity') and default_severity is not None:
        record['severity'] = default_severity

    return record
