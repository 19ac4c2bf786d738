"""
Matching engine.

Selects how a matcher description is applied to tool output:
1. Single pattern: every line is matched independently
2. Loop: a header line establishes context that is shared by the run of
   detail lines following it, until a detail line fails to match
Any other shape is rejected.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Union

from ..errors import UnsupportedConfigurationError
from ..schemas.matcher import PatternDescription, Record, compile_regexp
from .extractor import extract
from .validator import validate_input, validate_matcher

logger = logging.getLogger(__name__)


class MatchMode(Enum):
    """Configuration shapes the engine can run"""
    SINGLE = "single"
    LOOP = "loop"


def select_mode(matcher: PatternDescription) -> MatchMode:
    """
    Classify a validated matcher description.

    Raises:
        UnsupportedConfigurationError: if there are several sub-patterns and only
            the last one is not a loop pattern
    """
    if len(matcher.pattern) == 1:
        return MatchMode.SINGLE

    header_patterns = matcher.pattern[:-1]
    if matcher.loop_pattern and not any(sub_pattern.loop for sub_pattern in header_patterns):
        return MatchMode.LOOP

    raise UnsupportedConfigurationError(
        "Unsupported pattern configuration. We currently support single pattern "
        "and multi-line loop pattern configurations"
    )


def match_single(matcher: PatternDescription, input_text: str) -> List[Record]:
    """Apply the only sub-pattern to each line, keeping the lines that match"""
    sub_pattern = matcher.pattern[0]
    regex = compile_regexp(0, sub_pattern.regexp)

    records = []
    for line in input_text.split('\n'):
        record = extract(regex, line, sub_pattern, matcher.severity)
        if record is None:
            continue
        records.append(record)

    return records


def match_loop(matcher: PatternDescription, input_text: str) -> List[Record]:
    """
    Apply header sub-patterns then the trailing loop sub-pattern.

    Each cycle takes one header line and runs every header sub-pattern against
    it. The loop sub-pattern then consumes following lines until one does not
    match; that line is left in place and becomes the next header candidate.
    Empty lines inside a detail run are skipped.
    """
    header_patterns = [
        (sub_pattern, compile_regexp(index, sub_pattern.regexp))
        for index, sub_pattern in enumerate(matcher.pattern[:-1])
    ]
    loop_pattern = matcher.pattern[-1]
    loop_regex = compile_regexp(len(matcher.pattern) - 1, loop_pattern.regexp)

    lines = input_text.split('\n')
    cursor = 0
    records = []

    while cursor < len(lines):
        context: Record = {}
        header = lines[cursor]
        cursor += 1

        for sub_pattern, regex in header_patterns:
            fields = extract(regex, header, sub_pattern, matcher.severity)
            if fields is not None:
                context.update(fields)

        while cursor < len(lines):
            line = lines[cursor]
            if line == "":
                cursor += 1
                continue

            fields = extract(loop_regex, line, loop_pattern, matcher.severity)
            if fields is None:
                break

            cursor += 1
            records.append({**context, **fields})

    return records


def match(matcher: Union[PatternDescription, Mapping, None], input_text: Any) -> List[Record]:
    """
    Extract diagnostic records from tool output.

    Args:
        matcher: PatternDescription, or a raw matcher mapping as found in matcher files
        input_text: complete tool output, lines separated by a line feed

    Returns:
        Records in the order they were found

    Raises:
        ConfigError: malformed matcher or bad capture group mapping
        InputError: missing or empty input
        UnsupportedConfigurationError: matcher shape is neither single nor loop
    """
    validate_matcher(matcher)
    validate_input(input_text)

    if not isinstance(matcher, PatternDescription):
        matcher = PatternDescription.from_dict(matcher)

    mode = select_mode(matcher)
    logger.debug("Matching with %s (%s mode, %d sub-patterns)", matcher.owner, mode.value, len(matcher.pattern))

    if mode is MatchMode.SINGLE:
        records = match_single(matcher, input_text)
    else:
        records = match_loop(matcher, input_text)

    logger.debug("%s produced %d records", matcher.owner, len(records))
    return records


class ProblemMatcher:
    """
    Applies one matcher description to any number of inputs.

    Holds only the validated description; every call to match() starts from
    scratch.
    """

    def __init__(self, matcher: Union[PatternDescription, Mapping]):
        validate_matcher(matcher)
        if not isinstance(matcher, PatternDescription):
            matcher = PatternDescription.from_dict(matcher)
        select_mode(matcher)
        self.description = matcher

    @property
    def owner(self) -> str:
        return self.description.owner

    def match(self, input_text: str) -> List[Record]:
        return match(self.description, input_text)
