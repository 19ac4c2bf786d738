"""Tests for matcher and input validation."""

import pytest

from problem_matcher import ConfigError, InputError, PatternDescription, SubPattern, match
from problem_matcher.core.validator import validate_input, validate_matcher

valid_matcher = {
    "owner": "test-matcher",
    "severity": "Error",
    "pattern": [{"regexp": "^([^:]+):([^:]+):([^:]+)$", "message": 1, "file": 2, "line": 3}],
}


def test_missing_matcher():
    with pytest.raises(ConfigError, match="No matcher provided"):
        match(None, "error::Something went wrong")


def test_missing_owner():
    with pytest.raises(ConfigError, match=r"No matcher\.owner provided"):
        match({"pattern": []}, "error::Something went wrong")


def test_missing_pattern():
    with pytest.raises(ConfigError, match=r"No matcher\.pattern provided"):
        match({"owner": "test"}, "error::Something went wrong")


@pytest.mark.parametrize("pattern", [[], {"invalid": True}, "^oops$"])
def test_pattern_must_be_a_non_empty_list(pattern):
    with pytest.raises(ConfigError, match=r"matcher\.pattern must be an array with at least one value"):
        match({"owner": "test", "pattern": pattern}, "error::Something went wrong")


def test_matcher_is_checked_before_input():
    with pytest.raises(ConfigError):
        match({"owner": "test"}, None)


@pytest.mark.parametrize("input_text", [None, ""])
def test_missing_input(input_text):
    with pytest.raises(InputError, match="No input provided"):
        match(valid_matcher, input_text)


def test_non_text_input():
    with pytest.raises(InputError, match="Input must be a string"):
        validate_input(b"main.c:1: error")


def test_sub_pattern_must_be_an_object():
    with pytest.raises(ConfigError, match=r"matcher\.pattern\[0\] must be an object"):
        match({"owner": "test", "pattern": ["^(.*)$"]}, "line")


def test_sub_pattern_requires_regexp():
    with pytest.raises(ConfigError, match=r"matcher\.pattern\[1\]\.regexp must be a string"):
        match({"owner": "test", "pattern": [{"regexp": "^(.*)$", "file": 1}, {"line": 1, "loop": True}]}, "line")


def test_invalid_regexp():
    with pytest.raises(ConfigError, match="not a valid regular expression"):
        match({"owner": "test", "pattern": [{"regexp": "^(unclosed", "file": 1}]}, "line")


def test_validate_accepts_pattern_description():
    description = PatternDescription(owner="gcc", pattern=[SubPattern(regexp="^(.*)$", fields={"message": 1})])
    validate_matcher(description)


def test_validate_rejects_description_without_owner():
    with pytest.raises(ConfigError, match="owner"):
        validate_matcher(PatternDescription(owner="", pattern=[SubPattern(regexp=".")]))


def test_from_dict_splits_reserved_keys():
    description = PatternDescription.from_dict({
        "owner": "stylish",
        "severity": "warning",
        "pattern": [
            {"regexp": r"^(\S+)$", "file": 1},
            {"regexp": r"^\s+(\d+)$", "line": 1, "loop": True},
        ],
    })
    assert description.severity == "warning"
    assert description.pattern[0].fields == {"file": 1}
    assert description.pattern[0].loop is False
    assert description.pattern[1].fields == {"line": 1}
    assert description.loop_pattern is description.pattern[1]


def test_to_dict_round_trips_matcher_file_format():
    assert PatternDescription.from_dict(valid_matcher).to_dict() == valid_matcher
