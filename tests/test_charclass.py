import string

import pytest

from secretgen.charclass import CharacterClass, DEFAULT_CHARS, default_class, parse_charclass
from secretgen.errors import ErrorTracker, ParseError, Severity


def test_simple_range():
    cls = parse_charclass("a-z")
    assert cls.chars == string.ascii_lowercase
    assert cls.is_optional

def test_required_count_prefix():
    cls = parse_charclass("3:#$%")
    assert cls.required == 3
    assert set(cls.chars) == {"#", "$", "%"}

def test_escaped_hyphen_between_ranges():
    cls = parse_charclass("a-z\\-0-9")
    assert set(cls.chars) == set(string.ascii_lowercase) | {"-"} | set(string.digits)

def test_double_dot_range():
    assert parse_charclass("a..e").chars == "abcde"

def test_hyphen_at_edges_is_literal():
    assert set(parse_charclass("-ab").chars) == {"-", "a", "b"}
    assert set(parse_charclass("ab-").chars) == {"-", "a", "b"}

def test_single_dot_is_literal():
    assert set(parse_charclass("a.b").chars) == {"a", ".", "b"}

def test_hyphen_after_range_is_literal():
    assert set(parse_charclass("a-c-x").chars) == {"a", "b", "c", "-", "x"}

def test_trailing_backslash_is_literal():
    assert parse_charclass("ab\\").chars == "ab\\"

def test_escaped_backslash():
    assert parse_charclass("\\\\").chars == "\\"

def test_duplicates_collapse():
    cls = parse_charclass("aabba-c")
    assert cls.chars == "abc"

def test_reverse_range_warns():
    tracker = ErrorTracker()
    rev = parse_charclass("z-a", tracker)
    assert set(rev.chars) == set(parse_charclass("a-z").chars)
    assert tracker.highest_severity() == Severity.WARNING
    assert "Range used in reverse" in tracker.last().message

def test_empty_list_is_error():
    tracker = ErrorTracker()
    assert parse_charclass("", tracker) is None
    assert parse_charclass("4:", tracker) is None
    assert [d.severity for d in tracker] == [Severity.ERROR, Severity.ERROR]

def test_zero_count_is_optional():
    cls = parse_charclass("0:xyz")
    assert cls.is_optional
    assert cls.chars == "xyz"

def test_colon_without_count_is_literal():
    assert set(parse_charclass("a:b").chars) == {"a", ":", "b"}

def test_default_class():
    cls = default_class()
    assert cls.is_optional
    assert cls.chars == DEFAULT_CHARS
    assert len(cls) == 62

def test_class_cannot_be_empty():
    with pytest.raises(ValueError):
        CharacterClass("")

def test_empty_list_raises_without_tracker():
    with pytest.raises(ParseError):
        parse_charclass("7:")
