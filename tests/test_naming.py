"""Tests for jsonshape.naming."""

from __future__ import annotations

import pytest

from jsonshape.naming import (
    ensure_unique,
    is_reserved_word,
    is_valid_identifier,
    make_type_name,
    quote_key,
    quote_string,
    to_camel_case,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("user_name", "userName"),
        ("user-name", "userName"),
        ("User Name", "userName"),
        ("already", "already"),
        ("__id", "id"),
        ("a.b", "aB"),
        ("ABC", "aBC"),
        ("", ""),
    ],
)
def test_to_camel_case(text: str, expected: str) -> None:
    assert to_camel_case(text) == expected


def test_identifier_checks() -> None:
    assert is_valid_identifier("foo$")
    assert is_valid_identifier("_private")
    assert not is_valid_identifier("1abc")
    assert not is_valid_identifier("first-name")
    assert not is_valid_identifier("class")
    assert is_reserved_word("type")
    assert not is_reserved_word("Type")


def test_quote_key_leaves_identifiers_bare() -> None:
    assert quote_key("name") == "name"
    assert quote_key("first-name") == "'first-name'"
    assert quote_key("first-name", '"') == '"first-name"'
    assert quote_key("default") == "'default'"


def test_quote_escapes_backslash_and_quote() -> None:
    assert quote_key("it's") == "'it\\'s'"
    assert quote_key('a"b', '"') == '"a\\"b"'
    assert quote_string("c:\\tmp") == "'c:\\\\tmp'"


def test_make_type_name() -> None:
    assert make_type_name("user") == "userType"
    assert make_type_name("order_item") == "orderItemType"
    assert make_type_name("2fa") == "_2faType"
    assert make_type_name("user", suffix="Item") == "userItem"


def test_ensure_unique_appends_counter_from_two() -> None:
    assert ensure_unique("b", set()) == "b"
    assert ensure_unique("a", {"a"}) == "a2"
    assert ensure_unique("a", {"a", "a2"}) == "a3"
