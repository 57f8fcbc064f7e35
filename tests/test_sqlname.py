import pytest

from shared.sqlname import ESCAPED_CHARACTERS, decode_sql_name, encode_sql_name


@pytest.mark.parametrize("raw, encoded", [
    ("", ""),
    ("Orders", "Orders"),
    ("My:Table", "My%3ATable"),
    ("a.b", "a%2Eb"),
    ("HOST\\INST", "HOST%5CINST"),
    ("100%", "100%25"),
    ("[weird]|name", "%5Bweird%5D%7Cname"),
    ("<>*?/", "%3C%3E%2A%3F%2F"),
])
def test_encode(raw, encoded):
    assert encode_sql_name(raw) == encoded


def test_every_reserved_character_is_escaped():
    encoded = encode_sql_name(ESCAPED_CHARACTERS)
    assert len(ESCAPED_CHARACTERS) == 12
    assert encoded == "%5C%3A%2E%2F%25%3C%3E%2A%3F%5B%5D%7C"


def test_percent_is_not_double_escaped():
    assert encode_sql_name("%5C") == "%255C"
    assert decode_sql_name("%255C") == "%5C"


def test_decode_is_case_insensitive():
    assert decode_sql_name("a%2eb%5c") == "a.b\\"


def test_decode_leaves_unknown_escapes():
    assert decode_sql_name("a%20b%zz") == "a%20b%zz"


def test_roundtrip_mixed_name():
    name = "dbo.Sales:2024/Q1 [draft] 50%?"
    assert decode_sql_name(encode_sql_name(name)) == name
