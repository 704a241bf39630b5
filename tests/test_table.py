from pathlib import Path

import pytest
from pydantic import ValidationError

from unbackslash.error import InvalidEscapeError
from unbackslash.handler import DefaultHandler
from unbackslash.scanner import decode, decode_with
from unbackslash.table import (
    DEFAULT_TABLE,
    JSON_TABLE,
    PRESETS,
    EscapeTable,
    TableHandler,
    load_table,
)


@pytest.mark.parametrize(
    "text",
    [
        "plain",
        "a\\nb",
        "\\x41\\u{42}\\u0043\\104",
        "\\a\\b\\t\\n\\v\\f\\r\\e\\'\\\"\\`\\\\",
    ],
)
def test_default_table__matches_default_handler(text: str):
    assert decode_with(text, TableHandler(DEFAULT_TABLE)) == decode(text)


def test_table_handler__defaults_to_default_table():
    assert TableHandler().table is DEFAULT_TABLE


def test_default_table__replacements_match_default_handler():
    assert DEFAULT_TABLE.replacements == DefaultHandler.escape_map
    assert DEFAULT_TABLE.reserved_triggers == set("xu01234567")


# fmt: off
@pytest.mark.parametrize(
    "text,expected",
    [
        ("http:\\/\\/example.com", "http://example.com"),
        ('say \\"hi\\"', 'say "hi"'),
        ("\\b\\f\\n\\r\\t\\\\", "\b\f\n\r\t\\"),
        ("\\u00e9", "é"),
        ("\\ud83d\\ude00", "\U0001F600"),
        ("a\\ud83d\\ude00b", "a\U0001F600b"),
    ],
)
# fmt: on
def test_json_table__parameterized(text: str, expected: str):
    assert decode_with(text, TableHandler(JSON_TABLE)) == expected


@pytest.mark.parametrize(
    "text,index",
    [
        ("\\x41", 0),
        ("\\101", 0),
        ("\\'", 0),
        ("\\a", 0),
        ("ab\\ud83d", 2),
        ("\\ud83d\\u0041", 0),
    ],
)
def test_json_table__rejects(text: str, index: int):
    with pytest.raises(InvalidEscapeError) as exc_info:
        decode_with(text, TableHandler(JSON_TABLE))

    assert exc_info.value.index == index


def test_table__deletions():
    table = EscapeTable(deletions={"\n"})

    assert decode_with("first \\\nsecond\\n", TableHandler(table)) == "first second\n"


def test_table__disabled_decoders_free_their_triggers():
    table = EscapeTable(replacements={"x": "×", "0": "∅"}, hex=False, octal=False)
    handler = TableHandler(table)

    assert decode_with("2\\x3 \\0", handler) == "2×3 ∅"
    assert decode_with("\\u0041", handler) == "A"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"replacements": {"ab": "x"}},
        {"replacements": {"": "x"}},
        {"replacements": {"q": "xy"}},
        {"replacements": {"q": ""}},
        {"deletions": {"ab"}},
        {"replacements": {"x": "y"}},
        {"replacements": {"u": "y"}},
        {"deletions": {"7"}},
        {"replacements": {"q": "?"}, "deletions": {"q"}},
        {"unicode": False, "surrogate_pairs": True},
        {"unknown": True},
    ],
)
def test_table__validation(kwargs):
    with pytest.raises(ValidationError):
        EscapeTable(**kwargs)


def test_table__is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_TABLE.hex = False  # type: ignore[misc]


def test_table__from_json():
    table = EscapeTable.model_validate_json(
        '{"replacements": {"q": "?"}, "deletions": ["\\n"], "hex": false}'
    )
    handler = TableHandler(table)

    assert decode_with("\\q\\\n\\u{21}", handler) == "?!"
    with pytest.raises(InvalidEscapeError):
        decode_with("\\n", handler)


def test_load_table(tmp_path: Path):
    path = tmp_path / "table.json"
    path.write_text('{"replacements": {"s": " "}, "octal": false}', encoding="utf-8")

    table = load_table(path)

    assert table.replacements == {"s": " "}
    assert not table.octal
    assert decode_with("a\\sb", TableHandler(table)) == "a b"


def test_presets():
    assert PRESETS == {"default": DEFAULT_TABLE, "json": JSON_TABLE}


def test_json_table__rejects_braced_unicode():
    assert not JSON_TABLE.braced_unicode

    with pytest.raises(InvalidEscapeError) as exc_info:
        decode_with("\\u{41}", TableHandler(JSON_TABLE))

    assert exc_info.value.index == 0


def test_table__braced_unicode_switch():
    table = EscapeTable(braced_unicode=False)

    assert decode_with("\\u0041", TableHandler(table)) == "A"
    with pytest.raises(InvalidEscapeError):
        decode_with("\\u{41}", TableHandler(table))


@pytest.mark.parametrize("table", [DEFAULT_TABLE, JSON_TABLE])
def test_table__replacements_are_read_only(table: EscapeTable):
    with pytest.raises(TypeError):
        table.replacements["x"] = "XX"  # type: ignore[index]
    with pytest.raises(TypeError):
        del table.replacements["n"]  # type: ignore[attr-defined]

    assert "x" not in table.replacements


def test_table__replacements_detached_from_input():
    source = {"q": "?"}
    table = EscapeTable(replacements=source)

    source["q"] = "!"
    source["x"] = "XX"

    assert dict(table.replacements) == {"q": "?"}
