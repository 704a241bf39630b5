from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from unbackslash.cursor import Cursor
from unbackslash.error import EscapeSequenceError
from unbackslash.handler import OCTAL_TRIGGERS, DefaultHandler
from unbackslash.primitives import decode_hex, decode_octal, decode_unicode


def _default_replacements() -> Dict[str, str]:
    return dict(DefaultHandler.escape_map)


class EscapeTable(BaseModel):
    """
    Declarative description of an escape dialect.

    ``replacements`` maps a trigger character to its replacement,
    ``deletions`` lists triggers whose sequence produces no output, and the
    boolean switches enable the built-in numeric decoders (``braced_unicode``
    allows the ``\\u{HEX}`` form). The defaults describe the same dialect
    as ``DefaultHandler``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    replacements: Mapping[str, str] = Field(
        default_factory=_default_replacements, validate_default=True
    )
    deletions: FrozenSet[str] = frozenset()
    hex: bool = True
    unicode: bool = True
    braced_unicode: bool = True
    octal: bool = True
    surrogate_pairs: bool = False

    @field_validator("replacements")
    @classmethod
    def single_character_replacements(
        cls, value: Mapping[str, str]
    ) -> Mapping[str, str]:
        for trigger, replacement in value.items():
            if len(trigger) != 1:
                raise ValueError(f"Trigger must be a single character, got {trigger!r}")
            if len(replacement) != 1:
                raise ValueError(
                    f"Replacement for {trigger!r} must be a single character, got {replacement!r}"
                )
        return MappingProxyType(dict(value))

    @field_validator("deletions")
    @classmethod
    def single_character_deletions(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        for trigger in value:
            if len(trigger) != 1:
                raise ValueError(f"Trigger must be a single character, got {trigger!r}")
        return value

    @model_validator(mode="after")
    def disjoint_triggers(self) -> "EscapeTable":
        both = self.deletions & set(self.replacements)
        if both:
            raise ValueError(
                f"Triggers {sorted(both)} are both replaced and deleted"
            )
        shadowed = self.reserved_triggers & (self.deletions | set(self.replacements))
        if shadowed:
            raise ValueError(
                f"Triggers {sorted(shadowed)} are reserved by an enabled decoder"
            )
        if self.surrogate_pairs and not self.unicode:
            raise ValueError("surrogate_pairs requires unicode to be enabled")
        return self

    @property
    def reserved_triggers(self) -> Set[str]:
        reserved: Set[str] = set()
        if self.hex:
            reserved.add("x")
        if self.unicode:
            reserved.add("u")
        if self.octal:
            reserved.update(OCTAL_TRIGGERS)
        return reserved


DEFAULT_TABLE = EscapeTable()

JSON_TABLE = EscapeTable(
    replacements={
        '"': '"',
        "\\": "\\",
        "/": "/",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
    },
    hex=False,
    octal=False,
    braced_unicode=False,
    surrogate_pairs=True,
)

PRESETS: Dict[str, EscapeTable] = {
    "default": DEFAULT_TABLE,
    "json": JSON_TABLE,
}


def load_table(path: Path) -> EscapeTable:
    return EscapeTable.model_validate_json(path.read_text(encoding="utf-8"))


class TableHandler:
    def __init__(self, table: Optional[EscapeTable] = None) -> None:
        self._table: EscapeTable = DEFAULT_TABLE if table is None else table

    @property
    def table(self) -> EscapeTable:
        return self._table

    def resolve(self, index: int, trigger: str, cursor: Cursor) -> Optional[str]:
        table = self._table
        if trigger in table.deletions:
            return None
        replacement = table.replacements.get(trigger)
        if replacement is not None:
            return replacement
        if table.hex and trigger == "x":
            return decode_hex(cursor)
        if table.unicode and trigger == "u":
            return decode_unicode(
                cursor,
                surrogate_pairs=table.surrogate_pairs,
                braced=table.braced_unicode,
            )
        if table.octal and trigger in OCTAL_TRIGGERS:
            return decode_octal(cursor, trigger)
        raise EscapeSequenceError(f"unknown escape sequence: '\\{trigger}'")

    def __repr__(self) -> str:
        return f"TableHandler({self._table!r})"
