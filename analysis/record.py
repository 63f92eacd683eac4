"""Tagged value model for untyped project records.

Project records arrive as decoded JSON/YAML of arbitrary shape. Rather than
probing attributes on whatever object happens to be there, callers convert the
raw payload into a `RecordValue` tree once and dispatch on `RecordValue.kind`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any


class ValueKind(StrEnum):
    """Kind tag for a node in a project record tree."""

    text = "text"
    number = "number"
    boolean = "boolean"
    null = "null"
    sequence = "sequence"
    mapping = "mapping"


@dataclass(frozen=True, slots=True)
class RecordValue:
    """A single node of a project record.

    Attributes:
        kind: Tag describing which payload field is populated.
        text: String payload for `ValueKind.text`.
        number: Numeric payload for `ValueKind.number`.
        flag: Boolean payload for `ValueKind.boolean`.
        items: Child nodes for `ValueKind.sequence`.
        fields: Ordered (key, child) pairs for `ValueKind.mapping`.
    """

    kind: ValueKind
    text: str = ""
    number: float = 0.0
    flag: bool = False
    items: tuple["RecordValue", ...] = ()
    fields: tuple[tuple[str, "RecordValue"], ...] = ()

    @classmethod
    def from_raw(cls, raw: Any) -> "RecordValue":
        """Convert a decoded JSON/YAML value into a tagged tree.

        Unknown Python objects are treated as null so malformed sections read
        as "not present" rather than failing.
        """

        if raw is None:
            return NULL
        if isinstance(raw, RecordValue):
            return raw
        if isinstance(raw, bool):
            return cls(kind=ValueKind.boolean, flag=raw)
        if isinstance(raw, (int, float)):
            return cls(kind=ValueKind.number, number=float(raw))
        if isinstance(raw, str):
            return cls(kind=ValueKind.text, text=raw)
        if isinstance(raw, date):
            # YAML loads unquoted dates as date/datetime objects.
            return cls(kind=ValueKind.text, text=raw.isoformat())
        if isinstance(raw, Mapping):
            return cls(
                kind=ValueKind.mapping,
                fields=tuple((str(key), cls.from_raw(value)) for key, value in raw.items()),
            )
        if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
            return cls(kind=ValueKind.sequence, items=tuple(cls.from_raw(item) for item in raw))
        return NULL

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.null

    @property
    def is_text(self) -> bool:
        return self.kind is ValueKind.text

    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.number

    @property
    def is_sequence(self) -> bool:
        return self.kind is ValueKind.sequence

    @property
    def is_mapping(self) -> bool:
        return self.kind is ValueKind.mapping

    def get(self, key: str) -> "RecordValue":
        """Return the child stored under `key`, or null when absent.

        Non-mapping nodes have no children, so the lookup is always null.
        """

        if self.kind is not ValueKind.mapping:
            return NULL
        for field_key, value in self.fields:
            if field_key == key:
                return value
        return NULL

    def path(self, *keys: str) -> "RecordValue":
        """Follow a chain of mapping keys, returning null on the first miss."""

        node = self
        for key in keys:
            node = node.get(key)
        return node


NULL = RecordValue(kind=ValueKind.null)


def as_record(value: Any) -> RecordValue:
    """Return `value` as a RecordValue, converting raw payloads on demand."""

    if isinstance(value, RecordValue):
        return value
    return RecordValue.from_raw(value)
