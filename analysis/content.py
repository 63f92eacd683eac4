"""Detect real, user-entered content inside project record sub-trees.

Project records are created from skeleton templates, so most fields exist long
before a user types anything into them. These helpers treat identifiers,
timestamps, derived fields and fixed-enumeration fields as noise and only
report content when non-blank text is reachable somewhere below a node.
"""

from __future__ import annotations

from typing import Any, Final

from .record import RecordValue, ValueKind, as_record

CONTENT_SKIP_KEYS: Final[frozenset[str]] = frozenset(
    {
        "id",
        "project_id",
        "created_at",
        "updated_at",
        "category",
        "likelihood",
        "impact",
        "type",
        "dependencies",
        "startDate",
        "durationMonths",
        "_calculatedEndDate",
        "_projectTimeframe",
    }
)


def has_real_text(value: Any) -> bool:
    """Return True when `value` is a string with non-whitespace characters."""

    node = as_record(value)
    return node.kind is ValueKind.text and len(node.text.strip()) > 0


def has_content(value: Any) -> bool:
    """Return True when `value` contains real user-entered content.

    Args:
        value: Raw decoded value or a RecordValue.

    Returns:
        True for non-blank text, for sequences holding non-blank text or
        content-bearing mappings, and for mappings with a content-bearing
        field outside `CONTENT_SKIP_KEYS`. Numbers, booleans and null never
        count on their own.
    """

    return _node_has_content(as_record(value))


def _node_has_content(node: RecordValue) -> bool:
    kind = node.kind
    if kind is ValueKind.text:
        return len(node.text.strip()) > 0
    if kind is ValueKind.sequence:
        return _sequence_has_content(node)
    if kind is ValueKind.mapping:
        return _mapping_has_content(node)
    if kind in (ValueKind.number, ValueKind.boolean, ValueKind.null):
        return False
    raise AssertionError(f"Unhandled record value kind: {kind!r}")


def _sequence_has_content(node: RecordValue) -> bool:
    for item in node.items:
        if item.kind is ValueKind.text and item.text.strip():
            return True
        if item.kind is ValueKind.mapping and _mapping_has_content(item):
            return True
    return False


def _mapping_has_content(node: RecordValue) -> bool:
    for key, value in node.fields:
        if key in CONTENT_SKIP_KEYS:
            continue
        if value.kind in (ValueKind.text, ValueKind.sequence, ValueKind.mapping) and _node_has_content(value):
            return True
    return False
