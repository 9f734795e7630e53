"""Spec-driven projection of records into plain dict trees.

serialize() walks a spec in order and builds one dict per record: leaf fields
are copied under their wire names, computed fields insert their own pair, and
nested entries recurse into records, optional records and sequences of records.

Usage:
    serialize(order, ["order_id", {"customer": ["name"]}, total_with_tax])
    -> {"orderId": 7, "customer": {"name": "Ada"}, "totalWithTax": 12.0}
"""

from collections.abc import Iterable
from typing import Any

from model_serializer.errors import UnknownSpecEntry
from model_serializer.fields import (
    DEFAULT_TAG,
    KIND_RECORD_SEQUENCE,
    AccessorTable,
    table_for,
)
from model_serializer.specs import Computed, FieldSpec, Leaf, Nested, normalize_spec, validate_spec

ProjectionResult = dict[str, Any]


def serialize(record: Any, spec: Iterable[Any], *, tag: str = DEFAULT_TAG) -> ProjectionResult:
    """Project a record through `spec`. A None record yields an empty dict.

    Args:
        record: A dataclass instance, or None.
        spec: Spec list in the mini-language (see model_serializer.specs).
        tag: Metadata key holding the wire name of each field.

    Raises:
        MissingWireName: a leaf or nested field has no wire name.
        UnsupportedNestedKind: a nested entry targets a non-record field.
        UnresolvedAnnotation: a nested entry targets a field whose annotation
            names a type that cannot be found.
        UnknownSpecEntry: a spec element has an unrecognised shape.
    """
    if record is None:
        return {}
    return _serialize(record, normalize_spec(spec), tag)


def serialize_list(records: Iterable[Any], spec: Iterable[Any], *, tag: str = DEFAULT_TAG) -> list[ProjectionResult]:
    """Apply serialize() to each record, preserving order and count."""
    normalized = normalize_spec(spec)
    return [_serialize(record, normalized, tag) for record in records]


def _serialize(record: Any, spec: tuple[FieldSpec, ...], tag: str) -> ProjectionResult:
    result: ProjectionResult = {}
    if record is None:
        return result

    table = table_for(record, tag)
    for entry in spec:
        if isinstance(entry, Leaf):
            accessor = table.require(entry.name)
            result[accessor.wire_name] = accessor.get(record)
        elif isinstance(entry, Computed):
            wire_name, value = entry(record)
            result[wire_name] = value
        elif isinstance(entry, Nested):
            _serialize_nested(record, table, entry, result, tag)
        else:
            raise UnknownSpecEntry(entry)
    return result


def _serialize_nested(
    record: Any,
    table: AccessorTable,
    entry: Nested,
    target: ProjectionResult,
    tag: str,
) -> None:
    accessor = table.require_nested(entry.name)
    value = accessor.get(record)

    if accessor.kind == KIND_RECORD_SEQUENCE:
        # An unset sequence projects like an empty one
        target[accessor.wire_name] = [_serialize(item, entry.spec, tag) for item in (value or ())]
    else:
        target[accessor.wire_name] = _serialize(value, entry.spec, tag)


class View:
    """A spec validated once against a record type and reused per call.

    Construction raises the same errors serialize() would, but before any
    record is seen:

        ORDER_SUMMARY = View(Order, ["order_id", {"lines": ["sku", "qty"]}])
        ORDER_SUMMARY.serialize(order)
    """

    def __init__(self, record_type: type, spec: Iterable[Any], *, tag: str = DEFAULT_TAG):
        self.record_type = record_type
        self.tag = tag
        self.spec = validate_spec(record_type, spec, tag=tag)

    def serialize(self, record: Any) -> ProjectionResult:
        return _serialize(record, self.spec, self.tag)

    def serialize_list(self, records: Iterable[Any]) -> list[ProjectionResult]:
        return [_serialize(record, self.spec, self.tag) for record in records]

    def __repr__(self) -> str:
        return f"View({self.record_type.__qualname__}, {len(self.spec)} entries)"
