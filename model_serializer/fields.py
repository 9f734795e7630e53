"""Record naming convention and per-type field accessor tables.

A record is a dataclass instance. Each field that should be projectable by
name declares its wire name in the field metadata under the ``json`` key:

    @dataclass
    class Order:
        order_id: int = wire("orderId")
        customer: Customer | None = wire("customer", default=None)

Accessor tables are built once per (record type, tag) pair and stored on the
record type, so the declared kind of every field is resolved from its type
hints only on first use.
"""

import builtins
import dataclasses
import logging
import sys
import types
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any, ForwardRef, Union, get_args, get_origin, get_type_hints

from model_serializer.errors import MissingWireName, UnresolvedAnnotation, UnsupportedNestedKind

logger = logging.getLogger(__name__)

DEFAULT_TAG = "json"

# --------------------------------------------------------------------------
# Declared field kinds
# --------------------------------------------------------------------------

KIND_RECORD = "record"  # embedded record value: `customer: Customer`
KIND_RECORD_REF = "record_ref"  # optional record: `customer: Customer | None`
KIND_RECORD_SEQUENCE = "record_sequence"  # `list[Item]`, `tuple[Item, Item]`
KIND_OTHER = "other"
KIND_UNRESOLVED = "unresolved"  # annotation names a type that cannot be found

_SEQUENCE_ORIGINS = (list, tuple, Sequence, MutableSequence)

_TABLES_ATTR = "_model_serializer_tables"


def wire(name: str, *, tag: str = DEFAULT_TAG, **field_kwargs) -> Any:
    """Return a dataclass field carrying `name` as its wire name.

    Any other keyword (default, default_factory, repr, ...) is passed through
    to dataclasses.field(). Existing metadata is preserved.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[tag] = name
    return dataclasses.field(metadata=metadata, **field_kwargs)


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def is_record(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _strip_optional(tp: Any) -> tuple[Any, bool]:
    """Split `X | None` into (X, True). Other types come back as (tp, False)."""
    if tp is Any:
        return tp, True
    if get_origin(tp) in (Union, types.UnionType):
        args = get_args(tp)
        rest = tuple(a for a in args if a is not type(None))
        if len(rest) == len(args):
            return tp, False
        if len(rest) == 1:
            return rest[0], True
        return Union[rest], True
    return tp, False


def _sequence_element_types(tp: Any) -> tuple[Any, ...]:
    """Element types of a sequence annotation, or () when `tp` is not one."""
    origin = get_origin(tp)
    if origin not in _SEQUENCE_ORIGINS:
        return ()
    args = get_args(tp)
    if origin is tuple:
        args = tuple(a for a in args if a is not Ellipsis)
    return args


def classify(declared_type: Any) -> str:
    """Return the KIND_* constant for a declared field type."""
    inner, optional = _strip_optional(declared_type)
    if is_record_type(inner):
        return KIND_RECORD_REF if optional else KIND_RECORD
    elements = _sequence_element_types(inner)
    if elements and all(is_record_type(_strip_optional(e)[0]) for e in elements):
        return KIND_RECORD_SEQUENCE
    return KIND_OTHER


def nested_record_types(declared_type: Any) -> tuple[type, ...]:
    """Record types a nested spec on a field of `declared_type` descends into."""
    inner, _ = _strip_optional(declared_type)
    if is_record_type(inner):
        return (inner,)
    found: list[type] = []
    for element in _sequence_element_types(inner):
        element, _ = _strip_optional(element)
        if is_record_type(element) and element not in found:
            found.append(element)
    return tuple(found)


@dataclass(frozen=True)
class FieldAccessor:
    """Resolved naming and kind information for one record field.

    For a KIND_UNRESOLVED field, declared_type is the annotation source string.
    """

    name: str
    wire_name: str | None
    declared_type: Any
    kind: str
    optional: bool

    def get(self, record: Any) -> Any:
        return getattr(record, self.name)

    def set(self, record: Any, value: Any) -> None:
        setattr(record, self.name, value)


@dataclass(frozen=True)
class AccessorTable:
    """All field accessors of one record type, keyed by internal field name."""

    record_type: type
    tag: str
    fields: dict[str, FieldAccessor]

    @property
    def complete(self) -> bool:
        """True when every field annotation was resolved."""
        return all(a.kind != KIND_UNRESOLVED for a in self.fields.values())

    def require(self, name: str) -> FieldAccessor:
        """Return the accessor for `name`, which must carry a wire name.

        Unknown field names are reported the same way as untagged ones.
        """
        accessor = self.fields.get(name)
        if accessor is None or accessor.wire_name is None:
            raise MissingWireName(name, self.tag)
        return accessor

    def require_nested(self, name: str) -> FieldAccessor:
        """Like require(), and the field must hold a record or records."""
        accessor = self.require(name)
        if accessor.kind == KIND_UNRESOLVED:
            raise UnresolvedAnnotation(self.record_type, name, accessor.declared_type)
        if accessor.kind == KIND_OTHER:
            raise UnsupportedNestedKind(name, accessor.declared_type)
        return accessor


# --------------------------------------------------------------------------
# Annotation resolution
# Names an annotation uses but that cannot be found (e.g. record types local
# to a function under `from __future__ import annotations`) are evaluated to
# _Unresolved stand-ins, so optionality is still known for such fields.
# --------------------------------------------------------------------------


class _Unresolved:
    """Base class of stand-ins for names that cannot be resolved."""


class _StandInNamespace(dict):
    def __init__(self, globalns: dict, localns: dict):
        super().__init__(localns)
        self._globalns = globalns

    def __missing__(self, key: str) -> Any:
        if key in self._globalns:
            return self._globalns[key]
        if hasattr(builtins, key):
            return getattr(builtins, key)
        stand_in = type(key, (_Unresolved,), {})
        self[key] = stand_in
        return stand_in


def _resolve_field(record_type: type, f: dataclasses.Field, globalns: dict) -> tuple[Any, Any, bool]:
    """Evaluate one field annotation.

    Returns (declared, shape, resolved) where `shape` is the evaluated
    annotation, with stand-ins in place of unresolvable names.
    """
    annotation = f.type
    if isinstance(annotation, ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation, annotation, True

    localns = {record_type.__name__: record_type}
    try:
        declared = eval(annotation, globalns, localns)
    except NameError:
        shape = eval(annotation, globalns, _StandInNamespace(globalns, localns))
        return annotation, shape, False
    return declared, declared, True


def _build_table(record_type: type, tag: str) -> AccessorTable:
    try:
        hints = get_type_hints(record_type)
    except NameError:
        logger.debug("Resolving annotations of %s field by field", record_type.__qualname__)
        hints = None
    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}

    accessors: dict[str, FieldAccessor] = {}
    for f in dataclasses.fields(record_type):
        if hints is not None and f.name in hints:
            declared, shape, resolved = hints[f.name], hints[f.name], True
        else:
            declared, shape, resolved = _resolve_field(record_type, f, globalns)
        accessors[f.name] = FieldAccessor(
            name=f.name,
            wire_name=f.metadata.get(tag),
            declared_type=declared,
            kind=classify(declared) if resolved else KIND_UNRESOLVED,
            optional=_strip_optional(shape)[1],
        )

    table = AccessorTable(record_type=record_type, tag=tag, fields=accessors)
    logger.debug(
        "Built accessor table for %s (%d fields, tag=%r, complete=%s)",
        record_type.__qualname__,
        len(accessors),
        tag,
        table.complete,
    )
    return table


def accessor_table(record_type: type, tag: str = DEFAULT_TAG) -> AccessorTable:
    """Return the accessor table for a dataclass record type.

    Tables are stored on the record type itself and are released with it.
    A table with unresolved annotations is not stored, so it is rebuilt until
    the missing names can be found.
    """
    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a record type (expected a dataclass)")

    tables = record_type.__dict__.get(_TABLES_ATTR)
    if tables is not None and tag in tables:
        return tables[tag]

    table = _build_table(record_type, tag)
    if table.complete:
        if tables is None:
            tables = {}
            setattr(record_type, _TABLES_ATTR, tables)
        tables[tag] = table
    return table


def table_for(record: Any, tag: str = DEFAULT_TAG) -> AccessorTable:
    """Return the accessor table for a record instance."""
    if not is_record(record):
        raise TypeError(f"{type(record).__name__!r} object is not a record (expected a dataclass instance)")
    return accessor_table(type(record), tag)
