"""Field specification entries and the spec mini-language.

A spec is an ordered list where each element is one of:

- a string: the internal field name, projected under its wire name;
- a mapping of field name -> child spec: a nested record, optional record,
  or sequence of records reachable through that field;
- a callable ``(record) -> (wire_name, value)``: a computed field.

normalize_spec() turns that list into a tuple of Leaf / Computed / Nested
entries, which is what the serializer walks.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from model_serializer.errors import UnknownSpecEntry
from model_serializer.fields import DEFAULT_TAG, accessor_table, nested_record_types

FieldSerializer = Callable[[Any], tuple[str, Any]]


@dataclass(frozen=True)
class Leaf:
    """Project one field verbatim under its wire name."""

    name: str


@dataclass(frozen=True)
class Computed:
    """Insert the (wire name, value) pair returned by `func(record)`."""

    func: FieldSerializer

    def __call__(self, record: Any) -> tuple[str, Any]:
        return self.func(record)


@dataclass(frozen=True)
class Nested:
    """Project the record(s) reachable through field `name` with a child spec."""

    name: str
    spec: tuple


FieldSpec = Leaf | Computed | Nested


def normalize_spec(spec: Iterable[Any]) -> tuple[FieldSpec, ...]:
    """Convert a mini-language spec list into a tuple of FieldSpec entries.

    Raises:
        UnknownSpecEntry: if an element is not a string, a mapping of
            field name to child spec, a FieldSpec or a callable.
    """
    if isinstance(spec, (str, bytes)) or not isinstance(spec, Iterable):
        raise UnknownSpecEntry(spec)
    entries: list[FieldSpec] = []
    for entry in spec:
        entries.extend(_normalize_entry(entry))
    return tuple(entries)


def _normalize_entry(entry: Any) -> list[FieldSpec]:
    if isinstance(entry, (Leaf, Computed)):
        return [entry]
    if isinstance(entry, Nested):
        return [Nested(entry.name, normalize_spec(entry.spec))]
    if isinstance(entry, str):
        return [Leaf(entry)]
    if isinstance(entry, Mapping):
        nested = []
        for name, child in entry.items():
            if not isinstance(name, str):
                raise UnknownSpecEntry(entry)
            nested.append(Nested(name, normalize_spec(child)))
        return nested
    if isinstance(entry, type):
        # A class is callable but never a computed field
        raise UnknownSpecEntry(entry)
    if callable(entry):
        return [Computed(entry)]
    raise UnknownSpecEntry(entry)


def validate_spec(record_type: type, spec: Iterable[Any], *, tag: str = DEFAULT_TAG) -> tuple[FieldSpec, ...]:
    """Normalize `spec` and check it against `record_type` without a record.

    Every leaf and nested field must exist and carry a wire name, every nested
    field must be a record, optional record or sequence of records, and child
    specs are checked recursively against the record types they reach.
    Computed entries are opaque and always accepted.

    Returns:
        The normalized spec, ready to be reused for every record of the type.
    """
    normalized = normalize_spec(spec)
    table = accessor_table(record_type, tag)
    for entry in normalized:
        if isinstance(entry, Leaf):
            table.require(entry.name)
        elif isinstance(entry, Nested):
            accessor = table.require_nested(entry.name)
            for child_type in nested_record_types(accessor.declared_type):
                validate_spec(child_type, entry.spec, tag=tag)
    return normalized
