"""Error taxonomy for the projection engine.

Every error is a contract violation between a spec and the record type it is
applied to. They are raised at the point of detection and never caught inside
the engine.
"""

from typing import Any


class SerializerError(Exception):
    """Base class for all projection engine errors."""


class MissingWireName(SerializerError):
    """A leaf field has no wire name in its metadata."""

    def __init__(self, field_name: str, tag: str = "json"):
        self.field_name = field_name
        self.tag = tag
        super().__init__(f'Field "{field_name}" has no {tag} tag')


class UnsupportedNestedKind(SerializerError):
    """A nested spec targets a field that is not a record or a sequence of records."""

    def __init__(self, field_name: str, declared_type: Any = None):
        self.field_name = field_name
        self.declared_type = declared_type
        super().__init__(
            "Undefined type for serializer. Need to implement it "
            f'(field "{field_name}" declared as {declared_type!r})'
        )


class UnknownSpecEntry(SerializerError):
    """A spec list element is not a field name, a mapping or a callable."""

    def __init__(self, entry: Any):
        self.entry = entry
        super().__init__(f"Undefined spec entry for serializer: {entry!r}")


class UnresolvedAnnotation(SerializerError):
    """A field annotation names a type that cannot be found."""

    def __init__(self, record_type: type, field_name: str, annotation: Any):
        self.record_type = record_type
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(
            f'Cannot resolve annotation {annotation!r} of field "{field_name}" '
            f"on {record_type.__qualname__}"
        )
