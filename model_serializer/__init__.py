"""Spec-driven projection of dataclass records into plain dict trees.

Public API: serialize(), serialize_list(), View, filter_fields(),
filter_map_fields(), the wire() field helper and the error classes.
"""

from model_serializer.errors import (
    MissingWireName,
    SerializerError,
    UnknownSpecEntry,
    UnresolvedAnnotation,
    UnsupportedNestedKind,
)
from model_serializer.fields import DEFAULT_TAG, wire
from model_serializer.filters import filter_fields, filter_map_fields
from model_serializer.serializer import ProjectionResult, View, serialize, serialize_list
from model_serializer.specs import Computed, FieldSerializer, FieldSpec, Leaf, Nested

__all__ = [
    "DEFAULT_TAG",
    "Computed",
    "FieldSerializer",
    "FieldSpec",
    "Leaf",
    "MissingWireName",
    "Nested",
    "ProjectionResult",
    "SerializerError",
    "UnknownSpecEntry",
    "UnresolvedAnnotation",
    "UnsupportedNestedKind",
    "View",
    "filter_fields",
    "filter_map_fields",
    "serialize",
    "serialize_list",
    "wire",
]
