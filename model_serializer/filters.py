"""Allow-list filtering for partial-update payloads.

Both filters mutate their argument in place and are shallow: nested records
and nested dicts are left alone. Callers must not share the record or dict
with other readers while it is being filtered.
"""

import logging
from collections.abc import Iterable
from typing import Any

from model_serializer.fields import table_for

logger = logging.getLogger(__name__)


def _allow_set(fields: Iterable[str]) -> frozenset[str]:
    # A bare string is one field name, not a collection of characters
    if isinstance(fields, str):
        return frozenset((fields,))
    return frozenset(fields)


def filter_fields(record: Any, fields: Iterable[str]) -> None:
    """Reset every optional field of `record` not named in `fields` to None.

    Only fields whose declared type admits None are erased. Required fields
    keep their values whether or not they are listed.
    """
    allowed = _allow_set(fields)
    table = table_for(record)
    for accessor in table.fields.values():
        if not accessor.optional or accessor.name in allowed:
            continue
        if accessor.get(record) is not None:
            accessor.set(record, None)
            logger.debug("Cleared %s.%s", type(record).__qualname__, accessor.name)


def filter_map_fields(data: dict[str, Any], fields: Iterable[str]) -> None:
    """Remove keys not in `fields` and keys whose value is None."""
    allowed = _allow_set(fields)
    for key in list(data):
        if key not in allowed or data[key] is None:
            del data[key]
            logger.debug("Dropped key %r", key)
