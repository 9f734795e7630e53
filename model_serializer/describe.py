"""Developer tooling: inspect record types and check specs against them.

describe_record() lists how each field of a record type is named and which
kind the nested resolver sees. check_view() reports every problem a spec has
against a record type instead of stopping at the first one.
display_record() renders the same information as a rich table.
"""

import importlib
import sys
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.table import Table

from model_serializer.config import configure_logging, load_settings
from model_serializer.errors import SerializerError
from model_serializer.fields import DEFAULT_TAG, KIND_OTHER, KIND_UNRESOLVED, accessor_table, is_record_type
from model_serializer.specs import validate_spec

_USAGE = "Usage: python -m model_serializer <module>:<RecordType>"


def describe_record(record_type: type, *, tag: str = DEFAULT_TAG) -> list[dict]:
    """Return one row per field: name, wire_name, kind, optional, nestable."""
    table = accessor_table(record_type, tag)
    return [
        {
            "name": a.name,
            "wire_name": a.wire_name,
            "kind": a.kind,
            "optional": a.optional,
            "nestable": a.kind not in (KIND_OTHER, KIND_UNRESOLVED),
        }
        for a in table.fields.values()
    ]


def check_view(record_type: type, spec: Iterable[Any], *, tag: str = DEFAULT_TAG) -> list[str]:
    """Validate each top-level spec entry separately and collect the errors.

    Returns an empty list when the whole spec is valid for `record_type`.
    """
    problems: list[str] = []
    for entry in spec:
        try:
            validate_spec(record_type, [entry], tag=tag)
        except SerializerError as e:
            problems.append(str(e))
    return problems


def display_record(record_type: type, *, tag: str = DEFAULT_TAG, console: Console | None = None) -> None:
    """Print the accessor table of `record_type` as a rich table."""
    console = console or Console()
    table = Table(title=f"{record_type.__qualname__} (tag: {tag})")
    table.add_column("Field", style="bold")
    table.add_column("Wire name")
    table.add_column("Kind")
    table.add_column("Optional")

    for row in describe_record(record_type, tag=tag):
        wire_name = row["wire_name"] if row["wire_name"] is not None else "[red]missing[/red]"
        table.add_row(row["name"], wire_name, row["kind"], "yes" if row["optional"] else "no")

    console.print(table)


def resolve_record_type(target: str) -> type:
    """Import `module:QualName` and return the record type it names.

    Raises:
        ValueError: target is malformed or does not name a dataclass type.
        ImportError: the module cannot be imported.
    """
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Expected <module>:<RecordType>, got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"{module_name!r} has no attribute {qualname!r}") from None
    if not is_record_type(obj):
        raise ValueError(f"{target!r} is not a record type (expected a dataclass)")
    return obj


def main(argv: list[str] | None = None) -> int:
    """Entry point for `python -m model_serializer`. Returns the exit status."""
    argv = sys.argv[1:] if argv is None else argv
    console = Console()
    if len(argv) != 1:
        console.print(_USAGE)
        return 2

    settings = load_settings()
    configure_logging(settings)
    try:
        record_type = resolve_record_type(argv[0])
    except (ImportError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    display_record(record_type, tag=settings.tag, console=console)
    return 0
