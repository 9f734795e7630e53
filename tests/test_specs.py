"""Tests for spec normalization and validation in model_serializer/specs.py."""

from dataclasses import dataclass

import pytest

from model_serializer import (
    Computed,
    Leaf,
    MissingWireName,
    Nested,
    UnknownSpecEntry,
    UnsupportedNestedKind,
    wire,
)
from model_serializer.specs import normalize_spec, validate_spec


@dataclass
class Item:
    sku: str = wire("sku")


@dataclass
class Basket:
    owner: str = wire("owner")
    items: list[Item] = wire("items", default_factory=list)
    lookup: dict[str, Item] = wire("lookup", default_factory=dict)


def _count(record):
    return "count", 1


class TestNormalizeSpec:
    """Tests for normalize_spec()."""

    def test_string_becomes_leaf(self):
        assert normalize_spec(["owner"]) == (Leaf("owner"),)

    def test_callable_becomes_computed(self):
        assert normalize_spec([_count]) == (Computed(_count),)

    def test_mapping_becomes_nested(self):
        assert normalize_spec([{"items": ["sku"]}]) == (Nested("items", (Leaf("sku"),)),)

    def test_multi_key_mapping_keeps_order(self):
        spec = normalize_spec([{"b": ["x"], "a": ["y"]}])
        assert [entry.name for entry in spec] == ["b", "a"]

    def test_already_normalized_entries_pass_through(self):
        spec = (Leaf("owner"), Nested("items", ["sku"]), Computed(_count))
        assert normalize_spec(spec) == (
            Leaf("owner"),
            Nested("items", (Leaf("sku"),)),
            Computed(_count),
        )

    def test_idempotent(self):
        once = normalize_spec(["owner", {"items": ["sku", _count]}])
        assert normalize_spec(once) == once

    @pytest.mark.parametrize("entry", [42, None, 1.5, b"owner", ["owner"]])
    def test_unknown_entry(self, entry):
        with pytest.raises(UnknownSpecEntry) as exc:
            normalize_spec([entry])
        assert exc.value.entry == entry

    def test_class_is_not_computed(self):
        with pytest.raises(UnknownSpecEntry):
            normalize_spec([Item])

    def test_bare_string_spec_rejected(self):
        with pytest.raises(UnknownSpecEntry):
            normalize_spec("owner")

    def test_string_child_spec_rejected(self):
        with pytest.raises(UnknownSpecEntry):
            normalize_spec([{"items": "sku"}])

    def test_non_string_mapping_key_rejected(self):
        with pytest.raises(UnknownSpecEntry):
            normalize_spec([{1: ["sku"]}])


class TestValidateSpec:
    """Tests for validate_spec()."""

    def test_valid_spec_returns_normalized(self):
        spec = validate_spec(Basket, ["owner", {"items": ["sku"]}, _count])
        assert spec == normalize_spec(["owner", {"items": ["sku"]}, _count])

    def test_missing_leaf(self):
        with pytest.raises(MissingWireName):
            validate_spec(Basket, ["nope"])

    def test_missing_child_leaf(self):
        with pytest.raises(MissingWireName, match='"price"'):
            validate_spec(Basket, [{"items": ["sku", "price"]}])

    def test_dict_of_records_unsupported(self):
        with pytest.raises(UnsupportedNestedKind) as exc:
            validate_spec(Basket, [{"lookup": ["sku"]}])
        assert exc.value.field_name == "lookup"

    def test_computed_not_inspected(self):
        assert validate_spec(Basket, [lambda b: ("x", b.nothing)])

    def test_non_record_type(self):
        with pytest.raises(TypeError):
            validate_spec(dict, ["owner"])
