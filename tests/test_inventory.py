"""
Tests for the inventory data model.

Tests validate:
- DeclarationKind canonical names and lookup
- DeclarationRecord serialization
- FileInventory grouping, ordering, duplicates and freezing
- Inventory publishing and lookups

No tree-sitter needed.
"""

import pytest

from pubscan.core.inventory import (
    DeclarationKind,
    DeclarationRecord,
    FileInventory,
    Inventory,
)


def record(kind, name, path="lib.rs", line=1, fields=None):
    return DeclarationRecord(kind=kind, name=name, file_path=path, line=line, fields=fields)


# =============================================================================
# DeclarationKind Tests
# =============================================================================

class TestDeclarationKind:
    """Test the closed kind set."""

    def test_canonical_names(self):
        """Values are the names shown to users."""
        assert DeclarationKind.FUNCTION.value == "Fn"
        assert DeclarationKind.TRAIT_FUNCTION.value == "TraitFn"
        assert DeclarationKind.FOREIGN_FUNCTION.value == "ForeignFn"
        assert DeclarationKind.OPAQUE.value == "Opaque"

    def test_names_are_unique(self):
        values = [kind.value for kind in DeclarationKind]
        assert len(values) == len(set(values))


# =============================================================================
# DeclarationRecord Tests
# =============================================================================

class TestDeclarationRecord:
    """Test record serialization."""

    def test_to_dict_uses_kind_name(self):
        data = record(DeclarationKind.STRUCT, "S", fields={"x": "i32"}).to_dict()

        assert data["kind"] == "Struct"
        assert data["name"] == "S"
        assert data["fields"] == {"x": "i32"}


# =============================================================================
# FileInventory Tests
# =============================================================================

class TestFileInventory:
    """Test per-file accumulation."""

    def test_groups_by_kind_in_visit_order(self):
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.FUNCTION, "b"))
        inv.add(record(DeclarationKind.STRUCT, "S"))
        inv.add(record(DeclarationKind.FUNCTION, "a"))

        assert inv.names(DeclarationKind.FUNCTION) == ["b", "a"]
        assert inv.names(DeclarationKind.STRUCT) == ["S"]
        assert len(inv) == 3

    def test_kinds_follow_enum_order(self):
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.MACRO, "m"))
        inv.add(record(DeclarationKind.FUNCTION, "f"))

        assert inv.kinds() == [DeclarationKind.FUNCTION, DeclarationKind.MACRO]

    def test_duplicates_are_kept(self):
        """Same name twice is two records."""
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.FUNCTION, "new", line=2))
        inv.add(record(DeclarationKind.FUNCTION, "new", line=9))

        assert inv.names(DeclarationKind.FUNCTION) == ["new", "new"]

    def test_rejects_record_from_other_file(self):
        inv = FileInventory("lib.rs")
        with pytest.raises(ValueError):
            inv.add(record(DeclarationKind.FUNCTION, "f", path="other.rs"))

    def test_frozen_rejects_add(self):
        inv = FileInventory("lib.rs")
        inv.freeze()

        assert inv.frozen
        with pytest.raises(RuntimeError):
            inv.add(record(DeclarationKind.FUNCTION, "f"))

    def test_records_returns_copy(self):
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.FUNCTION, "f"))

        inv.records(DeclarationKind.FUNCTION).clear()

        assert len(inv) == 1

    def test_contains_and_missing_kind(self):
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.CONSTANT, "MAX"))

        assert DeclarationKind.CONSTANT in inv
        assert DeclarationKind.STATIC not in inv
        assert inv.records(DeclarationKind.STATIC) == []

    def test_to_dict(self):
        inv = FileInventory("lib.rs")
        inv.add(record(DeclarationKind.FUNCTION, "f", line=3))

        assert inv.to_dict() == {
            "Fn": [{"kind": "Fn", "name": "f", "file_path": "lib.rs", "line": 3, "fields": None}]
        }


# =============================================================================
# Inventory Tests
# =============================================================================

class TestInventory:
    """Test the scan-wide store."""

    def test_publish_freezes(self):
        file_inv = FileInventory("a.rs")
        inventory = Inventory()

        inventory.publish(file_inv)

        assert file_inv.frozen
        assert "a.rs" in inventory
        assert inventory.get("a.rs") is file_inv

    def test_publish_same_path_twice(self):
        inventory = Inventory()
        inventory.publish(FileInventory("a.rs"))

        with pytest.raises(ValueError):
            inventory.publish(FileInventory("a.rs"))

    def test_files_keep_publish_order(self):
        inventory = Inventory()
        for path in ("z.rs", "a.rs", "m.rs"):
            inventory.publish(FileInventory(path))

        assert inventory.files() == ["z.rs", "a.rs", "m.rs"]
        assert len(inventory) == 3

    def test_same_name_in_two_files_not_merged(self):
        inventory = Inventory()
        for path in ("a.rs", "b.rs"):
            file_inv = FileInventory(path)
            file_inv.add(record(DeclarationKind.STRUCT, "Config", path=path))
            inventory.publish(file_inv)

        found = inventory.find(DeclarationKind.STRUCT, "Config")

        assert [r.file_path for r in found] == ["a.rs", "b.rs"]
        assert inventory.record_count() == 2
