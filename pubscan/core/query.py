"""
KindQuery — Which declaration kinds to show.

Query syntax: comma-separated kind-name prefixes, or "all".
Matching is case-insensitive: "fn" selects Fn, "trait" selects Trait and
TraitFn, "s" selects Struct and Static.
"""

from typing import List, Optional, Tuple

from .inventory import DeclarationKind, FileInventory, Inventory, DeclarationRecord


CATCH_ALL = "all"


class KindQuery:
    """Parsed kind filter."""

    def __init__(self, prefixes: Optional[List[str]] = None):
        """
        Args:
            prefixes: Lower-cased kind prefixes; None or empty selects everything
        """
        self.prefixes = [p.lower() for p in (prefixes or [])]

    @classmethod
    def parse(cls, text: Optional[str]) -> 'KindQuery':
        """
        Parse "fn,struct" style query text.

        Blank tokens are ignored; "all" anywhere selects every kind.
        """
        if not text:
            return cls()
        tokens = [token.strip().lower() for token in text.split(",")]
        tokens = [token for token in tokens if token]
        if CATCH_ALL in tokens:
            return cls()
        return cls(tokens)

    @property
    def matches_all(self) -> bool:
        return not self.prefixes

    def matches(self, kind: DeclarationKind) -> bool:
        if self.matches_all:
            return True
        name = kind.value.lower()
        return any(name.startswith(prefix) for prefix in self.prefixes)

    def kinds(self) -> List[DeclarationKind]:
        """Selected kinds in DeclarationKind order."""
        return [kind for kind in DeclarationKind if self.matches(kind)]

    def select_file(self, file_inventory: FileInventory) -> List[Tuple[DeclarationKind, List[DeclarationRecord]]]:
        """Matching (kind, records) groups of one file; empty kinds omitted."""
        return [
            (kind, file_inventory.records(kind))
            for kind in file_inventory.kinds()
            if self.matches(kind)
        ]

    def select(self, inventory: Inventory) -> List[Tuple[str, List[Tuple[DeclarationKind, List[DeclarationRecord]]]]]:
        """
        Files with at least one matching record, in inventory order.

        Read-only: the inventory is not modified.
        """
        selected = []
        for path, file_inventory in inventory.items():
            groups = self.select_file(file_inventory)
            if groups:
                selected.append((path, groups))
        return selected

    def __repr__(self) -> str:
        return f"KindQuery({','.join(self.prefixes) or CATCH_ALL})"
