"""
Inventory — Data model for the public declaration surface

Three layers, smallest first:
- DeclarationRecord: one public declaration (kind, name, file, line, fields)
- FileInventory: all records of one file, grouped by kind in visit order
- Inventory: one FileInventory per successfully parsed file

Nesting in the source (functions inside modules, fields inside structs) is
never represented structurally here. Everything a file exposes lands in
that file's single FileInventory.

Usage:
    from pubscan.core.inventory import DeclarationKind, DeclarationRecord, FileInventory, Inventory

    file_inv = FileInventory("src/lib.rs")
    file_inv.add(DeclarationRecord(DeclarationKind.FUNCTION, "run", "src/lib.rs", 3))

    inventory = Inventory()
    inventory.publish(file_inv)   # freezes file_inv
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class DeclarationKind(Enum):
    """
    Closed set of declaration kinds.

    Values are the canonical names used for display and query matching.
    Declaration order is rendering order.
    """
    FUNCTION = "Fn"
    STRUCT = "Struct"
    ENUM = "Enum"
    TRAIT = "Trait"
    TRAIT_FUNCTION = "TraitFn"
    MODULE = "Mod"
    CONSTANT = "Const"
    STATIC = "Static"
    TYPE_ALIAS = "Type"
    UNION = "Union"
    EXTERN_CRATE = "ExternCrate"
    FOREIGN_FUNCTION = "ForeignFn"
    USE = "Use"
    MACRO = "Macro"
    OPAQUE = "Opaque"


# Name given to fragments whose identity cannot be recovered syntactically
OPAQUE_NAME = "<opaque>"


@dataclass
class DeclarationRecord:
    """A public declaration found in one file."""
    kind: DeclarationKind
    name: str                               # Qualified where applicable (e.g., "Display::fmt")
    file_path: str                          # Declaring file, as discovered under the scan root
    line: Optional[int] = None              # 1-indexed
    fields: Optional[Dict[str, str]] = None # field name -> type text, source order

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


class FileInventory:
    """
    Records of one file, grouped by kind.

    Write-only while the file is being walked; frozen once published into
    an Inventory. Duplicates are kept: two inherent methods named `new` in
    different impl blocks are two records.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._records: Dict[DeclarationKind, List[DeclarationRecord]] = {}
        self._frozen = False

    def add(self, record: DeclarationRecord) -> None:
        """
        Append a record under its own kind.

        Raises:
            RuntimeError: If the inventory has been frozen
            ValueError: If the record belongs to another file
        """
        if self._frozen:
            raise RuntimeError(f"Inventory for {self.file_path} is frozen")
        if record.file_path != self.file_path:
            raise ValueError(
                f"Record {record.name} declared in {record.file_path}, "
                f"cannot add to inventory of {self.file_path}"
            )
        self._records.setdefault(record.kind, []).append(record)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def records(self, kind: DeclarationKind) -> List[DeclarationRecord]:
        """Records of one kind in visit order (a copy)."""
        return list(self._records.get(kind, []))

    def kinds(self) -> List[DeclarationKind]:
        """Kinds present in this file, in DeclarationKind order."""
        return [kind for kind in DeclarationKind if self._records.get(kind)]

    def names(self, kind: DeclarationKind) -> List[str]:
        return [record.name for record in self._records.get(kind, [])]

    def all_records(self) -> Iterator[DeclarationRecord]:
        for kind in self.kinds():
            yield from self._records[kind]

    def to_dict(self) -> Dict[str, list]:
        return {
            kind.value: [record.to_dict() for record in self._records[kind]]
            for kind in self.kinds()
        }

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())

    def __contains__(self, kind: DeclarationKind) -> bool:
        return bool(self._records.get(kind))

    def __repr__(self) -> str:
        return f"FileInventory({self.file_path!r}, records={len(self)})"


class Inventory:
    """
    Scan result: file path -> FileInventory.

    Only successfully parsed files appear. Iteration follows publish order.
    """

    def __init__(self):
        self._files: Dict[str, FileInventory] = {}

    def publish(self, file_inventory: FileInventory) -> None:
        """
        Freeze a finished FileInventory and store it under its path.

        Raises:
            ValueError: If the path already has an inventory
        """
        path = file_inventory.file_path
        if path in self._files:
            raise ValueError(f"Inventory for {path} already published")
        file_inventory.freeze()
        self._files[path] = file_inventory

    def get(self, file_path: str) -> Optional[FileInventory]:
        return self._files.get(file_path)

    def files(self) -> List[str]:
        return list(self._files.keys())

    def items(self) -> Iterator[Tuple[str, FileInventory]]:
        return iter(list(self._files.items()))

    def record_count(self) -> int:
        return sum(len(file_inv) for file_inv in self._files.values())

    def find(self, kind: DeclarationKind, name: str) -> List[DeclarationRecord]:
        """All records with the given kind and name, across files."""
        return [
            record
            for file_inv in self._files.values()
            for record in file_inv.records(kind)
            if record.name == name
        ]

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {path: file_inv.to_dict() for path, file_inv in self._files.items()}

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, file_path: str) -> bool:
        return file_path in self._files
