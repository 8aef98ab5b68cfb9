"""
Core — Data layer for pubscan

Contains the foundational pieces:
- Inventory: DeclarationKind, DeclarationRecord, FileInventory, Inventory
- Errors: Fatal read errors and per-file parse failures
- Locator: Source file discovery
- Query: Kind-prefix filtering
- Parsing: tree-sitter parsing and declaration extraction
"""

from .inventory import DeclarationKind, DeclarationRecord, FileInventory, Inventory, OPAQUE_NAME
from .errors import ScanError, DirectoryReadError, FileReadError, ParseFailure
from .locator import SourceLocator
from .query import KindQuery, CATCH_ALL

__all__ = [
    # Inventory
    "DeclarationKind", "DeclarationRecord", "FileInventory", "Inventory", "OPAQUE_NAME",
    # Errors
    "ScanError", "DirectoryReadError", "FileReadError", "ParseFailure",
    # Discovery and filtering
    "SourceLocator", "KindQuery", "CATCH_ALL",
]
