"""
pubscan — Public surface inventory for Rust source trees

Walks a directory, parses every Rust file with tree-sitter, and records
the declarations each file exposes publicly: functions, types, traits,
modules, constants, foreign items, uses and macros.

Usage:
    pubscan --path src
    pubscan --path src --query fn,struct
    pubscan --path . --format json --jobs 4

    from pubscan import Scanner, render
    result = Scanner().scan(Path("src"))
    print(render(result.inventory, query="trait"))
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.inventory import DeclarationKind, DeclarationRecord, FileInventory, Inventory
from .core.errors import ScanError, DirectoryReadError, FileReadError, ParseFailure
from .core.query import KindQuery
from .core.locator import SourceLocator
from .core.parsing import TreeParser, DeclarationExtractor, ParserRegistry, create_default_registry

# Services layer
from .services.scanner import Scanner, ScanResult, ScanDiagnostic

# Presentation layer
from .presentation.symbols import get_symbols, SymbolSet, UNICODE, ASCII
from .output import render

# Config (stays at root)
from .config import Config, ConfigManager

__all__ = [
    "__version__",
    # Core
    "DeclarationKind", "DeclarationRecord", "FileInventory", "Inventory",
    "ScanError", "DirectoryReadError", "FileReadError", "ParseFailure",
    "KindQuery", "SourceLocator",
    "TreeParser", "DeclarationExtractor", "ParserRegistry", "create_default_registry",
    # Services
    "Scanner", "ScanResult", "ScanDiagnostic",
    # Presentation
    "get_symbols", "SymbolSet", "UNICODE", "ASCII", "render",
    # Config
    "Config", "ConfigManager",
]
