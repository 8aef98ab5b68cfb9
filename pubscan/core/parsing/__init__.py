"""
Parsing module — Public declaration extraction via tree-sitter.

This module provides the pieces between a source file and its inventory:
- LanguageConfig: Per-language extraction rules
- DeclarationQuery: AST node to declaration kind mapping
- ParserRegistry: Extension-based routing
- TreeParser: Source text to syntax tree (ParseFailure on invalid text)
- DeclarationExtractor: Syntax tree to FileInventory

Design principle: Language rules live in config; the extractor only walks.

Usage:
    from pubscan.core.parsing import TreeParser, DeclarationExtractor
    from pubscan.core.parsing.languages import RUST_CONFIG

    tree = TreeParser(RUST_CONFIG).parse(source)
    file_inventory = DeclarationExtractor(RUST_CONFIG).extract(tree, source, "src/lib.rs")
"""

from .config import LanguageConfig, DeclarationQuery
from .registry import ParserRegistry, create_default_registry
from .parser import TreeParser
from .extractor import DeclarationExtractor
from .exclusions import ExclusionSet, default_patterns

__all__ = [
    'LanguageConfig',
    'DeclarationQuery',
    'ParserRegistry',
    'create_default_registry',
    'TreeParser',
    'DeclarationExtractor',
    'ExclusionSet',
    'default_patterns',
]
