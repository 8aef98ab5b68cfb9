"""
TreeParser — Source text to tree-sitter syntax tree.

Uses tree-sitter-language-pack for the grammar. tree-sitter recovers
from syntax errors by inserting ERROR/missing nodes; here any such node
turns the whole file into a ParseFailure, so the extractor only ever sees
clean trees.

Usage:
    from pubscan.core.parsing.parser import TreeParser
    from pubscan.core.parsing.languages import RUST_CONFIG

    parser = TreeParser(RUST_CONFIG)
    tree = parser.parse(source_bytes)   # raises ParseFailure
"""

from typing import Dict, Optional, TYPE_CHECKING

from ..errors import ParseFailure
from .config import LanguageConfig

if TYPE_CHECKING:
    from tree_sitter import Parser, Node, Tree


# Per-process parser cache (grammar name -> Parser)
_parsers: Dict[str, 'Parser'] = {}


def get_parser(tree_sitter_name: str) -> 'Parser':
    """
    Get tree-sitter parser for a language (lazy-loaded, cached).

    Args:
        tree_sitter_name: Grammar name (e.g., "rust")

    Raises:
        LookupError: If the grammar is not in the language pack
    """
    parser = _parsers.get(tree_sitter_name)
    if parser is None:
        from tree_sitter_language_pack import get_parser as pack_parser
        parser = pack_parser(tree_sitter_name)
        _parsers[tree_sitter_name] = parser
    return parser


def find_first_error(node: 'Node') -> Optional['Node']:
    """Depth-first search for the first ERROR or missing node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = find_first_error(child)
        if found is not None:
            return found
    return None


class TreeParser:
    """Parses one file's text with the grammar named by a LanguageConfig."""

    def __init__(self, config: LanguageConfig):
        self.config = config

    def parse(self, source: bytes) -> 'Tree':
        """
        Parse source bytes into a syntax tree.

        Args:
            source: UTF-8 encoded file content

        Returns:
            tree-sitter Tree with no error nodes

        Raises:
            ParseFailure: If the text is not syntactically valid
        """
        tree = get_parser(self.config.tree_sitter_name).parse(source)
        root = tree.root_node
        if not root.has_error:
            return tree

        error = find_first_error(root)
        if error is None:
            raise ParseFailure("syntax error")

        line = error.start_point[0] + 1  # tree-sitter is 0-indexed
        column = error.start_point[1] + 1
        if error.is_missing:
            raise ParseFailure(f"expected {error.type}", line, column)

        snippet = source[error.start_byte:error.end_byte].decode("utf-8", errors="replace")
        snippet = " ".join(snippet.split())
        if len(snippet) > 40:
            snippet = snippet[:37] + "..."
        message = f"unexpected `{snippet}`" if snippet else "unexpected input"
        raise ParseFailure(message, line, column)
