"""Text helpers shared by the extractor and language configs."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node


def node_text(node: Optional['Node'], source: bytes) -> str:
    """Source text of a node (byte offsets, decoded as UTF-8)."""
    if node is None:
        return ""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def field_text(node: 'Node', field_name: str, source: bytes) -> Optional[str]:
    """Text of a named field in the node, or None if absent."""
    child = node.child_by_field_name(field_name)
    if child is None:
        return None
    return node_text(child, source)


def strip_whitespace(text: str) -> str:
    """Remove all whitespace ("std :: io" -> "std::io")."""
    return "".join(text.split())


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs, including newlines, to a single space."""
    return " ".join(text.split())


def line_of(node: 'Node') -> int:
    """1-indexed start line of a node."""
    return node.start_point[0] + 1
