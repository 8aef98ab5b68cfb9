"""
Output Module — View layer for pubscan

Separates the inventory from its presentation. The scan produces an
Inventory; a KindQuery selects what to show; renderers handle display.

Usage:
    from pubscan.output import render

    result = Scanner().scan(Path("src"))
    print(render(result.inventory, query="fn,struct", format="text"))
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union, TYPE_CHECKING

from ..core.inventory import DeclarationKind, DeclarationRecord, Inventory
from ..core.query import KindQuery

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet

# Re-export for convenience
from .base import BaseRenderer
from .text import TextRenderer
from .json import JsonRenderer


EMPTY_MESSAGE = "No public declarations found."


# =============================================================================
# InventoryView — Selected slice of an inventory
# =============================================================================

@dataclass
class InventoryView:
    """
    What a renderer draws: files with at least one matching record.

    Attributes:
        files: (path, [(kind, records)]) in inventory order
        summary: Optional scan counts and diagnostics (ScanResult.to_dict)
        empty_message: Shown when no file matches
    """
    files: List[Tuple[str, List[Tuple[DeclarationKind, List[DeclarationRecord]]]]] = field(default_factory=list)
    summary: Optional[Dict[str, Any]] = None
    empty_message: str = EMPTY_MESSAGE


def build_view(
    inventory: Inventory,
    query: Union[KindQuery, str, None] = None,
    summary: Optional[Dict[str, Any]] = None,
) -> InventoryView:
    """
    Select the part of an inventory a query asks for.

    Args:
        inventory: Finished inventory (not modified)
        query: KindQuery or query text ("all" / None for everything)
        summary: Optional scan summary to carry along

    Returns:
        InventoryView ready for a renderer
    """
    if not isinstance(query, KindQuery):
        query = KindQuery.parse(query)
    return InventoryView(files=query.select(inventory), summary=summary)


# =============================================================================
# Format Registry
# =============================================================================

# Maps format name to renderer class
RENDERERS = {
    "text": TextRenderer,
    "json": JsonRenderer,
}

# Valid format values for config/CLI
VALID_FORMATS = tuple(RENDERERS.keys())


def get_renderer(format: str, symbols: "SymbolSet", width: Optional[int] = None, full: bool = False) -> BaseRenderer:
    """
    Renderer for a format name.

    Raises:
        ValueError: If format is not in VALID_FORMATS
    """
    renderer_class = RENDERERS.get(format)
    if renderer_class is None:
        raise ValueError(f"Unknown format '{format}'. Valid: {', '.join(VALID_FORMATS)}")
    return renderer_class(symbols=symbols, width=width, full=full)


def render(
    inventory: Inventory,
    query: Union[KindQuery, str, None] = None,
    format: str = "text",
    symbols: "SymbolSet" = None,
    width: Optional[int] = None,
    full: bool = False,
    summary: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Render an inventory to a formatted string.

    This is the main entry point for the output system.

    Args:
        inventory: Finished inventory (not modified)
        query: Kind filter ("all" / None for everything)
        format: "text" | "json"
        symbols: SymbolSet for visual elements (auto-detect if None)
        width: Terminal width (auto-detect if None)
        full: If True, don't truncate content
        summary: Optional scan summary appended to the output

    Returns:
        Formatted string ready for printing
    """
    import shutil
    from ..presentation.symbols import get_symbols

    if symbols is None:
        symbols = get_symbols()

    if width is None:
        width = shutil.get_terminal_size().columns

    view = build_view(inventory, query, summary)
    return get_renderer(format, symbols, width, full).render(view)


__all__ = [
    "InventoryView", "build_view", "EMPTY_MESSAGE",
    "BaseRenderer", "TextRenderer", "JsonRenderer",
    "RENDERERS", "VALID_FORMATS", "get_renderer", "render",
]
