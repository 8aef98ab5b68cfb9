"""
BaseRenderer — Shared state for inventory renderers

A renderer turns an InventoryView into one string. Subclasses implement
render(); this base holds the symbol set, the terminal width and the
full/truncate switch.
"""

import shutil
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from . import InventoryView


class BaseRenderer(ABC):
    """Common setup and text helpers for renderers."""

    def __init__(
        self,
        symbols: "SymbolSet" = None,
        width: Optional[int] = None,
        full: bool = False,
    ):
        """
        Args:
            symbols: Marker set (auto-detected if None)
            width: Terminal columns (detected if None)
            full: Never truncate
        """
        from ..presentation.symbols import get_symbols

        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns
        self.full = full

    @abstractmethod
    def render(self, view: "InventoryView") -> str:
        """Render the selected part of an inventory."""

    def truncate(self, text: str, limit: int) -> str:
        """
        Shorten text to at most limit characters, ending in the ellipsis.

        Returns text unchanged in full mode or when it already fits.
        """
        if self.full or len(text) <= limit:
            return text
        ellipsis = self.symbols.ellipsis
        if limit <= len(ellipsis):
            return text[:limit]
        return text[:limit - len(ellipsis)] + ellipsis

    @staticmethod
    def plural(count: int, noun: str) -> str:
        """'1 file', '3 files'."""
        return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
