"""
Presentation — Display helpers for pubscan

Contains:
- Symbols: Visual vocabulary (unicode/ascii)
- Safe printing for source-derived text
"""

from .symbols import (
    SymbolSet, UNICODE, ASCII,
    get_symbols, supports_unicode, safe_print,
)

__all__ = [
    "SymbolSet", "UNICODE", "ASCII",
    "get_symbols", "supports_unicode", "safe_print",
]
