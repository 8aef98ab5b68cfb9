"""
Symbols — Markers used in inventory output

Unicode when the terminal can show it, ASCII otherwise. Chosen by the
display.symbols setting ("auto" detects).

Also provides safe_print(): identifiers and type text come straight from
source files, so printing must survive narrow console encodings.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SymbolSet:
    """Markers for one output style."""
    check_pass: str   # config source found
    check_warn: str   # skipped file
    check_fail: str   # fatal error
    tree_branch: str  # field, more follow
    tree_end: str     # last field
    ellipsis: str     # truncated text


UNICODE = SymbolSet(
    check_pass='✓',
    check_warn='⚠',
    check_fail='✗',
    tree_branch='├─',
    tree_end='└─',
    ellipsis='…',
)

ASCII = SymbolSet(
    check_pass='[OK]',
    check_warn='[!]',
    check_fail='[ERR]',
    tree_branch='+-',
    tree_end='+-',
    ellipsis='...',
)

# Unicode markers with their ASCII stand-ins, for safe_print
_FALLBACKS = {
    getattr(UNICODE, name): getattr(ASCII, name)
    for name in SymbolSet.__dataclass_fields__
}

_UTF_ENCODINGS = ('utf8', 'utf16', 'utf16le', 'utf16be', 'utf32')
_NARROW_ENCODINGS = ('ascii', 'latin1', 'iso88591')


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


def supports_unicode() -> bool:
    """
    Guess whether stdout can show the Unicode markers.

    Order: PUBSCAN_ASCII_ONLY / PUBSCAN_UNICODE overrides, stdout
    encoding, locale, Windows Terminal. Unknown means ASCII.
    """
    if _env_flag('PUBSCAN_ASCII_ONLY'):
        return False
    if _env_flag('PUBSCAN_UNICODE'):
        return True

    encoding = getattr(sys.stdout, 'encoding', None)
    if encoding:
        normalized = encoding.lower().replace('-', '').replace('_', '')
        if normalized in _UTF_ENCODINGS:
            return True
        if normalized.startswith('cp') or normalized in _NARROW_ENCODINGS:
            return False

    locale = (os.environ.get('LC_ALL', '') + ' ' + os.environ.get('LANG', '')).lower()
    if 'utf-8' in locale or 'utf8' in locale:
        return True

    return bool(os.environ.get('WT_SESSION'))


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Symbol set for a display.symbols value.

    Args:
        preference: "unicode", "ascii", or "auto"/None to detect
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    print() that never fails on encoding.

    On UnicodeEncodeError the Unicode markers are swapped for their ASCII
    forms; whatever still cannot be encoded becomes '?'.

    Args:
        text: Text to print
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    stream = file if file is not None else sys.stdout
    try:
        print(text, end=end, file=stream)
        return
    except UnicodeEncodeError:
        pass

    for marker, fallback in _FALLBACKS.items():
        text = text.replace(marker, fallback)
    try:
        print(text, end=end, file=stream)
    except UnicodeEncodeError:
        encoding = getattr(stream, 'encoding', None) or 'utf-8'
        print(text.encode(encoding, errors='replace').decode(encoding), end=end, file=stream)
