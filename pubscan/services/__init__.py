"""
Services — Scan orchestration for pubscan

Contains:
- Scanner: Discover, parse and extract a whole tree into an Inventory
"""

from .scanner import Scanner, ScanResult, ScanDiagnostic, scan_file, read_source, DIAG_PARSE, DIAG_READ

__all__ = [
    "Scanner", "ScanResult", "ScanDiagnostic",
    "scan_file", "read_source",
    "DIAG_PARSE", "DIAG_READ",
]
