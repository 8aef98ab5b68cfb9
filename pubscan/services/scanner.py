"""
Scanner -- Public surface inventory of a source tree

Pipeline per file:
  SourceLocator (discover) -> TreeParser (parse) -> DeclarationExtractor
  (extract) -> Inventory.publish

Failure policy:
- Directory that cannot be listed: fatal, raised before any file is parsed
- File that cannot be read/decoded: skipped with a diagnostic
  (fatal with strict_reads)
- File that does not parse: skipped with a diagnostic, scan continues

Files are independent, so with jobs > 1 they are parsed in worker
processes; each worker returns its own FileInventory and results are
published keyed by path in discovery order.
"""

from concurrent.futures import ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.errors import FileReadError, ParseFailure
from ..core.inventory import FileInventory, Inventory
from ..core.locator import SourceLocator
from ..core.parsing import DeclarationExtractor, TreeParser, ParserRegistry, create_default_registry
from ..core.parsing.config import LanguageConfig


# =============================================================================
# Diagnostic Categories
# =============================================================================

DIAG_PARSE = "parse"   # File skipped: not syntactically valid
DIAG_READ = "read"     # File skipped: unreadable or not UTF-8

_UTF8_BOM = b"\xef\xbb\xbf"


# =============================================================================
# Data Models
# =============================================================================

@dataclass
class ScanDiagnostic:
    """One skipped file."""
    path: str
    category: str  # DIAG_PARSE | DIAG_READ
    message: str

    def format(self) -> str:
        verb = "parse" if self.category == DIAG_PARSE else "read"
        return f"Failed to {verb} file {self.path}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "category": self.category, "message": self.message}


@dataclass
class ScanResult:
    """Inventory plus the files that did not make it in."""
    inventory: Inventory
    diagnostics: List[ScanDiagnostic] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def files_skipped(self) -> int:
        return len(self.diagnostics)

    @property
    def has_parse_errors(self) -> bool:
        return any(d.category == DIAG_PARSE for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "declarations": self.inventory.record_count(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


# =============================================================================
# Per-file Work
# =============================================================================

def read_source(path: Path) -> bytes:
    """
    Read a source file as UTF-8 bytes (BOM stripped).

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileReadError(str(path), e.strerror or str(e)) from e
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileReadError(str(path), f"invalid UTF-8 at byte {e.start}") from e
    if raw.startswith(_UTF8_BOM):
        raw = raw[len(_UTF8_BOM):]
    return raw


def scan_file(
    path: Path,
    config: LanguageConfig,
    strict_reads: bool = False,
) -> Tuple[Optional[FileInventory], Optional[ScanDiagnostic]]:
    """
    Parse and extract one file.

    Module-level so worker processes can run it.

    Args:
        path: Source file
        config: Language config routing this file
        strict_reads: Raise FileReadError instead of returning a diagnostic

    Returns:
        (FileInventory, None) on success, (None, ScanDiagnostic) when skipped

    Raises:
        FileReadError: Only with strict_reads
    """
    file_path = str(path)
    try:
        source = read_source(path)
    except FileReadError as e:
        if strict_reads:
            raise
        return None, ScanDiagnostic(file_path, DIAG_READ, e.reason)

    try:
        tree = TreeParser(config).parse(source)
    except ParseFailure as e:
        return None, ScanDiagnostic(file_path, DIAG_PARSE, str(e))

    return DeclarationExtractor(config).extract(tree, source, file_path), None


# =============================================================================
# Scanner
# =============================================================================

class Scanner:
    """
    Runs a full scan of one root.

    Stateless between scans: every call re-walks every file.
    """

    def __init__(
        self,
        registry: Optional[ParserRegistry] = None,
        exclude: Optional[Iterable[str]] = None,
        jobs: int = 1,
        strict_reads: bool = False,
    ):
        """
        Args:
            registry: Language routing (default: Rust only)
            exclude: Extra exclude globs, added to the registry's defaults
            jobs: Worker processes; 1 scans in-process
            strict_reads: Treat unreadable files as fatal
        """
        self.registry = registry or create_default_registry()
        patterns = self.registry.all_exclude_patterns() + list(exclude or [])
        self.locator = SourceLocator(self.registry, patterns)
        self.jobs = max(1, jobs)
        self.strict_reads = strict_reads

    def scan(self, root: Path) -> ScanResult:
        """
        Scan a root directory (or a single file).

        Raises:
            DirectoryReadError: If discovery fails (nothing is parsed)
            FileReadError: If a file cannot be read and strict_reads is set
        """
        files = self.locator.locate(Path(root))

        if self.jobs > 1 and len(files) > 1:
            outcomes = self._run_parallel(files)
        else:
            outcomes = self._run_sequential(files)

        result = ScanResult(inventory=Inventory(), files_scanned=len(files))
        for file_inventory, diagnostic in outcomes:
            if diagnostic is not None:
                result.diagnostics.append(diagnostic)
            else:
                result.inventory.publish(file_inventory)
        return result

    def _run_sequential(self, files: List[Path]):
        for path in files:
            yield scan_file(path, self.registry.get_config(path), self.strict_reads)

    def _run_parallel(self, files: List[Path]):
        """
        Parse in worker processes, results in discovery order.

        Falls back to sequential when the pool cannot start or breaks.
        """
        configs = [self.registry.get_config(path) for path in files]
        try:
            with ProcessPoolExecutor(max_workers=self.jobs) as executor:
                return list(executor.map(
                    scan_file, files, configs, [self.strict_reads] * len(files)
                ))
        except (OSError, BrokenProcessPool):
            return list(self._run_sequential(files))
