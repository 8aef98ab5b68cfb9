"""
SourceLocator — Recursive discovery of source files under a root.

Entries are visited in name order so scans are reproducible. A directory
that cannot be listed aborts discovery with DirectoryReadError; nothing
is parsed before discovery finishes.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Set

from .errors import DirectoryReadError
from .parsing.exclusions import ExclusionSet
from .parsing.registry import ParserRegistry


class SourceLocator:
    """
    Finds files routed by a ParserRegistry.

    Excluded directories are pruned, not descended into, and so are build
    output directories whose parent holds the language manifest (Cargo's
    `target/` next to `Cargo.toml`). Symlinked directories are followed
    once per resolved target.
    """

    def __init__(self, registry: ParserRegistry, exclude_patterns: Optional[Iterable[str]] = None):
        """
        Args:
            registry: Decides which extensions are sources
            exclude_patterns: Globs matched against "/" + root-relative path;
                defaults to the registry's patterns
        """
        self.registry = registry
        if exclude_patterns is None:
            exclude_patterns = registry.all_exclude_patterns()
        self.excluded = ExclusionSet(exclude_patterns)
        self.build_dirs = registry.all_build_dirs()

    def locate(self, root: Path) -> List[Path]:
        """
        List source files under root (or root itself if it is a file).

        Args:
            root: Scan root

        Returns:
            Paths joined onto root, in traversal order

        Raises:
            DirectoryReadError: If any directory cannot be listed
        """
        root = Path(root)
        if root.is_file():
            return [root] if self.registry.is_supported(root) else []
        if not root.is_dir():
            raise DirectoryReadError(str(root), "not a directory")

        found: List[Path] = []
        self._walk(root, root, found, set())
        return found

    def _walk(self, directory: Path, root: Path, found: List[Path], seen: Set[Path]) -> None:
        try:
            resolved = directory.resolve()
        except OSError as e:
            raise DirectoryReadError(str(directory), e.strerror or str(e)) from e
        if resolved in seen:
            return
        seen.add(resolved)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise DirectoryReadError(str(directory), e.strerror or str(e)) from e

        for entry in entries:
            rel = entry.relative_to(root).as_posix()
            if entry.is_dir():
                if self.excluded.matches(rel + "/") or self._is_build_output(entry):
                    continue
                self._walk(entry, root, found, seen)
            elif self.registry.is_supported(entry) and not self.excluded.matches(rel):
                found.append(entry)

    def _is_build_output(self, directory: Path) -> bool:
        manifest = self.build_dirs.get(directory.name)
        return manifest is not None and (directory.parent / manifest).is_file()
