"""
Exclusion patterns for source discovery.

Globs are matched against "/" + the root-relative posix path, so
"**/.git/*" prunes at any depth and "/vendor/*" only at the scan root.
Directories are tested with a trailing "/".

Build output is not a glob: a directory named `target` is Cargo's only
when its parent holds a Cargo.toml. A `src/target/` module directory is
ordinary source.

Usage:
    from pubscan.core.parsing.exclusions import ExclusionSet, build_dirs, default_patterns

    excluded = ExclusionSet(default_patterns('rust') + ['**/generated/*'])
    excluded.matches('.git/')            # True
    build_dirs('rust')                   # {'target': 'Cargo.toml'}
"""

import fnmatch
from typing import Dict, Iterable, List, Tuple


# Never source: VCS metadata and editor state
COMMON_PATTERNS: Tuple[str, ...] = (
    '**/.git/*',
    '**/.hg/*',
    '**/.svn/*',
    '**/.idea/*',
    '**/.vscode/*',
)

# Language-specific globs
LANGUAGE_PATTERNS: Dict[str, Tuple[str, ...]] = {}

# Build output directory name -> manifest file that marks its parent
BUILD_DIRS: Dict[str, Dict[str, str]] = {
    'rust': {'target': 'Cargo.toml'},
}


def default_patterns(language: str) -> List[str]:
    """Common patterns plus the language's own, sorted and deduplicated."""
    return sorted(set(COMMON_PATTERNS) | set(LANGUAGE_PATTERNS.get(language, ())))


def build_dirs(language: str) -> Dict[str, str]:
    """Build output directories of a language, keyed by directory name."""
    return dict(BUILD_DIRS.get(language, {}))


class ExclusionSet:
    """An ordered, deduplicated set of exclude globs."""

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: List[str] = []
        self.extend(patterns)

    def extend(self, patterns: Iterable[str]) -> None:
        for pattern in patterns:
            if pattern and pattern not in self.patterns:
                self.patterns.append(pattern)

    def matches(self, rel_path: str) -> bool:
        """
        Check a root-relative posix path.

        Args:
            rel_path: e.g. "src/gen/out.rs", or "src/gen/" for a directory
        """
        candidate = "/" + rel_path.lstrip("/")
        return any(fnmatch.fnmatchcase(candidate, pattern) for pattern in self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"ExclusionSet({self.patterns!r})"
