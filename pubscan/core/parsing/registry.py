"""
Parser Registry — Which LanguageConfig handles which file.

SourceLocator asks it whether a file is a source at all; the scanner asks
it for the config that parses and extracts that file. Routing is by
lower-cased file suffix.

Usage:
    registry = create_default_registry()
    registry.get_config(Path("src/lib.rs"))   # RUST_CONFIG
    registry.get_config(Path("README.md"))    # None
"""

from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import LanguageConfig


class ParserRegistry:
    """Suffix -> LanguageConfig routing table."""

    def __init__(self):
        self._by_name: Dict[str, LanguageConfig] = {}
        self._by_suffix: Dict[str, LanguageConfig] = {}

    def register(self, config: LanguageConfig) -> None:
        """
        Add a config and claim its extensions.

        Re-registering a config under the same name replaces it.

        Raises:
            ValueError: If another language already claims one of the extensions
        """
        suffixes = {ext.lower() for ext in config.extensions}
        for suffix in suffixes:
            owner = self._by_suffix.get(suffix)
            if owner is not None and owner.name != config.name:
                raise ValueError(
                    f"Extension {suffix} already registered to {owner.name}, "
                    f"cannot register to {config.name}"
                )

        previous = self._by_name.get(config.name)
        if previous is not None:
            for suffix in {ext.lower() for ext in previous.extensions}:
                self._by_suffix.pop(suffix, None)

        self._by_name[config.name] = config
        for suffix in suffixes:
            self._by_suffix[suffix] = config

    def get_config(self, file_path: Path) -> Optional[LanguageConfig]:
        return self._by_suffix.get(Path(file_path).suffix.lower())

    def is_supported(self, file_path: Path) -> bool:
        return self.get_config(file_path) is not None

    def all_exclude_patterns(self) -> List[str]:
        """Exclude globs of every registered language, sorted and deduplicated."""
        return sorted({
            pattern
            for config in self._by_name.values()
            for pattern in config.exclude_patterns
        })

    def all_build_dirs(self) -> Dict[str, str]:
        """Build output dir name -> parent manifest, across registered languages."""
        merged: Dict[str, str] = {}
        for config in self._by_name.values():
            merged.update(config.build_dirs)
        return merged

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name


def create_default_registry(extensions: Optional[Iterable[str]] = None) -> ParserRegistry:
    """
    Registry with the built-in Rust config.

    Args:
        extensions: Suffixes routed to Rust instead of the default {'.rs'}
    """
    from .languages import RUST_CONFIG

    config = RUST_CONFIG
    if extensions:
        config = replace(RUST_CONFIG, extensions={ext.lower() for ext in extensions})

    registry = ParserRegistry()
    registry.register(config)
    return registry
