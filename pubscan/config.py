"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Command-line flags (applied by the CLI via apply_overrides)
  2. Environment variables (PUBSCAN_*)
  3. Project config (<scan root>/.pubscan/config.yaml)
  4. User config (~/.pubscan/config.yaml)
  5. Defaults

Malformed config files are ignored; invalid values are reported by
Config.validate() and abort the CLI.
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .output import VALID_FORMATS
from .presentation.symbols import get_symbols


VALID_SYMBOLS = ("auto", "unicode", "ascii")

TRUE_VALUES = ("1", "true", "yes")


@dataclass
class ScanConfig:
    """What to scan and how."""
    extensions: List[str] = field(default_factory=lambda: [".rs"])
    exclude: List[str] = field(default_factory=list)  # Extra globs on top of defaults
    jobs: int = 1                                       # Worker processes
    strict_reads: bool = False                          # Unreadable file aborts the scan

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.extensions:
            return "scan.extensions must list at least one extension"
        for ext in self.extensions:
            if not isinstance(ext, str) or not ext.startswith("."):
                return f"Invalid extension '{ext}'. Extensions start with '.' (e.g. '.rs')"
        if not isinstance(self.exclude, list) or not all(isinstance(p, str) for p in self.exclude):
            return "scan.exclude must be a list of glob patterns"
        if isinstance(self.jobs, bool) or not isinstance(self.jobs, int) or self.jobs < 1:
            return f"Invalid jobs value '{self.jobs}'. Use a positive integer"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    format: str = "text"   # "text" | "json"
    query: str = "all"     # Kind prefixes, comma-separated

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.symbols not in VALID_SYMBOLS:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(VALID_SYMBOLS)}"

        if self.format not in VALID_FORMATS:
            return f"Unknown format '{self.format}'. Valid: {', '.join(VALID_FORMATS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> Optional[str]:
        """First error across sections, or None."""
        return self.scan.validate() or self.display.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "scan": {
                "extensions": list(self.scan.extensions),
                "exclude": list(self.scan.exclude),
                "jobs": self.scan.jobs,
                "strict_reads": self.scan.strict_reads,
            },
            "display": {
                "symbols": self.display.symbols,
                "format": self.display.format,
                "query": self.display.query,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        scan_data = data.get("scan") or {}
        display_data = data.get("display") or {}

        extensions = scan_data.get("extensions", [".rs"])
        if isinstance(extensions, str):
            extensions = [extensions]
        exclude = scan_data.get("exclude") or []
        if isinstance(exclude, str):
            exclude = [exclude]

        return cls(
            scan=ScanConfig(
                extensions=list(extensions),
                exclude=list(exclude),
                jobs=scan_data.get("jobs", 1),
                strict_reads=bool(scan_data.get("strict_reads", False)),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                format=display_data.get("format", "text"),
                query=str(display_data.get("query") or "all"),
            ),
        )


def _parse_jobs(value: str):
    """Integer when possible; the raw text otherwise so validate() reports it."""
    try:
        return int(value)
    except ValueError:
        return value


class ConfigManager:
    """
    Manages configuration loading.

    Hierarchy:
      1. Environment variables
      2. Project config (<project>/.pubscan/config.yaml)
      3. User config (~/.pubscan/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".pubscan"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".pubscan"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else None
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path or self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("PUBSCAN_JOBS"):
            config_data.setdefault("scan", {})["jobs"] = _parse_jobs(os.environ["PUBSCAN_JOBS"])
        if os.environ.get("PUBSCAN_STRICT_READS"):
            strict = os.environ["PUBSCAN_STRICT_READS"].lower() in TRUE_VALUES
            config_data.setdefault("scan", {})["strict_reads"] = strict
        if os.environ.get("PUBSCAN_FORMAT"):
            config_data.setdefault("display", {})["format"] = os.environ["PUBSCAN_FORMAT"]
        if os.environ.get("PUBSCAN_SYMBOLS"):
            config_data.setdefault("display", {})["symbols"] = os.environ["PUBSCAN_SYMBOLS"]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Parsed YAML mapping, or {} when missing or malformed."""
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError):
            return {}  # Ignore malformed config
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, dict)}

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        def source(path: Path) -> str:
            return f"{symbols.check_pass} {path}" if path.exists() else f"{symbols.check_fail} {path} (not found)"

        exclude = ", ".join(config.scan.exclude) or "(defaults only)"
        return "\n".join([
            "Configuration:",
            "",
            "Scan:",
            f"  Extensions: {', '.join(config.scan.extensions)}",
            f"  Exclude: {exclude}",
            f"  Jobs: {config.scan.jobs}",
            f"  Strict reads: {str(config.scan.strict_reads).lower()}",
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            f"  Format: {config.display.format}",
            f"  Query: {config.display.query}",
            "",
            "Sources:",
            f"  User: {source(self.user_config_path)}",
            f"  Project: {source(self.project_config_path)}",
        ])


def apply_overrides(config: Config, **overrides: Any) -> Config:
    """
    Apply command-line values on top of a loaded config.

    None means "not given on the command line". Exclude patterns are
    appended to the configured ones rather than replacing them.

    Args:
        config: Loaded configuration (modified in place)
        **overrides: jobs, strict_reads, exclude, symbols, format, query

    Returns:
        The same Config, for chaining
    """
    if overrides.get("jobs") is not None:
        config.scan.jobs = overrides["jobs"]
    if overrides.get("strict_reads"):
        config.scan.strict_reads = True
    if overrides.get("exclude"):
        config.scan.exclude = list(config.scan.exclude) + list(overrides["exclude"])
    for key in ("symbols", "format", "query"):
        if overrides.get(key) is not None:
            setattr(config.display, key, overrides[key])
    return config
