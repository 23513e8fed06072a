"""Configuration management for Casper.

Config resolution order (highest priority first):
1. Programmatic (CasperConfig constructed in code)
2. Environment variables (CASPER_DATA_DIRS, CASPER_BRIEF_LENGTH, ...)
3. Config file (./casper.yaml, or the path in CASPER_CONFIG)
4. Hardcoded defaults

A ``.env`` file in the working directory is loaded into the environment first.
"""

import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

DEFAULT_CONFIG_FILE = Path("casper.yaml")


def config_file_path() -> Path:
    """Config file in use: $CASPER_CONFIG if set, else ./casper.yaml."""
    if val := os.environ.get("CASPER_CONFIG"):
        return Path(val)
    return DEFAULT_CONFIG_FILE


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean env/config string.

    Raises:
        ValueError: If the string is not a recognised boolean
    """
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


# =============================================================================
# Config dataclass
# =============================================================================


@dataclass
class CasperConfig:
    """Top-level casper configuration.

    Examples:
        # Package use, no files needed
        config = CasperConfig(data_dirs=["./data"], strict_fields=True)

        # CLI use, loads ./casper.yaml and env vars
        config = CasperConfig.load()
    """

    data_dirs: list[str] = field(default_factory=lambda: ["./data"])
    # "stderr" or a path; the report file is overwritten on every build
    error_logs: str = "stderr"
    brief_length: int = 250
    strict_fields: bool = False

    @classmethod
    def load(cls, path: Path | str | None = None) -> "CasperConfig":
        """Load config from file + env vars.

        Priority: env var values > config file values > defaults.
        """
        _ensure_dotenv()
        config = cls()
        config_path = Path(path) if path is not None else config_file_path()

        # Layer 1: config file
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
                if isinstance(data, dict):
                    _apply_dict(config, data)
                else:
                    logger.warning("Ignoring config %s: root is not a mapping", config_path)
            except (yaml.YAMLError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", config_path, exc)

        # Layer 2: env var overrides
        if val := os.environ.get("CASPER_DATA_DIRS"):
            config.data_dirs = [d for d in val.split(os.pathsep) if d]
        if val := os.environ.get("CASPER_ERROR_LOGS"):
            config.error_logs = val
        if val := os.environ.get("CASPER_BRIEF_LENGTH"):
            try:
                config.brief_length = int(val)
            except ValueError:
                logger.warning("Invalid CASPER_BRIEF_LENGTH=%r, ignoring", val)
        if val := os.environ.get("CASPER_STRICT_FIELDS"):
            try:
                config.strict_fields = parse_bool(val)
            except ValueError:
                logger.warning("Invalid CASPER_STRICT_FIELDS=%r, ignoring", val)

        return config

    def save(self, path: Path | str | None = None) -> Path:
        """Write the config file and return its path."""
        config_path = Path(path) if path is not None else config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return config_path

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return asdict(self)

    def builder_options(self) -> dict[str, Any]:
        """Keyword arguments for ManifestBuilder."""
        return {"brief_length": self.brief_length, "strict_fields": self.strict_fields}


def _apply_dict(config: CasperConfig, data: dict) -> None:
    """Apply a dict of values onto a CasperConfig, skipping invalid entries."""
    if "data_dirs" in data:
        dirs = data["data_dirs"]
        if isinstance(dirs, str):
            dirs = [dirs]
        if isinstance(dirs, list):
            config.data_dirs = [str(d) for d in dirs]
        else:
            logger.warning("Invalid data_dirs=%r in config, ignoring", dirs)
    if "error_logs" in data:
        config.error_logs = str(data["error_logs"])
    if "brief_length" in data:
        try:
            config.brief_length = int(data["brief_length"])
        except (TypeError, ValueError):
            logger.warning("Invalid brief_length=%r in config, ignoring", data["brief_length"])
    if "strict_fields" in data:
        value = data["strict_fields"]
        if isinstance(value, bool):
            config.strict_fields = value
        else:
            try:
                config.strict_fields = parse_bool(str(value))
            except ValueError:
                logger.warning("Invalid strict_fields=%r in config, ignoring", value)


_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: CasperConfig | None = None


def get_config() -> CasperConfig:
    """Get the global CasperConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = CasperConfig.load()
    return _config


def configure(config: CasperConfig) -> None:
    """Set the global CasperConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
