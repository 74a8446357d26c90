"""Configuration management for Tabletkeeper."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tabletkeeper.core.scanner import DEFAULT_BATCH_SIZE, DEFAULT_READAHEAD_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass
class TabletkeeperConfig:
    """Tabletkeeper configuration with defaults, YAML override, and CLI override."""

    log_level: str = "INFO"
    config_file: str | None = None
    table: str | None = None
    tables: list[str] = field(default_factory=list)
    pattern: str | None = None
    state_file: str | None = None
    known_tables: list[str] = field(default_factory=list)
    iterator_profiles: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    readahead_threshold: int = DEFAULT_READAHEAD_THRESHOLD
    batch_size: int = DEFAULT_BATCH_SIZE
    dry_run: bool = False

    @classmethod
    def from_yaml(cls, path: str | Path) -> TabletkeeperConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            A TabletkeeperConfig instance with values from the YAML file.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> TabletkeeperConfig:
        """Create config from a dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        unknown = sorted(k for k in data if k not in valid_fields)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def merge_cli_overrides(self, **kwargs: Any) -> TabletkeeperConfig:
        """Return a new config with CLI overrides applied (non-None values only).

        Args:
            **kwargs: CLI parameter overrides.

        Returns:
            A new TabletkeeperConfig with overrides applied.
        """
        current = {f.name: getattr(self, f.name) for f in self.__dataclass_fields__.values()}
        for key, value in kwargs.items():
            if value is not None and key in current:
                current[key] = value
        return TabletkeeperConfig(**current)

    def setup_logging(self) -> None:
        """Configure logging based on the log_level setting."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
