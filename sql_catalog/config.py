"""Configuration management for SQL Catalog."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".sqlite3"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class DatabaseConfig:
    """Where snapshots and source data live, and how connections are opened."""

    snapshot_dir: str = "db"
    data_dir: str = "data"
    foreign_keys: bool = True

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Create config from environment variables."""
        return cls(
            snapshot_dir=os.getenv("SQL_CATALOG_SNAPSHOT_DIR", "db"),
            data_dir=os.getenv("SQL_CATALOG_DATA_DIR", "data"),
            foreign_keys=_env_flag("SQL_CATALOG_FOREIGN_KEYS", "true"),
        )

    def snapshot_path(self, domain: str, label: str) -> Path:
        """Return the file backing the snapshot ``label`` of ``domain``.

        Example: ``db/movies-04.sqlite3``.
        """
        return Path(self.snapshot_dir) / f"{domain}-{label}{SNAPSHOT_SUFFIX}"


@dataclass
class CatalogConfig:
    """Configuration for the stage runner and the CLI."""

    # Upper bound for one stage, enforced by the caller
    stage_timeout_s: float = 180.0

    # Output settings
    colored_output: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Create config from environment variables."""
        return cls(
            stage_timeout_s=float(os.getenv("SQL_CATALOG_STAGE_TIMEOUT_S", "180")),
            colored_output=_env_flag("COLORED_OUTPUT", "true"),
            log_level=os.getenv("SQL_CATALOG_LOG_LEVEL", "INFO"),
            log_file=os.getenv("SQL_CATALOG_LOG_FILE") or None,
        )


def setup_logging(config: CatalogConfig) -> None:
    """Configure logging based on catalog config."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
    )
