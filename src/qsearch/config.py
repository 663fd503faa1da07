"""
Configuration from environment variables.

Variables are loaded from .env.local (highest priority) or .env in the
current directory, then read from the process environment:

    QSEARCH_INDEX_FILE   index file path            (default: index.json)
    QSEARCH_TOP_K        results shown per query    (default: 5)
    QSEARCH_STRATEGY     ranking strategy           (default: tfidf)
    QSEARCH_INGESTION    exact | stemmed            (default: exact)
    QSEARCH_LOG_FILE     base log file path         (default: logs/qsearch.log)
    LOG_LEVEL            console log level          (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .index.factory import IndexFactory
from .index.policy import POLICIES

logger = logging.getLogger(__name__)


def load_environment(directory: Optional[Path] = None) -> Optional[Path]:
    """
    Load .env.local or .env from directory (default: current directory).

    Returns:
        Path of the file loaded, or None if neither exists
    """
    directory = Path(directory) if directory is not None else Path.cwd()
    for name in (".env.local", ".env"):
        env_file = directory / name
        if env_file.exists():
            load_dotenv(env_file, override=True)
            return env_file
    return None


@dataclass(frozen=True)
class Settings:
    index_file: str = "index.json"
    top_k: int = 5
    strategy: str = "tfidf"
    ingestion: str = "exact"
    log_file: str = "logs/qsearch.log"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.top_k < 1:
            raise ValueError(f"QSEARCH_TOP_K must be positive, got {self.top_k}")
        # Raises ValueError for unknown strategies
        IndexFactory.index_class(self.strategy)
        if self.ingestion.lower() not in POLICIES:
            raise ValueError(
                f"Unknown QSEARCH_INGESTION: {self.ingestion}. "
                f"Valid options: {', '.join(sorted(POLICIES))}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level}")

    @property
    def console_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        top_k = os.getenv("QSEARCH_TOP_K", "5")
        try:
            top_k = int(top_k)
        except ValueError:
            raise ValueError(f"QSEARCH_TOP_K must be an integer, got {top_k!r}") from None

        return cls(
            index_file=os.getenv("QSEARCH_INDEX_FILE", "index.json"),
            top_k=top_k,
            strategy=os.getenv("QSEARCH_STRATEGY", "tfidf"),
            ingestion=os.getenv("QSEARCH_INGESTION", "exact"),
            log_file=os.getenv("QSEARCH_LOG_FILE", "logs/qsearch.log"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
