"""
Factory to resolve ranking strategies by name.
"""

import logging
from typing import Dict, Type

from .base import BaseIndex
from .tfidf import TFIDFIndex

logger = logging.getLogger(__name__)


class IndexFactory:
    """Factory to create index instances based on configuration."""

    STRATEGIES: Dict[str, Type[BaseIndex]] = {
        "tfidf": TFIDFIndex,
    }

    @classmethod
    def index_class(cls, strategy: str) -> Type[BaseIndex]:
        """
        Resolve a strategy name to its index class.

        Raises:
            ValueError: If the strategy is unknown
        """
        index_class = cls.STRATEGIES.get(strategy.lower())
        if index_class is None:
            raise ValueError(
                f"Unknown index strategy: {strategy}. "
                f"Valid options: {', '.join(sorted(cls.STRATEGIES))}"
            )
        return index_class

    @classmethod
    def create(cls, strategy: str = "tfidf") -> BaseIndex:
        """Create an empty index for the given strategy."""
        index_class = cls.index_class(strategy)
        logger.debug(f"Creating {index_class.__name__} for strategy '{strategy}'")
        return index_class()
