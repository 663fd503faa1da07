"""
Abstract base class for ranking strategies.

All index implementations must implement this interface to be swappable
between the indexing pipeline, the query pipeline and the CLI.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, NamedTuple, Sequence, Union


class RankedDocument(NamedTuple):
    """Single ranked result: document key (file path) and its relevance score"""
    document: str
    score: float


class BaseIndex(ABC):
    """
    Abstract base class for ranking strategies.

    Lifecycle: built empty, filled by handle_token() during a single corpus
    scan, saved, then loaded and only queried afterwards.
    """

    @abstractmethod
    def query(self, query_terms: Sequence[str]) -> List[RankedDocument]:
        """
        Rank every indexed document against normalised query terms.

        Args:
            query_terms: Upper-cased query terms (duplicates allowed)

        Returns:
            List of RankedDocument, sorted by score (descending)
            An empty term list scores every document 0
        """
        pass

    @abstractmethod
    def handle_token(self, document: str, term: str):
        """Record one occurrence of term in document."""
        pass

    @abstractmethod
    def save(self, path: Union[str, Path]):
        """
        Serialize the full index state to path.

        Raises:
            PersistenceWriteError: If the file cannot be written
        """
        pass

    @classmethod
    @abstractmethod
    def load(cls, path: Union[str, Path]) -> "BaseIndex":
        """
        Deserialize an index previously written by save().

        Raises:
            PersistenceReadError: If the file cannot be read
            DeserializationError: If the content is not a valid index
        """
        pass
