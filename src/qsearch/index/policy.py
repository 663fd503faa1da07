"""
Ingestion policies applied to every term before it reaches an index.

The same policy must be used when indexing and when querying, otherwise
query terms will not match indexed terms.

- ExactPolicy: terms are indexed as tokenized (plain TF-IDF)
- StopwordStemmingPolicy: drop stop words, then stem with Snowball
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..stemmer import stem

# English stopwords (based on Elasticsearch/Lucene standard list)
STOPWORDS = frozenset([
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'but', 'by',
    'for', 'if', 'in', 'into', 'is', 'it',
    'no', 'not', 'of', 'on', 'or', 'such',
    'that', 'the', 'their', 'then', 'there', 'these',
    'they', 'this', 'to', 'was', 'will', 'with'
])


class IngestionPolicy(ABC):
    """Maps a normalised term to the term to index, or None to drop it"""

    name = "base"

    @abstractmethod
    def __call__(self, term: str) -> Optional[str]:
        pass


class ExactPolicy(IngestionPolicy):
    name = "exact"

    def __call__(self, term: str) -> Optional[str]:
        return term


class StopwordStemmingPolicy(IngestionPolicy):
    """
    Drop stop words, stem everything else.

    Stop words are compared case-insensitively against the upper-cased
    terms produced by the tokenizer.

    Example:
        >>> policy = StopwordStemmingPolicy()
        >>> policy("THE") is None
        True
        >>> policy("RUNNING")
        'RUN'
    """

    name = "stemmed"

    def __init__(self, stopwords: Iterable[str] = STOPWORDS):
        self.stopwords = frozenset(word.upper() for word in stopwords)

    def __call__(self, term: str) -> Optional[str]:
        if term in self.stopwords:
            return None
        return stem(term)


POLICIES = {
    ExactPolicy.name: ExactPolicy,
    StopwordStemmingPolicy.name: StopwordStemmingPolicy,
}


def get_policy(name: str) -> IngestionPolicy:
    """Create an ingestion policy by name ("exact" or "stemmed")."""
    try:
        return POLICIES[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown ingestion policy: {name}. "
            f"Valid options: {', '.join(sorted(POLICIES))}"
        ) from None
