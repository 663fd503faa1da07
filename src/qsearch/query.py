"""
Query pipeline: free text → normalised terms → index ranking.

Query text goes through the same tokenizer and ingestion policy as
document text, so query terms line up with indexed terms. Duplicate
terms are kept and contribute to the score once per occurrence.
"""

import logging
from typing import List, Optional

from .index.base import BaseIndex, RankedDocument
from .index.policy import ExactPolicy, IngestionPolicy
from .tokenizer import normalize

logger = logging.getLogger(__name__)


def build_query_terms(text: str, policy: Optional[IngestionPolicy] = None) -> List[str]:
    """
    Turn a query string into index terms.

    Examples:
        >>> build_query_terms("how to")
        ['HOW', 'TO']
        >>> build_query_terms("cat cat")
        ['CAT', 'CAT']
    """
    policy = policy if policy is not None else ExactPolicy()
    terms = []
    for term in normalize(text):
        term = policy(term)
        if term is not None:
            terms.append(term)
    return terms


def query_index(
    text: str,
    index: BaseIndex,
    policy: Optional[IngestionPolicy] = None,
) -> List[RankedDocument]:
    """
    Rank every indexed document against a free-text query.

    Args:
        text: Query string as typed by the user
        index: Loaded index (read only)
        policy: Ingestion policy the index was built with

    Returns:
        Full ranked list; truncating to the top K is up to the caller
    """
    terms = build_query_terms(text, policy)
    logger.debug(f"Query {text!r} -> terms {terms}")
    return index.query(terms)
