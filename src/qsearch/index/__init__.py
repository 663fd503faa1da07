"""
Pluggable index strategies.

Usage:
    from qsearch.index import IndexFactory

    index = IndexFactory.create("tfidf")
    index.handle_token("docs/a.txt", "CAT")
    index.save("index.json")

    index = IndexFactory.index_class("tfidf").load("index.json")
    results = index.query(["CAT"])
"""

from .base import BaseIndex, RankedDocument
from .tfidf import TFIDFIndex, TFIDFSnapshot
from .policy import IngestionPolicy, ExactPolicy, StopwordStemmingPolicy, get_policy
from .factory import IndexFactory

__all__ = [
    'BaseIndex',
    'RankedDocument',
    'TFIDFIndex',
    'TFIDFSnapshot',
    'IngestionPolicy',
    'ExactPolicy',
    'StopwordStemmingPolicy',
    'get_policy',
    'IndexFactory',
]
