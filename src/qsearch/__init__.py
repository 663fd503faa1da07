"""
qsearch: full-text search over a directory of documents with TF-IDF ranking.

Components:
- tokenizer: splits text into alphanumeric runs and single-character symbols
- parsers: extension-based text extraction (txt, xml, html)
- index: pluggable ranking strategies (TF-IDF) and ingestion policies
- indexing: corpus walk feeding tokens into an index
- query: query-string normalisation and ranking

Typical flow:
    index = TFIDFIndex()
    IndexingPipeline(ParserRegistry.default()).index_directory("docs", index)
    index.save("index.json")

    results = query_index("how to", TFIDFIndex.load("index.json"))
"""

from .tokenizer import Tokenizer, normalize
from .parsers import ParserRegistry
from .index import BaseIndex, RankedDocument, TFIDFIndex, IndexFactory
from .indexing import IndexingPipeline, IndexingReport, IndexingFailure, FailureKind
from .query import build_query_terms, query_index

__version__ = "0.1.0"

__all__ = [
    "Tokenizer",
    "normalize",
    "ParserRegistry",
    "BaseIndex",
    "RankedDocument",
    "TFIDFIndex",
    "IndexFactory",
    "IndexingPipeline",
    "IndexingReport",
    "IndexingFailure",
    "FailureKind",
    "build_query_terms",
    "query_index",
]
