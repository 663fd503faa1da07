"""
TF-IDF ranking strategy.

Formula:
    tf(t, d)   = count(t, d) / terms_per_document[d]
    idf(t)     = log10(N / df(t))        (0 when no document contains t)
    score(q, d) = Σ tf(t, d) × idf(t)    over every term t in q

Where:
    count(t, d) = occurrences of term t in document d
    terms_per_document[d] = total token occurrences in d (not distinct terms)
    N = number of indexed documents
    df(t) = number of documents containing t

Persistence:
    JSON with two tables, validated with pydantic on load:
    {
        "global_index": {"docs/a.txt": {"CAT": 2, "SAT": 1}},
        "terms_per_document": {"docs/a.txt": 3}
    }
"""

import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from pydantic import BaseModel, PositiveInt, ValidationError, model_validator

from ..errors import DeserializationError, PersistenceReadError, PersistenceWriteError
from .base import BaseIndex, RankedDocument

logger = logging.getLogger(__name__)


class TFIDFSnapshot(BaseModel):
    """On-disk schema of a TF-IDF index"""
    global_index: Dict[str, Dict[str, PositiveInt]]
    terms_per_document: Dict[str, PositiveInt]

    @model_validator(mode="after")
    def check_tables_consistent(self) -> "TFIDFSnapshot":
        if self.global_index.keys() != self.terms_per_document.keys():
            missing = set(self.global_index) ^ set(self.terms_per_document)
            raise ValueError(
                f"Frequency and length tables cover different documents: {sorted(missing)[:5]}"
            )
        for document, counts in self.global_index.items():
            total = sum(counts.values())
            if total != self.terms_per_document[document]:
                raise ValueError(
                    f"Length of '{document}' is {self.terms_per_document[document]}, "
                    f"but its term counts sum to {total}"
                )
        return self


class TFIDFIndex(BaseIndex):
    """
    TF-IDF index over a corpus of documents keyed by file path.

    Example:
        >>> index = TFIDFIndex()
        >>> for term in ["THE", "CAT", "SAT"]:
        ...     index.handle_token("a.txt", term)
        >>> for term in ["THE", "DOG", "SAT"]:
        ...     index.handle_token("b.txt", term)
        >>> index.query(["CAT"])[0].document
        'a.txt'
    """

    def __init__(
        self,
        global_index: Dict[str, Dict[str, int]] = None,
        terms_per_document: Dict[str, int] = None,
    ):
        self.global_index: Dict[str, Dict[str, int]] = global_index if global_index is not None else {}
        self.terms_per_document: Dict[str, int] = terms_per_document if terms_per_document is not None else {}

    def __len__(self) -> int:
        return len(self.terms_per_document)

    @property
    def document_count(self) -> int:
        """Number of indexed documents (N in the IDF formula)"""
        return len(self.terms_per_document)

    def handle_token(self, document: str, term: str):
        counts = self.global_index.get(document)
        if counts is None:
            self.global_index[document] = {term: 1}
            self.terms_per_document[document] = 1
            return

        counts[term] = counts.get(term, 0) + 1
        # Length counts every occurrence, repeated terms included
        self.terms_per_document[document] += 1

    def get_document_terms(self, document: str) -> List[Tuple[str, int]]:
        """
        Terms of a document sorted by frequency (descending), term on ties.

        Returns:
            List of (term, count) pairs, empty for an unknown document
        """
        counts = self.global_index.get(document)
        if not counts:
            return []
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def get_term_count(self, term: str, document: str) -> int:
        """Raw occurrence count of term in document (0 if absent)"""
        return self.global_index.get(document, {}).get(term, 0)

    def get_term_frequency(self, term: str, document: str) -> float:
        """tf(t, d) in [0, 1]; 0 when the document or the term is absent."""
        counts = self.global_index.get(document)
        if counts is None or term not in counts:
            return 0.0
        return counts[term] / self.terms_per_document[document]

    def get_documents_with_term(self, term: str) -> List[str]:
        """Documents containing term, sorted by document key"""
        return sorted(
            document for document, counts in self.global_index.items() if term in counts
        )

    def get_inverse_document_frequency(self, term: str) -> float:
        """idf(t) = log10(N / df(t)); 0 when no document contains the term."""
        df = sum(1 for counts in self.global_index.values() if term in counts)
        if df == 0:
            return 0.0
        return math.log10(self.document_count / df)

    def query(self, query_terms: Sequence[str]) -> List[RankedDocument]:
        # IDF does not depend on the document, compute once per distinct term
        idf = {term: self.get_inverse_document_frequency(term) for term in set(query_terms)}

        results = []
        for document in self.global_index:
            score = 0.0
            for term in query_terms:
                score += self.get_term_frequency(term, document) * idf[term]
            results.append(RankedDocument(document, score))

        results.sort(key=lambda result: (-result.score, result.document))
        logger.debug(f"Ranked {len(results)} documents for {len(query_terms)} query terms")
        return results

    def to_snapshot(self) -> TFIDFSnapshot:
        return TFIDFSnapshot(
            global_index=self.global_index,
            terms_per_document=self.terms_per_document,
        )

    def save(self, path: Union[str, Path]):
        path = Path(path)
        data = self.to_snapshot().model_dump()
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as e:
            logger.error(f"Could not write index file {path}: {e}")
            raise PersistenceWriteError(f"Could not write index file '{path}': {e}") from e

        logger.info(f"Saved index: {self.document_count} documents -> {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TFIDFIndex":
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read index file {path}: {e}")
            raise PersistenceReadError(f"Could not read index file '{path}': {e}") from e

        try:
            snapshot = TFIDFSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Invalid index file {path}: {e.error_count()} errors")
            raise DeserializationError(f"Invalid index file '{path}':\n{e}") from e

        logger.info(f"Loaded index: {len(snapshot.terms_per_document)} documents <- {path}")
        return cls(
            global_index=snapshot.global_index,
            terms_per_document=snapshot.terms_per_document,
        )
