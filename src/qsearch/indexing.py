"""
Indexing pipeline: corpus directory → parser → tokenizer → index.

Best-effort semantics:
- A file that cannot be read or parsed is skipped and reported
- A subdirectory that cannot be listed is skipped and reported
- Only a missing/unreadable corpus root aborts the run

Traversal uses an explicit stack instead of recursion so deep trees cannot
exhaust the call stack, and each directory is visited once by its resolved
path so symlink cycles terminate.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Set, Union

from .errors import CorpusNotFoundError, MalformedContentError, MissingExtensionError
from .index.base import BaseIndex
from .index.policy import ExactPolicy, IngestionPolicy
from .parsers import ParserRegistry
from .tokenizer import normalize

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Why a file or directory was skipped"""
    IO_ERROR = "io_error"
    MISSING_EXTENSION = "missing_extension"
    MALFORMED_CONTENT = "malformed_content"
    DIRECTORY_ERROR = "directory_error"


@dataclass
class IndexingFailure:
    """Single skipped file or directory"""
    path: str
    kind: FailureKind
    message: str


@dataclass
class IndexingReport:
    """Outcome of a corpus scan"""
    indexed: List[str] = field(default_factory=list)
    failures: List[IndexingFailure] = field(default_factory=list)
    token_count: int = 0

    @property
    def succeeded(self) -> bool:
        """True when no file or directory was skipped"""
        return not self.failures

    def add_failure(self, path: Union[str, Path], kind: FailureKind, message: str):
        self.failures.append(IndexingFailure(str(path), kind, message))
        logger.warning(f"Skipping {path} ({kind.value}): {message}")


class IndexingPipeline:
    """
    Feeds every file under a corpus root into an index.

    Example:
        >>> pipeline = IndexingPipeline(ParserRegistry.default())
        >>> index = TFIDFIndex()
        >>> report = pipeline.index_directory("docs", index)
        >>> index.save("index.json")
    """

    def __init__(
        self,
        registry: Optional[ParserRegistry] = None,
        policy: Optional[IngestionPolicy] = None,
    ):
        self.registry = registry if registry is not None else ParserRegistry.default()
        self.policy = policy if policy is not None else ExactPolicy()

    def index_directory(self, root: Union[str, Path], index: BaseIndex) -> IndexingReport:
        """
        Walk root depth-first and index every file found.

        Args:
            root: Corpus root directory
            index: Index receiving the tokens (mutated in place)

        Returns:
            IndexingReport with indexed files and per-file failures

        Raises:
            CorpusNotFoundError: If root is not a readable directory
        """
        root = Path(root)
        if not root.is_dir():
            raise CorpusNotFoundError(f"Corpus root '{root}' is not a directory")

        logger.info(f"Indexing corpus: {root}")
        report = IndexingReport()
        visited: Set[str] = set()
        stack = [root]

        while stack:
            directory = stack.pop()
            real_path = os.path.realpath(directory)
            if real_path in visited:
                logger.debug(f"Already visited {directory} ({real_path}), skipping")
                continue
            visited.add(real_path)

            try:
                entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
            except OSError as e:
                if directory == root:
                    raise CorpusNotFoundError(f"Cannot read corpus root '{root}': {e}") from e
                report.add_failure(directory, FailureKind.DIRECTORY_ERROR, str(e))
                continue

            subdirectories = []
            for entry in entries:
                path = Path(entry.path)
                try:
                    is_dir = entry.is_dir()
                except OSError as e:
                    report.add_failure(path, FailureKind.IO_ERROR, str(e))
                    continue

                if is_dir:
                    subdirectories.append(path)
                else:
                    self.index_file(path, index, report)

            # Reversed so the first subdirectory is processed next
            stack.extend(reversed(subdirectories))

        logger.info(
            f"Indexed {len(report.indexed)} files ({report.token_count} tokens), "
            f"skipped {len(report.failures)}"
        )
        return report

    def index_file(self, path: Path, index: BaseIndex, report: IndexingReport) -> bool:
        """
        Parse, tokenize and ingest a single file.

        Failures are recorded in report instead of raised.

        Returns:
            True if the file was indexed
        """
        try:
            parser = self.registry.resolve(path)
        except MissingExtensionError as e:
            report.add_failure(path, FailureKind.MISSING_EXTENSION, str(e))
            return False

        try:
            with open(path, 'rb') as f:
                content = f.read()
            text = parser(content)
        except OSError as e:
            report.add_failure(path, FailureKind.IO_ERROR, str(e))
            return False
        except MalformedContentError as e:
            report.add_failure(path, FailureKind.MALFORMED_CONTENT, str(e))
            return False

        document = str(path)
        token_count = 0
        for term in normalize(text):
            term = self.policy(term)
            if term is None:
                continue
            index.handle_token(document, term)
            token_count += 1

        report.indexed.append(document)
        report.token_count += token_count
        logger.debug(f"Done indexing: {document} ({token_count} tokens)")
        return True
