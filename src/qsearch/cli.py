"""
Command-line driver.

    qsearch index CORPUS_DIR [--index-file PATH]
    qsearch query "free text" [--index-file PATH] [--top-k N]

Defaults come from the environment (see qsearch.config). Exit status is 1
when the corpus root is missing or the index file cannot be written, read
or deserialized.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, load_environment
from .errors import CorpusNotFoundError, PersistenceReadError, PersistenceWriteError
from .index.factory import IndexFactory
from .index.policy import get_policy
from .indexing import IndexingPipeline
from .logging_config import setup_logging
from .parsers import ParserRegistry
from .query import query_index

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qsearch", description="TF-IDF full-text search over a directory of documents")
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="Index every file under a directory")
    index_parser.add_argument("corpus", help="Corpus root directory")
    index_parser.add_argument("--index-file", default=settings.index_file, help="Output index file")

    query_parser = subparsers.add_parser("query", help="Rank indexed documents against a query")
    query_parser.add_argument("text", help="Free-text query")
    query_parser.add_argument("--index-file", default=settings.index_file, help="Index file to search")
    query_parser.add_argument("--top-k", type=int, default=settings.top_k, help="Number of results to show")

    return parser


def run_index(args: argparse.Namespace, settings: Settings) -> int:
    index = IndexFactory.create(settings.strategy)
    pipeline = IndexingPipeline(ParserRegistry.default(), get_policy(settings.ingestion))

    try:
        report = pipeline.index_directory(args.corpus, index)
        index.save(args.index_file)
    except (CorpusNotFoundError, PersistenceWriteError) as e:
        logger.error(str(e))
        return 1

    print(f"Files indexed : {len(report.indexed)}")
    print(f"Tokens        : {report.token_count}")
    print(f"Skipped       : {len(report.failures)}")
    for failure in report.failures:
        print(f"  {failure.path} ({failure.kind.value}): {failure.message}")
    print(f"Output        : {args.index_file}")
    return 0


def run_query(args: argparse.Namespace, settings: Settings) -> int:
    if args.top_k < 1:
        logger.error(f"--top-k must be positive, got {args.top_k}")
        return 1

    try:
        index = IndexFactory.index_class(settings.strategy).load(args.index_file)
    except PersistenceReadError as e:
        logger.error(str(e))
        return 1

    results = query_index(args.text, index, get_policy(settings.ingestion))
    for document, score in results[:args.top_k]:
        print(f"{document} => {score}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(log_file=settings.log_file, console_level=settings.console_level)

    args = build_parser(settings).parse_args(argv)
    if args.command == "index":
        return run_index(args, settings)
    return run_query(args, settings)


if __name__ == "__main__":
    sys.exit(main())
