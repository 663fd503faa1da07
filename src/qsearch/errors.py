"""Error taxonomy for indexing, querying and index persistence."""

from pathlib import Path
from typing import Union


class QSearchError(Exception):
    """Base class for all qsearch errors"""


class MissingExtensionError(QSearchError):
    """File has no extension, so no parser can be selected"""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"File extension is missing for file '{self.path}'")


class MalformedContentError(QSearchError):
    """Parser could not make sense of the file content (e.g. broken XML)"""


class CorpusNotFoundError(QSearchError):
    """Corpus root does not exist or is not a readable directory"""


class PersistenceWriteError(QSearchError):
    """Index file could not be written"""


class PersistenceReadError(QSearchError):
    """Index file could not be read"""


class DeserializationError(PersistenceReadError):
    """Index file was read but its content is not a valid index"""
