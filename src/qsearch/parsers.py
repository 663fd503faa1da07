"""
Text extraction for the indexing pipeline.

Every parser takes raw file content (bytes) and returns plain text:
- txt: UTF-8 decode (latin-1 fallback)
- xml: character data of every element joined by a single space (xmltodict)
- html: rendered text with markup removed (html2text)

Parsers are selected by file extension through a ParserRegistry that the
caller builds and passes to the pipeline. Unregistered extensions fall back
to the plain-text parser.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, Iterator, Mapping, Optional, Union
from xml.parsers.expat import ExpatError

import html2text
import xmltodict

from .errors import MalformedContentError, MissingExtensionError

logger = logging.getLogger(__name__)

Parser = Callable[[bytes], str]

# Markdown that html2text adds around element text
_MARKDOWN_LINE_PREFIX = re.compile(r"^\s*(?:#+|>+|[*+-]|\d+\.)\s+")
_MARKDOWN_RULE = re.compile(r"^[\s:*_-]*$")


def extract_text_from_txt(content: bytes) -> str:
    """
    Decode a plain text file.

    Args:
        content: Raw file bytes

    Returns:
        Text content, unchanged
    """
    try:
        return content.decode('utf-8')
    except UnicodeDecodeError:
        # latin-1 never fails
        logger.warning("UTF-8 decode failed, using latin-1")
        return content.decode('latin-1', errors='replace')


def _iter_character_data(node) -> Iterator[str]:
    if node is None:
        return
    if isinstance(node, str):
        yield node
    elif isinstance(node, list):
        for item in node:
            yield from _iter_character_data(item)
    elif isinstance(node, Mapping):
        for key, value in node.items():
            if key.startswith('@'):
                continue
            yield from _iter_character_data(value)


def extract_text_from_xml(content: bytes) -> str:
    """
    Extract character data from an XML document.

    Attribute values are not indexed, only text nodes. Each text node is
    followed by a single space.

    Args:
        content: Raw XML bytes

    Returns:
        Concatenated text nodes

    Raises:
        MalformedContentError: If the XML cannot be parsed
    """
    try:
        data = xmltodict.parse(
            content,
            attr_prefix='@',      # Attributes get @ prefix (skipped)
            cdata_key='#text',    # Text content key
            cdata_separator=' ',  # Mixed content: foo<b>x</b>bar -> "foo bar"
        )
    except ExpatError as e:
        raise MalformedContentError(f"Malformed XML: {e}") from e

    return ''.join(f"{text} " for text in _iter_character_data(data))


def extract_text_from_html(content: bytes) -> str:
    """
    Extract readable text from an HTML document.

    html2text renders the document as Markdown; links, images and emphasis
    are switched off in the converter, and the remaining Markdown syntax
    (heading hashes, list bullets, quote markers, table pipes and rules) is
    stripped afterwards so only element text reaches the tokenizer.

    Args:
        content: Raw HTML bytes

    Returns:
        Element text, one rendered block per line
    """
    html_string = content.decode('utf-8', errors='replace')

    converter = html2text.HTML2Text()
    converter.ignore_links = True
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.body_width = 0  # No line wrapping

    return _strip_markdown(converter.handle(html_string))


def _strip_markdown(markdown: str) -> str:
    lines = []
    for line in markdown.splitlines():
        line = line.replace('|', ' ')
        # Horizontal rules, table separator rows and blank lines
        if _MARKDOWN_RULE.match(line):
            continue
        lines.append(_MARKDOWN_LINE_PREFIX.sub('', line))
    return '\n'.join(lines)


class ParserRegistry:
    """
    Dispatch table mapping lowercase file extensions (without the dot) to parsers.

    Built explicitly by the caller and handed to the indexing pipeline;
    there is no process-wide registry.

    Example:
        >>> registry = ParserRegistry.default()
        >>> registry.resolve("notes/readme.md") is extract_text_from_txt
        True
    """

    def __init__(
        self,
        parsers: Optional[Mapping[str, Parser]] = None,
        fallback: Parser = extract_text_from_txt,
    ):
        self._parsers: Dict[str, Parser] = {}
        self.fallback = fallback
        for extension, parser in (parsers or {}).items():
            self.register(extension, parser)

    @classmethod
    def default(cls) -> "ParserRegistry":
        """Registry with the built-in txt, xml and html parsers"""
        return cls({
            'txt': extract_text_from_txt,
            'xml': extract_text_from_xml,
            'html': extract_text_from_html,
            'htm': extract_text_from_html,
        })

    @staticmethod
    def _normalize_extension(extension: str) -> str:
        return extension.lower().lstrip('.')

    def register(self, extension: str, parser: Parser):
        """Register (or replace) the parser for an extension."""
        self._parsers[self._normalize_extension(extension)] = parser

    def __contains__(self, extension: str) -> bool:
        return self._normalize_extension(extension) in self._parsers

    @property
    def extensions(self):
        return sorted(self._parsers)

    def resolve(self, path: Union[str, Path]) -> Parser:
        """
        Select the parser for a file.

        Raises:
            MissingExtensionError: If the file name has no extension
        """
        suffix = Path(path).suffix
        if not suffix:
            raise MissingExtensionError(path)

        extension = self._normalize_extension(suffix)
        parser = self._parsers.get(extension)
        if parser is None:
            logger.debug(f"No parser registered for '.{extension}', parsing {path} as text")
            return self.fallback
        return parser

    def parse(self, path: Union[str, Path], content: bytes) -> str:
        """Extract text from file content using the parser for path."""
        return self.resolve(path)(content)
