"""
Tokenizer shared by the indexing and query pipelines.

Tokenization rules, applied until the buffer is exhausted:
1. Skip leading whitespace
2. Alphanumeric character -> maximal run of alphanumeric characters
3. Numeric character -> maximal run of numeric characters
   (unreachable: every numeric character is also alphanumeric)
4. Anything else -> a single-character token (punctuation, symbols)

Tokens are never empty and whitespace is never emitted. Normalisation
(upper-casing) is the caller's job, see normalize().
"""

from typing import Callable, Iterator, List


class Tokenizer:
    """
    Single-pass iterator over the tokens of an in-memory string.

    To tokenize the same text again, construct a new Tokenizer.

    Examples:
        >>> list(Tokenizer("abc123 def!"))
        ['abc123', 'def', '!']
    """

    def __init__(self, content: str):
        self._content = content
        self._pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def _trim_left(self):
        while self._pos < len(self._content) and self._content[self._pos].isspace():
            self._pos += 1

    def _eat(self, n: int) -> str:
        token = self._content[self._pos:self._pos + n]
        self._pos += n
        return token

    def _eat_while(self, predicate: Callable[[str], bool]) -> str:
        n = 0
        while self._pos + n < len(self._content) and predicate(self._content[self._pos + n]):
            n += 1
        return self._eat(n)

    def next_token(self):
        """Return the next token, or None once the buffer is exhausted."""
        self._trim_left()
        if self._pos >= len(self._content):
            return None

        first = self._content[self._pos]
        if first.isalnum():
            return self._eat_while(str.isalnum)
        elif first.isnumeric():
            return self._eat_while(str.isnumeric)
        return self._eat(1)


def normalize(text: str) -> List[str]:
    """
    Tokenize text and upper-case every token.

    Used for both document text and query strings so that terms match.

    Examples:
        >>> normalize("abc123 def!")
        ['ABC123', 'DEF', '!']

        >>> normalize("   ")
        []
    """
    if not text:
        return []
    return [token.upper() for token in Tokenizer(text)]
