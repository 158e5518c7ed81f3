"""
Tokenizer for Well-Known Text.

Splits text into the atoms the geometry reader consumes: the punctuation
characters ``(``, ``)`` and ``,`` and runs of any other non-whitespace
characters (type names, keywords and numbers).
"""

import re
from collections.abc import Iterator
from types import TracebackType
from typing import TextIO

from .errors import WKTParseError

_TOKEN_PATTERN = re.compile(r"[(),]|[^\s(),]+")

# Plain decimal literals plus the non-finite spellings written by common WKT
# producers. Digit separators and locale forms are rejected.
_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    r"|[+-]?(?:inf|infinity)|nan",
    re.IGNORECASE,
)


class TextReader:
    """
    Token source over a WKT string or text stream.

    Example:
        >>> with TextReader("POINT (1 2)") as reader:
        ...     reader.read_token(), reader.peek_token()
        ('POINT', '(')
    """

    def __init__(self, text: str | TextIO):
        """
        Args:
            text: WKT string, or a text stream read to the end
        """
        if not isinstance(text, str):
            text = text.read()
        self._tokens: Iterator[re.Match[str]] | None = _TOKEN_PATTERN.finditer(text)
        self._next: str | None = None
        self._advance()

    def _advance(self) -> None:
        if self._tokens is None:
            self._next = None
            return
        match = next(self._tokens, None)
        self._next = match.group(0) if match else None

    def peek_token(self) -> str | None:
        """The next token without consuming it, or None at end of input"""
        return self._next

    def read_token(self) -> str:
        """
        Consume the next token.

        Raises:
            WKTParseError: At end of input
        """
        token = self._next
        if token is None:
            raise WKTParseError("Unexpected end of text")
        self._advance()
        return token

    def read_double(self) -> float:
        """
        Consume the next token as a 64-bit float.

        Raises:
            WKTParseError: If the token is not a number
        """
        token = self.read_token()
        if not _NUMBER_PATTERN.fullmatch(token):
            raise WKTParseError(
                f"Invalid number: '{token}'", token=token, expected=("number",)
            )
        return float(token)

    def close(self) -> None:
        self._tokens = None
        self._next = None

    def __enter__(self) -> "TextReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
