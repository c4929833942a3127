"""Document: the unit of analysis."""
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from .errors import InvalidSpan, ParseError
from .tokenizer import Token, TokenKind, tokenize

if TYPE_CHECKING:
    from .linter.models import Lint, Span

logger = logging.getLogger(__name__)


class Document:
    """
    Immutable text plus its tokenization.

    Tokens are computed once at construction. Rules only ever read from a
    Document, so one instance can be shared across threads.
    """

    __slots__ = ("_text", "_tokens")

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise ParseError(f"Expected str, got {type(text).__name__}")

        for offset, ch in enumerate(text):
            if 0xD800 <= ord(ch) <= 0xDFFF:
                raise ParseError(
                    f"Lone surrogate U+{ord(ch):04X} at offset {offset} "
                    f"is not a Unicode scalar value"
                )

        # str is immutable, so holding the caller's object is already a copy
        self._text = text
        self._tokens = tuple(tokenize(text))
        logger.debug(f"Created document: {len(text)} chars, {len(self._tokens)} tokens")

    @classmethod
    def create(cls, text: str) -> "Document":
        """Create a Document, raising ParseError for text that is not valid Unicode."""
        return cls(text)

    @classmethod
    def from_file(cls, path: Path) -> "Document":
        """Read a UTF-8 file into a Document."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"{path} is not valid UTF-8: {e}") from e
        return cls(content)

    @property
    def text(self) -> str:
        return self._text

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def token_count(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        preview = self._text[:30] + "..." if len(self._text) > 30 else self._text
        return f"Document({preview!r}, tokens={len(self._tokens)})"

    def token_text(self, token: Token) -> str:
        return self._text[token.start:token.end]

    def fragment(self, item: "Span | Lint") -> str:
        """
        Return the text covered by a Span, or by a Lint's span.

        Raises:
            InvalidSpan: If the span does not fit inside this document's text
        """
        span = getattr(item, "span", item)
        start, end = span.start, span.end
        if start < 0 or end < start or end > len(self._text):
            raise InvalidSpan(
                f"Span [{start}, {end}) is invalid for text of length {len(self._text)}"
            )
        return self._text[start:end]

    def words(self) -> Iterator[tuple[int, Token]]:
        """Yield (index, token) for every WORD token."""
        for index, token in enumerate(self._tokens):
            if token.kind is TokenKind.WORD:
                yield index, token

    def next_significant(self, index: int) -> int | None:
        """Index of the first non-whitespace token after `index`, or None."""
        for i in range(index + 1, len(self._tokens)):
            if not self._tokens[i].is_whitespace:
                return i
        return None

    def previous_significant(self, index: int) -> int | None:
        """Index of the last non-whitespace token before `index`, or None."""
        for i in range(index - 1, -1, -1):
            if not self._tokens[i].is_whitespace:
                return i
        return None
