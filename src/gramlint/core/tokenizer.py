"""Single-pass tokenizer.

Offsets are codepoint indices into the original string. Tokens cover the text
with no gaps: joining every token's text gives back the input.

Whitespace policy:
- a maximal run of horizontal whitespace is one WHITESPACE token
- a maximal run of line breaks is one NEWLINE token
"""
from dataclasses import dataclass
from enum import Enum
import unicodedata

LINE_BREAKS = frozenset("\n\r\x0b\x0c\x85\u2028\u2029")
APOSTROPHES = frozenset("'’")
NUMBER_SEPARATORS = frozenset(".,")


class TokenKind(Enum):
    """Token categories."""
    WORD = "word"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Token:
    """A categorized [start, end) slice of a document's text."""
    kind: TokenKind
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def text_in(self, text: str) -> str:
        return text[self.start:self.end]

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    @property
    def is_whitespace(self) -> bool:
        return self.kind in (TokenKind.WHITESPACE, TokenKind.NEWLINE)


def _is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def _is_digit(ch: str) -> bool:
    return unicodedata.category(ch) == "Nd"


def _is_word_char(ch: str) -> bool:
    return _is_letter(ch) or _is_mark(ch) or _is_digit(ch)


def _is_horizontal_space(ch: str) -> bool:
    return ch.isspace() and ch not in LINE_BREAKS


def _classify_single(ch: str) -> TokenKind:
    category = unicodedata.category(ch)
    if category.startswith("P"):
        return TokenKind.PUNCTUATION
    if category.startswith("S"):
        return TokenKind.SYMBOL
    return TokenKind.UNKNOWN


def tokenize(text: str) -> list[Token]:
    """
    Split text into tokens.

    Args:
        text: Text to tokenize (empty string yields an empty list)

    Returns:
        Tokens in offset order, covering every codepoint exactly once
    """
    tokens: list[Token] = []
    n = len(text)
    i = 0

    while i < n:
        ch = text[i]
        start = i

        if ch in LINE_BREAKS:
            i += 1
            while i < n and text[i] in LINE_BREAKS:
                i += 1
            tokens.append(Token(TokenKind.NEWLINE, start, i))

        elif _is_horizontal_space(ch):
            i += 1
            while i < n and _is_horizontal_space(text[i]):
                i += 1
            tokens.append(Token(TokenKind.WHITESPACE, start, i))

        elif _is_letter(ch):
            i = _scan_word(text, i + 1)
            tokens.append(Token(TokenKind.WORD, start, i))

        elif _is_digit(ch):
            kind = TokenKind.NUMBER
            i += 1
            while i < n:
                c = text[i]
                if _is_digit(c):
                    i += 1
                elif c in NUMBER_SEPARATORS and i + 1 < n and _is_digit(text[i + 1]):
                    i += 2
                elif _is_letter(c) or _is_mark(c):
                    # "3rd", "10am": continue as a word
                    kind = TokenKind.WORD
                    i = _scan_word(text, i + 1)
                    break
                else:
                    break
            tokens.append(Token(kind, start, i))

        else:
            i += 1
            tokens.append(Token(_classify_single(ch), start, i))

    return tokens


def _scan_word(text: str, i: int) -> int:
    """Advance past the rest of a word starting at i; returns the end offset."""
    n = len(text)
    while i < n:
        c = text[i]
        if _is_word_char(c):
            i += 1
        elif c in APOSTROPHES and i + 1 < n and _is_letter(text[i + 1]) and _is_letter(text[i - 1]):
            i += 2
        else:
            break
    return i
