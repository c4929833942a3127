"""Whitespace and punctuation spacing rules."""
from typing import Generator

from ...document import Document
from ...tokenizer import TokenKind
from ..models import Lint, LintKind, Span

# Punctuation that should sit directly after the preceding word
CLOSING_PUNCTUATION = frozenset(",.;:!?")


def missing_space_after_comma(document: Document) -> Generator[Lint, None, None]:
    """
    Flag a comma directly followed by a word.

    The span covers the comma and the word so the suggestion can re-insert
    the missing space between them.
    """
    tokens = document.tokens

    for i, token in enumerate(tokens[:-1]):
        if token.kind is not TokenKind.PUNCTUATION or document.token_text(token) != ",":
            continue

        following = tokens[i + 1]
        if following.kind is not TokenKind.WORD:
            continue

        word = document.token_text(following)
        yield Lint(
            span=Span(token.start, following.end),
            message="Missing space after comma",
            suggestions=(f", {word}",),
            rule_id="missing_space_after_comma",
            kind=LintKind.FORMATTING,
        )


def space_before_punctuation(document: Document) -> Generator[Lint, None, None]:
    """
    Flag whitespace between a word and closing punctuation.

    "Hello !" becomes "Hello!". Whitespace at the start of a line is left alone.
    """
    tokens = document.tokens

    for i in range(1, len(tokens) - 1):
        space = tokens[i]
        if space.kind is not TokenKind.WHITESPACE:
            continue

        before, after = tokens[i - 1], tokens[i + 1]
        if before.kind not in (TokenKind.WORD, TokenKind.NUMBER):
            continue
        if after.kind is not TokenKind.PUNCTUATION:
            continue

        mark = document.token_text(after)
        if mark not in CLOSING_PUNCTUATION:
            continue

        yield Lint(
            span=Span(space.start, after.end),
            message=f"Unneeded space before '{mark}'",
            suggestions=(mark,),
            rule_id="space_before_punctuation",
            kind=LintKind.PUNCTUATION,
        )


def repeated_spaces(document: Document) -> Generator[Lint, None, None]:
    """
    Flag runs of two or more spaces between words.

    Runs that start a line or end the text are indentation or trailing
    whitespace, not word spacing, and are skipped.
    """
    tokens = document.tokens

    for i in range(1, len(tokens) - 1):
        token = tokens[i]
        if token.kind is not TokenKind.WHITESPACE or token.length < 2:
            continue

        if tokens[i - 1].is_whitespace or tokens[i + 1].is_whitespace:
            continue

        yield Lint(
            span=Span(token.start, token.end),
            message=f"{token.length} consecutive spaces (expected 1)",
            suggestions=(" ",),
            rule_id="repeated_spaces",
            kind=LintKind.FORMATTING,
        )
