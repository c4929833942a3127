"""Word-level grammar rules."""
from typing import Generator

from ...document import Document
from ...tokenizer import TokenKind
from ..models import Lint, LintKind, Span

# Words that are legitimately doubled ("I had had enough", "he said that that...")
ALLOWED_REPEATS = frozenset({"had", "that"})

SENTENCE_TERMINATORS = frozenset(".!?")

# Consonant-initial words that take "an" (silent h)
AN_EXCEPTIONS = ("hour", "honest", "honor", "honour", "heir")

# Vowel-initial words that take "a" (pronounced with a leading consonant sound)
A_EXCEPTIONS = ("uni", "use", "usu", "uti", "ure", "eu", "ewe", "one", "once")

VOWELS = frozenset("aeiou")


def repeated_word(document: Document) -> Generator[Lint, None, None]:
    """
    Flag a word immediately repeated after a single space.

    "the the cat" -> "the cat". Comparison ignores case.
    """
    tokens = document.tokens

    for i in range(len(tokens) - 2):
        first, gap, second = tokens[i], tokens[i + 1], tokens[i + 2]
        if first.kind is not TokenKind.WORD or second.kind is not TokenKind.WORD:
            continue
        if gap.kind is not TokenKind.WHITESPACE:
            continue

        word = document.token_text(first)
        if word.casefold() != document.token_text(second).casefold():
            continue
        if word.casefold() in ALLOWED_REPEATS:
            continue

        yield Lint(
            span=Span(first.start, second.end),
            message=f"The word '{word}' is repeated",
            suggestions=(word,),
            rule_id="repeated_word",
            kind=LintKind.REPETITION,
        )


def sentence_capitalization(document: Document) -> Generator[Lint, None, None]:
    """
    Flag sentences that start with a lowercase letter.

    A sentence starts at the beginning of the text or after '.', '!' or '?'
    followed by whitespace. A period after a single letter ("e.g.") is taken
    to be an abbreviation.
    """
    tokens = document.tokens
    at_sentence_start = True

    for i, token in enumerate(tokens):
        if token.is_whitespace:
            continue

        if token.kind is TokenKind.WORD:
            word = document.token_text(token)
            if at_sentence_start and word[0].islower():
                yield Lint(
                    span=Span(token.start, token.end),
                    message="This sentence does not start with a capital letter",
                    suggestions=(word[0].upper() + word[1:],),
                    rule_id="sentence_capitalization",
                    kind=LintKind.CAPITALIZATION,
                )
            at_sentence_start = False
            continue

        if token.kind is TokenKind.PUNCTUATION and document.token_text(token) in SENTENCE_TERMINATORS:
            followed_by_space = i + 1 < len(tokens) and tokens[i + 1].is_whitespace
            prev = document.previous_significant(i)
            abbreviation = (
                prev is not None
                and tokens[prev].kind is TokenKind.WORD
                and tokens[prev].length == 1
            )
            if followed_by_space and not abbreviation:
                at_sentence_start = True
            continue

        # Quotes, brackets and numbers leave the sentence state as it is
        if token.kind is TokenKind.NUMBER:
            at_sentence_start = False


def _expected_article(word: str) -> str | None:
    """Return "a" or "an" for the following word, or None if unsure."""
    if len(word) > 1 and word.isupper():
        return None  # acronyms depend on letter names ("an FBI agent")
    lower = word.lower()
    if lower.startswith(AN_EXCEPTIONS):
        return "an"
    if lower.startswith(A_EXCEPTIONS):
        return "a"
    if lower[0] in VOWELS:
        return "an"
    if lower[0].isalpha() and lower[0].isascii():
        return "a"
    return None


def article_agreement(document: Document) -> Generator[Lint, None, None]:
    """
    Flag "a" before a vowel sound and "an" before a consonant sound.

    Uses the first letters of the next word plus a short exception list, so
    it stays quiet on acronyms and words it cannot judge.
    """
    tokens = document.tokens

    for i in range(len(tokens) - 2):
        article, gap, noun = tokens[i], tokens[i + 1], tokens[i + 2]
        if article.kind is not TokenKind.WORD or noun.kind is not TokenKind.WORD:
            continue
        if gap.kind is not TokenKind.WHITESPACE:
            continue

        written = document.token_text(article)
        if written.lower() not in ("a", "an"):
            continue

        expected = _expected_article(document.token_text(noun))
        if expected is None or expected == written.lower():
            continue

        replacement = expected.capitalize() if written[0].isupper() else expected
        yield Lint(
            span=Span(article.start, article.end),
            message=f"Use '{replacement}' instead of '{written}'",
            suggestions=(replacement,),
            rule_id="article_agreement",
            kind=LintKind.WORD_CHOICE,
        )
