"""Dialect-aware spelling rule."""
import importlib.resources as resources
import logging
from functools import lru_cache
from typing import Generator

import yaml

from ...document import Document
from ..models import Lint, LintKind, Span

logger = logging.getLogger(__name__)

DIALECTS = ("american", "british", "australian", "canadian")
DEFAULT_DIALECT = "american"


@lru_cache(maxsize=1)
def load_variant_table() -> list[dict[str, str]]:
    """Load the spelling variant table shipped with the package."""
    raw = resources.files(__package__).joinpath("dialects.yaml").read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    words = data.get("words", [])
    logger.debug(f"Loaded {len(words)} dialect spelling entries")
    return words


@lru_cache(maxsize=len(DIALECTS))
def _replacements_for(dialect: str) -> dict[str, str]:
    """Map every foreign spelling (lowercase) to the dialect's preferred one."""
    replacements: dict[str, str] = {}
    for entry in load_variant_table():
        preferred = entry[dialect]
        for spelling in entry.values():
            if spelling != preferred:
                replacements[spelling.lower()] = preferred
    return replacements


def _match_case(template: str, word: str) -> str:
    if template.isupper() and len(template) > 1:
        return word.upper()
    if template[0].isupper():
        return word[0].upper() + word[1:]
    return word


class DialectSpellingRule:
    """
    Flag spellings that belong to a different English dialect.

    "colour" is flagged under American English and "color" under British or
    Australian English.
    """

    rule_id = "dialect_spelling"

    def __init__(self, dialect: str = DEFAULT_DIALECT):
        dialect = dialect.lower()
        if dialect not in DIALECTS:
            raise ValueError(
                f"Unknown dialect: {dialect!r} (expected one of {', '.join(DIALECTS)})"
            )
        self.dialect = dialect
        self._replacements = _replacements_for(dialect)

    def __repr__(self) -> str:
        return f"DialectSpellingRule(dialect={self.dialect!r})"

    def analyze(self, document: Document) -> Generator[Lint, None, None]:
        for _, token in document.words():
            word = document.token_text(token)
            preferred = self._replacements.get(word.lower())
            if preferred is None:
                continue

            suggestion = _match_case(word, preferred)
            yield Lint(
                span=Span(token.start, token.end),
                message=f"'{word}' is not the {self.dialect.capitalize()} English spelling",
                suggestions=(suggestion,),
                rule_id=self.rule_id,
                kind=LintKind.SPELLING,
            )
