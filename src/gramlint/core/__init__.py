"""Core linting engine: tokenizer, documents, lints and rule groups."""
from .document import Document
from .errors import IndexOutOfRange, InvalidSpan, LintError, ParseError, RuleFault
from .tokenizer import Token, TokenKind, tokenize
from .linter import Lint, LintGroup, LintKind, LintResult, Span

__all__ = [
    "Document",
    "Token",
    "TokenKind",
    "tokenize",
    "Lint",
    "LintGroup",
    "LintKind",
    "LintResult",
    "Span",
    "LintError",
    "ParseError",
    "InvalidSpan",
    "IndexOutOfRange",
    "RuleFault",
]
