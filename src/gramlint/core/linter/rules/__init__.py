"""Lint rules for grammar, spacing and spelling."""
from . import spacing, words, dialect
from .base import FunctionRule, LintRule, describe
from .dialect import DialectSpellingRule, DIALECTS, DEFAULT_DIALECT

# Registry of all available rules, in default run order
RULES: dict[str, LintRule] = {
    # Spacing rules
    "missing_space_after_comma": FunctionRule("missing_space_after_comma", spacing.missing_space_after_comma),
    "space_before_punctuation": FunctionRule("space_before_punctuation", spacing.space_before_punctuation),
    "repeated_spaces": FunctionRule("repeated_spaces", spacing.repeated_spaces),

    # Word rules
    "repeated_word": FunctionRule("repeated_word", words.repeated_word),
    "sentence_capitalization": FunctionRule("sentence_capitalization", words.sentence_capitalization),
    "article_agreement": FunctionRule("article_agreement", words.article_agreement),

    # Spelling rules
    "dialect_spelling": DialectSpellingRule(),
}

# Rules in the curated group
DEFAULT_RULES = tuple(RULES)


def build_rule(name: str, dialect_name: str = DEFAULT_DIALECT) -> LintRule:
    """
    Get a rule instance by name, configured for a dialect where it applies.

    Raises:
        KeyError: Unknown rule name
    """
    if name not in RULES:
        raise KeyError(name)
    if name == DialectSpellingRule.rule_id:
        return DialectSpellingRule(dialect_name)
    return RULES[name]


__all__ = [
    "RULES",
    "DEFAULT_RULES",
    "DIALECTS",
    "DEFAULT_DIALECT",
    "LintRule",
    "FunctionRule",
    "DialectSpellingRule",
    "build_rule",
    "describe",
    "spacing",
    "words",
    "dialect",
]
