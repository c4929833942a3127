"""Exception types raised by the linting engine."""


class LintError(Exception):
    """Base class for all engine errors."""


class ParseError(LintError):
    """Text could not be turned into a Document."""


class InvalidSpan(LintError):
    """Offsets are inconsistent with the text they reference."""


class IndexOutOfRange(LintError, IndexError):
    """Suggestion index outside [0, suggestion_count())."""


class RuleFault(LintError):
    """A single rule failed internally during a group run.

    Never raised out of LintGroup.run; collected on the LintResult instead.
    """

    def __init__(self, rule_id: str, cause: BaseException):
        self.rule_id = rule_id
        self.cause = cause
        super().__init__(f"Rule {rule_id} failed: {type(cause).__name__}: {cause}")

    def to_dict(self) -> dict:
        return {
            "rule": self.rule_id,
            "error_type": type(self.cause).__name__,
            "error_message": str(self.cause),
        }
