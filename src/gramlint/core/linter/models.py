"""Data models for the linter."""
from dataclasses import dataclass, field
from enum import Enum

from ..errors import IndexOutOfRange, InvalidSpan, RuleFault


class LintKind(Enum):
    """Category of a lint, used for filtering and display."""
    SPELLING = "spelling"
    CAPITALIZATION = "capitalization"
    REPETITION = "repetition"
    FORMATTING = "formatting"
    PUNCTUATION = "punctuation"
    WORD_CHOICE = "word_choice"
    STYLE = "style"
    MISCELLANEOUS = "miscellaneous"


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) codepoint range."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise InvalidSpan(f"Invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def get_content(self, text: str) -> str:
        """Slice text by this span; never clamps."""
        if self.end > len(text):
            raise InvalidSpan(
                f"Span [{self.start}, {self.end}) exceeds text length {len(text)}"
            )
        return text[self.start:self.end]

    def as_tuple(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True)
class Lint:
    """A single finding produced by a rule."""
    span: Span
    message: str
    suggestions: tuple[str, ...] = ()
    rule_id: str = ""
    kind: LintKind = LintKind.MISCELLANEOUS

    def __post_init__(self):
        if not self.message:
            raise ValueError("Lint message must be non-empty")
        # Accept any iterable of strings but store a tuple
        if not isinstance(self.suggestions, tuple):
            object.__setattr__(self, "suggestions", tuple(self.suggestions))

    def suggestion_count(self) -> int:
        return len(self.suggestions)

    def suggestion_at(self, index: int) -> str:
        """
        Get the replacement text at `index`.

        Raises:
            IndexOutOfRange: If index is not in [0, suggestion_count())
        """
        if not 0 <= index < len(self.suggestions):
            raise IndexOutOfRange(
                f"Suggestion index {index} out of range "
                f"(lint has {len(self.suggestions)} suggestions)"
            )
        return self.suggestions[index]

    def to_dict(self) -> dict:
        return {
            "rule": self.rule_id,
            "kind": self.kind.value,
            "start": self.span.start,
            "end": self.span.end,
            "message": self.message,
            "suggestions": list(self.suggestions),
        }


@dataclass
class LintResult:
    """Ordered output of one LintGroup run."""
    lints: list[Lint] = field(default_factory=list)
    faults: list[RuleFault] = field(default_factory=list)
    cancelled: bool = False
    rules_run: list[str] = field(default_factory=list)

    def __iter__(self):
        return iter(self.lints)

    def __len__(self) -> int:
        return len(self.lints)

    @property
    def has_faults(self) -> bool:
        return bool(self.faults)

    def by_rule(self) -> dict[str, list[Lint]]:
        """Group lints by rule_id, keeping the run order inside each group."""
        grouped: dict[str, list[Lint]] = {}
        for lint in self.lints:
            grouped.setdefault(lint.rule_id, []).append(lint)
        return grouped

    def to_dict(self) -> dict:
        return {
            "total_issues": len(self.lints),
            "cancelled": self.cancelled,
            "rules_run": self.rules_run,
            "issues": [lint.to_dict() for lint in self.lints],
            "faults": [fault.to_dict() for fault in self.faults],
        }


def apply_suggestions(text: str, lints: list[Lint]) -> tuple[str, list[str]]:
    """
    Apply the first suggestion of each lint to text.

    Lints without suggestions are skipped. When spans overlap, the lint that
    comes first in `lints` wins. Edits are applied right to left so earlier
    offsets stay valid.

    Args:
        text: The text the lints were produced from
        lints: Lints in run order

    Returns:
        Tuple of (fixed_text, sorted list of applied rule ids)

    Raises:
        InvalidSpan: If a lint does not fit inside text
    """
    accepted: list[Lint] = []
    for lint in lints:
        if not lint.suggestions:
            continue
        lint.span.get_content(text)
        if any(lint.span.overlaps(other.span) for other in accepted):
            continue
        accepted.append(lint)

    if not accepted:
        return text, []

    for lint in sorted(accepted, key=lambda l: l.span.start, reverse=True):
        text = text[:lint.span.start] + lint.suggestions[0] + text[lint.span.end:]

    return text, sorted({lint.rule_id for lint in accepted})
