"""Rule capability shared by every lint rule."""
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, runtime_checkable

from ...document import Document
from ..models import Lint


@runtime_checkable
class LintRule(Protocol):
    """Anything with a rule_id that turns a Document into Lints."""
    rule_id: str

    def analyze(self, document: Document) -> Iterable[Lint]:
        ...


@dataclass(frozen=True)
class FunctionRule:
    """Adapts a plain generator function to the LintRule protocol."""
    rule_id: str
    func: Callable[[Document], Iterable[Lint]]

    def analyze(self, document: Document) -> Iterable[Lint]:
        return self.func(document)

    @property
    def description(self) -> str:
        return (self.func.__doc__ or "No description").strip().split('\n')[0]


def describe(rule: LintRule) -> str:
    """First docstring line of a rule (function or class based)."""
    if isinstance(rule, FunctionRule):
        return rule.description
    return (type(rule).__doc__ or "No description").strip().split('\n')[0]
