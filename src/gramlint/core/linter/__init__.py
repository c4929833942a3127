"""Grammar and style linter."""
from .engine import LintGroup, lint_content, lint_file, get_available_rules
from .models import Lint, LintKind, LintResult, Span, apply_suggestions

__all__ = [
    "LintGroup",
    "lint_content",
    "lint_file",
    "get_available_rules",
    "Lint",
    "LintKind",
    "LintResult",
    "Span",
    "apply_suggestions",
]
