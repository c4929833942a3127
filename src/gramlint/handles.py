"""Opaque-handle interface for embedding the engine in another runtime.

Every object crossing the boundary lives in a HandleTable and is referenced by
an integer handle. Callers never see engine objects directly; strings handed
out are ordinary immutable copies. Each handle is released exactly once.

Failures never raise: they return None/False/0 and leave a message in
``last_error``. Rule faults from the most recent ``run_lints`` call are kept
in ``last_faults``. Both are tracked per calling thread, and ``last_error`` is
cleared at the start of every operation.
"""
from dataclasses import dataclass
from enum import Enum
from itertools import count
import logging
import threading
from typing import Any

from gramlint import __version__
from gramlint.config import Config
from gramlint.core.document import Document
from gramlint.core.errors import IndexOutOfRange, InvalidSpan, LintError, RuleFault
from gramlint.core.linter.engine import LintGroup
from gramlint.core.linter.models import Lint
from gramlint.core.linter.rules import DEFAULT_DIALECT

logger = logging.getLogger(__name__)


class HandleKind(Enum):
    DOCUMENT = "document"
    LINT_GROUP = "lint_group"
    LINT = "lint"


@dataclass
class _Entry:
    kind: HandleKind
    obj: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class HandleTable:
    """Arena of engine objects addressed by opaque integer handles."""

    def __init__(self):
        self._entries: dict[int, _Entry] = {}
        self._ids = count(1)
        self._lock = threading.Lock()
        self._local = threading.local()

    def __len__(self) -> int:
        """Number of live handles."""
        with self._lock:
            return len(self._entries)

    @property
    def last_error(self) -> str | None:
        """Message from the calling thread's last operation, if it failed."""
        return getattr(self._local, "error", None)

    @property
    def last_faults(self) -> list[RuleFault]:
        """Rule faults from the calling thread's last run_lints call."""
        return list(getattr(self._local, "faults", ()))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _begin(self) -> None:
        self._local.error = None

    def _fail(self, message: str):
        self._local.error = message
        logger.debug(f"Handle call failed: {message}")
        return None

    def _insert(self, kind: HandleKind, obj: Any) -> int:
        with self._lock:
            handle = next(self._ids)
            self._entries[handle] = _Entry(kind, obj)
        return handle

    def _get(self, handle: int, kind: HandleKind) -> Any:
        if not _is_int(handle):
            return self._fail(f"Invalid handle: {handle!r}")
        with self._lock:
            entry = self._entries.get(handle)
        if entry is None:
            return self._fail(f"Unknown or released handle: {handle}")
        if entry.kind is not kind:
            return self._fail(f"Handle {handle} is a {entry.kind.value}, expected {kind.value}")
        return entry.obj

    def _release(self, handle: int, kind: HandleKind) -> bool:
        if not _is_int(handle):
            self._fail(f"Invalid handle: {handle!r}")
            return False
        with self._lock:
            entry = self._entries.get(handle)
            if entry is not None and entry.kind is kind:
                del self._entries[handle]
                return True
        if entry is None:
            self._fail(f"Unknown or released handle: {handle}")
        else:
            self._fail(f"Handle {handle} is a {entry.kind.value}, expected {kind.value}")
        return False

    # ------------------------------------------------------------------
    # Library
    # ------------------------------------------------------------------

    @staticmethod
    def version() -> str:
        return __version__

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def create_document(self, text: str) -> int | None:
        """Create a document; returns a handle or None on failure."""
        self._begin()
        if text is None:
            return self._fail("Document text is null")
        try:
            document = Document.create(text)
        except LintError as e:
            return self._fail(str(e))
        return self._insert(HandleKind.DOCUMENT, document)

    def release_document(self, handle: int) -> bool:
        self._begin()
        return self._release(handle, HandleKind.DOCUMENT)

    def get_document_text(self, handle: int) -> str | None:
        self._begin()
        document = self._get(handle, HandleKind.DOCUMENT)
        return None if document is None else document.text

    def get_token_count(self, handle: int) -> int:
        self._begin()
        document = self._get(handle, HandleKind.DOCUMENT)
        return 0 if document is None else document.token_count()

    # ------------------------------------------------------------------
    # Lint groups
    # ------------------------------------------------------------------

    def create_lint_group(
        self,
        rules: list[str] | None = None,
        config: Config | None = None
    ) -> int | None:
        """
        Create a lint group.

        Args:
            rules: Optional rule-selection list (default: curated group)
            config: Optional config for dialect and execution mode
        """
        self._begin()
        if rules is not None:
            if isinstance(rules, str) or not all(isinstance(r, str) for r in rules):
                return self._fail("Rule selection must be a list of rule names")

        try:
            if rules is not None:
                dialect = config.dialect if config else DEFAULT_DIALECT
                group = LintGroup.from_names(rules, dialect=dialect)
            else:
                group = LintGroup.curated(config)
        except ValueError as e:
            # Unknown dialect or bad worker count
            return self._fail(str(e))

        return self._insert(HandleKind.LINT_GROUP, group)

    def release_lint_group(self, handle: int) -> bool:
        self._begin()
        return self._release(handle, HandleKind.LINT_GROUP)

    # ------------------------------------------------------------------
    # Lints
    # ------------------------------------------------------------------

    def run_lints(self, document_handle: int, group_handle: int) -> list[int] | None:
        """
        Run a lint group over a document.

        Returns:
            New lint handles in run order (each owned by the caller), or None
        """
        self._begin()
        document = self._get(document_handle, HandleKind.DOCUMENT)
        if document is None:
            return None
        group = self._get(group_handle, HandleKind.LINT_GROUP)
        if group is None:
            return None

        result = group.run(document)
        self._local.faults = list(result.faults)
        if result.faults:
            self._local.error = "; ".join(str(f) for f in result.faults)

        return [self._insert(HandleKind.LINT, lint) for lint in result.lints]

    def release_lint(self, handle: int) -> bool:
        self._begin()
        return self._release(handle, HandleKind.LINT)

    def release_lints(self, handles: list[int]) -> int:
        """Release several lint handles; returns how many were released."""
        self._begin()
        if not isinstance(handles, (list, tuple)):
            self._fail("Lint handles must be a list")
            return 0
        return sum(1 for handle in handles if self._release(handle, HandleKind.LINT))

    def get_lint_message(self, handle: int) -> str | None:
        self._begin()
        lint: Lint | None = self._get(handle, HandleKind.LINT)
        return None if lint is None else lint.message

    def get_lint_span(self, handle: int) -> tuple[int, int] | None:
        self._begin()
        lint: Lint | None = self._get(handle, HandleKind.LINT)
        return None if lint is None else lint.span.as_tuple()

    def get_lint_suggestion_count(self, handle: int) -> int:
        self._begin()
        lint: Lint | None = self._get(handle, HandleKind.LINT)
        return 0 if lint is None else lint.suggestion_count()

    def get_lint_suggestion_text(self, handle: int, index: int) -> str | None:
        self._begin()
        lint: Lint | None = self._get(handle, HandleKind.LINT)
        if lint is None:
            return None
        if not _is_int(index):
            return self._fail(f"Suggestion index must be an integer, got {index!r}")
        try:
            return lint.suggestion_at(index)
        except IndexOutOfRange as e:
            return self._fail(str(e))

    def get_lint_fragment(self, lint_handle: int, document_handle: int) -> str | None:
        """Text of the document covered by the lint's span."""
        self._begin()
        lint: Lint | None = self._get(lint_handle, HandleKind.LINT)
        if lint is None:
            return None
        document = self._get(document_handle, HandleKind.DOCUMENT)
        if document is None:
            return None
        try:
            return document.fragment(lint)
        except InvalidSpan as e:
            return self._fail(str(e))
