"""Lint engine - runs rule groups against documents."""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from ..document import Document
from ..errors import RuleFault
from .models import Lint, LintResult, apply_suggestions
from .rules import DEFAULT_DIALECT, DEFAULT_RULES, RULES, LintRule, build_rule, describe

if TYPE_CHECKING:
    from gramlint.config import Config

logger = logging.getLogger(__name__)


class LintGroup:
    """
    Ordered collection of rules run together as one pass.

    Rules are unique by rule_id and run in the order they were added. The
    group holds no per-document state, so one instance can serve many
    documents and concurrent callers.
    """

    def __init__(
        self,
        rules: Iterable[LintRule] = (),
        parallel: bool = False,
        max_workers: int | None = None
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self._rules: list[LintRule] = []
        self.parallel = parallel
        self.max_workers = max_workers

        for rule in rules:
            self.add(rule)

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        dialect: str = DEFAULT_DIALECT,
        parallel: bool = False,
        max_workers: int | None = None
    ) -> "LintGroup":
        """
        Build a group from registry rule names.

        Unknown names are logged and skipped.
        """
        group = cls(parallel=parallel, max_workers=max_workers)
        for name in names:
            try:
                group.add(build_rule(name, dialect))
            except KeyError:
                logger.warning(f"Unknown rule: {name}")
        return group

    @classmethod
    def curated(cls, config: Optional["Config"] = None) -> "LintGroup":
        """Build the default group, honouring rule selection from config."""
        if config is None:
            return cls.from_names(DEFAULT_RULES)
        return cls.from_names(
            config.selected_rules(),
            dialect=config.dialect,
            parallel=config.parallel,
            max_workers=config.max_workers,
        )

    def add(self, rule: LintRule) -> bool:
        """Append a rule; returns False if a rule with the same id is already present."""
        if rule.rule_id in self.rule_ids:
            logger.warning(f"Duplicate rule ignored: {rule.rule_id}")
            return False
        self._rules.append(rule)
        return True

    @property
    def rules(self) -> tuple[LintRule, ...]:
        return tuple(self._rules)

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"LintGroup({self.rule_ids})"

    def run(
        self,
        document: Document,
        *,
        parallel: bool | None = None,
        deadline: float | None = None,
        cancel: threading.Event | None = None
    ) -> LintResult:
        """
        Run every rule against a document.

        Lints are merged rule by rule in construction order, whatever the
        execution mode. A rule that raises, yields something that is not a
        Lint, or yields a span outside the document contributes nothing and
        is reported as a RuleFault on the result.

        Args:
            document: Document to lint
            parallel: Override the group's parallel setting for this run
            deadline: time.monotonic() value after which no further rule starts
            cancel: Event that stops the run between rules when set

        Returns:
            LintResult with lints, faults, and the cancellation flag
        """
        use_parallel = self.parallel if parallel is None else parallel

        if use_parallel and len(self._rules) > 1:
            result = self._run_parallel(document, deadline, cancel)
        else:
            result = self._run_sequential(document, deadline, cancel)

        logger.debug(
            f"Lint run complete: {len(result.lints)} lints from "
            f"{len(result.rules_run)}/{len(self._rules)} rules "
            f"({len(result.faults)} faults, cancelled={result.cancelled})"
        )
        return result

    def lint(self, document: Document) -> list[Lint]:
        """Run the group and return only the lints."""
        return self.run(document).lints

    def _run_sequential(
        self,
        document: Document,
        deadline: float | None,
        cancel: threading.Event | None
    ) -> LintResult:
        result = LintResult()

        for rule in self._rules:
            if _should_stop(deadline, cancel):
                result.cancelled = True
                logger.info(f"Lint run cancelled before rule {rule.rule_id}")
                break

            lints, fault = _run_rule(rule, document)
            _collect(result, rule, lints, fault)

        return result

    def _run_parallel(
        self,
        document: Document,
        deadline: float | None,
        cancel: threading.Event | None
    ) -> LintResult:
        result = LintResult()

        pool = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="gramlint-rule"
        )
        try:
            futures = [pool.submit(_run_rule, rule, document) for rule in self._rules]

            # Merge in construction order, not completion order
            for rule, future in zip(self._rules, futures):
                if _should_stop(deadline, cancel):
                    result.cancelled = True
                    logger.info(f"Lint run cancelled before rule {rule.rule_id}")
                    break

                lints, fault = future.result()
                _collect(result, rule, lints, fault)
        finally:
            pool.shutdown(wait=not result.cancelled, cancel_futures=True)

        return result


def _should_stop(deadline: float | None, cancel: threading.Event | None) -> bool:
    if cancel is not None and cancel.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


def _run_rule(rule: LintRule, document: Document) -> tuple[list[Lint], RuleFault | None]:
    """Run one rule to completion, containing any failure as a RuleFault."""
    try:
        lints = list(rule.analyze(document))
        for lint in lints:
            if not isinstance(lint, Lint):
                raise TypeError(f"Rule produced {type(lint).__name__}, expected Lint")
            lint.span.get_content(document.text)
        return lints, None
    except Exception as e:
        logger.error(f"Rule {rule.rule_id} failed: {e}")
        return [], RuleFault(rule.rule_id, e)


def _collect(
    result: LintResult,
    rule: LintRule,
    lints: list[Lint],
    fault: RuleFault | None
) -> None:
    result.rules_run.append(rule.rule_id)
    if fault is not None:
        result.faults.append(fault)
    else:
        result.lints.extend(lints)


def _select_group(rules: Optional[list[str]], config: Optional["Config"]) -> LintGroup:
    if rules:
        dialect = config.dialect if config else DEFAULT_DIALECT
        return LintGroup.from_names(rules, dialect=dialect)
    return LintGroup.curated(config)


async def lint_content(
    content: str,
    rules: Optional[list[str]] = None,
    config: Optional["Config"] = None
) -> LintResult:
    """
    Lint text content.

    Args:
        content: The text to lint
        rules: Specific rules to run (default: config selection, or all)
        config: Optional configuration for dialect and execution mode

    Returns:
        LintResult with all lints found
    """
    document = Document.create(content)
    return _select_group(rules, config).run(document)


async def lint_file(
    path: Path,
    fix: bool = False,
    rules: Optional[list[str]] = None,
    config: Optional["Config"] = None
) -> tuple[LintResult, list[str]]:
    """
    Lint a UTF-8 text file.

    Args:
        path: File to lint
        fix: If True, apply first suggestions and write back
        rules: Specific rules to run (default: all)
        config: Optional configuration

    Returns:
        Tuple of (LintResult, list of rule ids whose fixes were applied)

    Raises:
        ParseError: If the file is not valid UTF-8
    """
    document = Document.from_file(path)
    content = document.text

    result = _select_group(rules, config).run(document)

    fixed_rules: list[str] = []
    if fix and result.lints:
        fixed_content, fixed_rules = apply_suggestions(content, result.lints)
        if fixed_content != content:
            Path(path).write_text(fixed_content, encoding='utf-8')
            logger.info(f"Wrote {len(fixed_rules)} rule fixes to {path}")

    return result, fixed_rules


def get_available_rules() -> dict[str, str]:
    """
    Get list of available rules with descriptions.

    Returns:
        Dict mapping rule name to the first line of its docstring
    """
    return {name: describe(rule) for name, rule in RULES.items()}
