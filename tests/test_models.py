"""Tests for spans, lints, results, and suggestion application."""
import pytest

from gramlint.core.errors import IndexOutOfRange, InvalidSpan, RuleFault
from gramlint.core.linter.models import (
    Lint,
    LintKind,
    LintResult,
    Span,
    apply_suggestions,
)


def _lint(start, end, suggestions=(), rule_id="test_rule", message="Something is off"):
    return Lint(span=Span(start, end), message=message, suggestions=suggestions, rule_id=rule_id)


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


def test_span_rejects_negative_start():
    with pytest.raises(InvalidSpan):
        Span(-1, 2)


def test_span_rejects_end_before_start():
    with pytest.raises(InvalidSpan):
        Span(3, 1)


def test_span_get_content_never_clamps():
    assert Span(1, 3).get_content("abcd") == "bc"
    with pytest.raises(InvalidSpan):
        Span(2, 9).get_content("abcd")


def test_span_overlaps():
    assert Span(0, 5).overlaps(Span(4, 6))
    assert not Span(0, 5).overlaps(Span(5, 6))
    assert len(Span(2, 7)) == 5
    assert Span(2, 7).as_tuple() == (2, 7)


# ---------------------------------------------------------------------------
# Lint
# ---------------------------------------------------------------------------


def test_lint_requires_message():
    with pytest.raises(ValueError):
        _lint(0, 1, message="")


def test_suggestion_access():
    lint = _lint(0, 5, suggestions=["Hello", "Hi"])

    assert lint.suggestions == ("Hello", "Hi")
    assert lint.suggestion_count() == 2
    assert lint.suggestion_at(1) == "Hi"


def test_suggestion_index_out_of_range():
    lint = _lint(0, 5, suggestions=["Hello", "Hi"])

    with pytest.raises(IndexOutOfRange):
        lint.suggestion_at(5)
    with pytest.raises(IndexOutOfRange):
        lint.suggestion_at(-1)


def test_index_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        _lint(0, 1).suggestion_at(0)


def test_lint_to_dict():
    lint = Lint(
        span=Span(5, 11),
        message="Missing space after comma",
        suggestions=(", World",),
        rule_id="missing_space_after_comma",
        kind=LintKind.FORMATTING,
    )
    assert lint.to_dict() == {
        "rule": "missing_space_after_comma",
        "kind": "formatting",
        "start": 5,
        "end": 11,
        "message": "Missing space after comma",
        "suggestions": [", World"],
    }


# ---------------------------------------------------------------------------
# LintResult
# ---------------------------------------------------------------------------


def test_result_groups_by_rule_in_order():
    a1, b1, a2 = _lint(0, 1, rule_id="a"), _lint(1, 2, rule_id="b"), _lint(2, 3, rule_id="a")
    result = LintResult(lints=[a1, b1, a2])

    assert len(result) == 3
    assert list(result) == [a1, b1, a2]
    assert result.by_rule() == {"a": [a1, a2], "b": [b1]}


def test_result_to_dict_includes_faults():
    fault = RuleFault("broken", RuntimeError("boom"))
    result = LintResult(lints=[_lint(0, 1)], faults=[fault], rules_run=["test_rule", "broken"])

    data = result.to_dict()
    assert result.has_faults
    assert data["total_issues"] == 1
    assert data["cancelled"] is False
    assert data["faults"] == [
        {"rule": "broken", "error_type": "RuntimeError", "error_message": "boom"}
    ]


# ---------------------------------------------------------------------------
# apply_suggestions
# ---------------------------------------------------------------------------


def test_apply_suggestions_right_to_left():
    text = "hello,World ! "
    lints = [
        _lint(5, 11, [", World"], rule_id="missing_space_after_comma"),
        _lint(11, 13, ["!"], rule_id="space_before_punctuation"),
        _lint(0, 5, ["Hello"], rule_id="sentence_capitalization"),
    ]

    fixed, applied = apply_suggestions(text, lints)

    assert fixed == "Hello, World! "
    assert applied == [
        "missing_space_after_comma",
        "sentence_capitalization",
        "space_before_punctuation",
    ]


def test_apply_suggestions_first_overlap_wins():
    fixed, applied = apply_suggestions(
        "the the cat",
        [_lint(0, 7, ["the"], rule_id="first"), _lint(4, 7, ["a"], rule_id="second")],
    )
    assert fixed == "the cat"
    assert applied == ["first"]


def test_apply_suggestions_skips_lints_without_suggestions():
    assert apply_suggestions("abc", [_lint(0, 1)]) == ("abc", [])


def test_apply_suggestions_rejects_foreign_span():
    with pytest.raises(InvalidSpan):
        apply_suggestions("abc", [_lint(0, 10, ["x"])])
