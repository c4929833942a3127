"""Tests for the CLI and the MCP tool functions."""
import asyncio

import pytest

import gramlint.config as config_module
from gramlint.cli import main
from gramlint.config import Config
from gramlint.tools import lint as lint_tools


def _run(coro):
    """Run async coroutine synchronously (avoids pytest-asyncio dep)."""
    return asyncio.run(coro)


class FakeMCP:
    """Collects functions registered with @mcp.tool()."""

    def __init__(self):
        self.tools = {}

    def tool(self):
        def decorator(func):
            self.tools[func.__name__] = func
            return func
        return decorator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("GRAMLINT_CONFIG", "GRAMLINT_RULES", "GRAMLINT_DISABLED_RULES",
                "GRAMLINT_DIALECT", "GRAMLINT_PARALLEL", "GRAMLINT_MAX_WORKERS",
                "GRAMLINT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


@pytest.fixture
def tools():
    mcp = FakeMCP()
    lint_tools.register(mcp, Config())
    return mcp.tools


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def test_lint_default_text(capsys):
    main(["lint"])
    out = capsys.readouterr().out

    assert "Token count: 6" in out
    assert "Lint count: 3" in out
    assert "Missing space after comma" in out
    assert "1. , World" in out


def test_lint_fix_prints_fixed_text(capsys):
    main(["lint", "--fix", "hello,World ! "])
    out = capsys.readouterr().out

    assert "Fixed text: Hello, World!" in out


def test_lint_file_fix(tmp_path, capsys):
    path = tmp_path / "note.txt"
    path.write_text("the the cat sat.", encoding="utf-8")

    main(["lint", "--file", str(path), "--rules", "repeated_word", "--fix"])

    assert path.read_text(encoding="utf-8") == "the cat sat."
    assert "Lint count: 1" in capsys.readouterr().out


def test_lint_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["lint", "--file", str(tmp_path / "nope.txt")])
    assert exc.value.code == 1


def test_check_lists_enabled_rules(capsys):
    main(["check"])
    out = capsys.readouterr().out

    assert "Dialect: american" in out
    assert "  - missing_space_after_comma" in out


def test_rules_command(capsys):
    main(["rules"])
    assert "Lint rules" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# MCP tools
# ---------------------------------------------------------------------------


def test_lint_text_tool(tools):
    report = _run(tools["lint_text"]("hello,World ! "))

    assert report["total_issues"] == 3
    assert report["issues"][0]["fragment"] == ",World"
    assert report["issues"][0]["suggestions"] == [", World"]
    assert report["faults"] == []


def test_lint_text_tool_reports_parse_error(tools):
    report = _run(tools["lint_text"]("bad\ud800"))
    assert "error" in report


def test_lint_document_file_tool(tools, tmp_path):
    path = tmp_path / "note.txt"
    path.write_text("I ate a apple.", encoding="utf-8")

    report = _run(tools["lint_document_file"](str(path), fix=True))

    assert report["fixed"] == ["article_agreement"]
    assert path.read_text(encoding="utf-8") == "I ate an apple."


def test_lint_document_file_tool_missing(tools, tmp_path):
    report = _run(tools["lint_document_file"](str(tmp_path / "missing.txt")))
    assert report["error"].startswith("File not found")


def test_lint_document_file_tool_invalid_utf8(tools, tmp_path):
    path = tmp_path / "note.txt"
    path.write_bytes(b"bad \xff byte")

    report = _run(tools["lint_document_file"](str(path)))
    assert "not valid UTF-8" in report["error"]


def test_get_lint_rules_tool(tools):
    data = _run(tools["get_lint_rules"]())

    assert "repeated_word" in data["rules"]
    assert data["enabled"][0] == "missing_space_after_comma"
