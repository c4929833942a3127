"""CLI for gramlint.

Provides direct terminal access to the linting engine without MCP.
"""
import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gramlint import __version__
from gramlint.config import Config

DEFAULT_TEXT = "hello,World ! "

console = Console()


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="gramlint",
        description="Deterministic grammar and style linter"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", type=Path,
        help="YAML config file (default: $GRAMLINT_CONFIG or ~/.config/gramlint/config.yaml)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # lint command
    lt = subparsers.add_parser("lint", help="Lint text or a file")
    lt.add_argument(
        "text", nargs="?", default=None,
        help=f"Text to lint (default: {DEFAULT_TEXT!r})"
    )
    lt.add_argument("-f", "--file", type=Path, help="Lint a UTF-8 file instead")
    lt.add_argument(
        "-r", "--rules",
        help="Comma-separated rules to run (default: configured rules)"
    )
    lt.add_argument(
        "--dialect",
        choices=["american", "british", "australian", "canadian"],
        help="Spelling dialect (overrides config)"
    )
    lt.add_argument(
        "--parallel", action="store_true",
        help="Run rules on worker threads"
    )
    lt.add_argument(
        "--fix", action="store_true",
        help="Apply first suggestions (writes back with --file, prints otherwise)"
    )

    # rules command
    subparsers.add_parser("rules", help="List available rules")

    # check command
    subparsers.add_parser("check", help="Show effective configuration")

    args = parser.parse_args(argv)

    try:
        config = Config.load(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: Failed to load config: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr
    )

    if args.command == "lint":
        lint_command(args, config)
    elif args.command == "rules":
        rules_command(config)
    elif args.command == "check":
        check_command(config)


def lint_command(args, config: Config):
    """Execute the lint command."""
    from gramlint.core.document import Document
    from gramlint.core.errors import LintError
    from gramlint.core.linter.engine import LintGroup
    from gramlint.core.linter.models import apply_suggestions

    if args.dialect:
        config.dialect = args.dialect
    if args.parallel:
        config.parallel = True
    if args.rules:
        config.rules = [r.strip() for r in args.rules.split(",") if r.strip()]

    try:
        if args.file:
            document = Document.from_file(args.file.expanduser())
        else:
            document = Document.create(args.text if args.text is not None else DEFAULT_TEXT)
        group = LintGroup.curated(config)
    except (LintError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = group.run(document)

    console.print(f"gramlint v{__version__}")
    console.print(Text(f"Document text: {document.text}"))
    console.print(f"Token count: {document.token_count()}")
    console.print(f"Lint count: {len(result.lints)}")

    for i, lint in enumerate(result.lints):
        line = Text(f"Lint {i}: ")
        line.append(lint.message, style="bold")
        line.append(f' ["{document.fragment(lint)}"]', style="cyan")
        line.append(f" ({lint.rule_id})", style="dim")
        console.print(line)

        if lint.suggestion_count() > 0:
            console.print(f"  {lint.suggestion_count()} suggestion(s):")
            for j, suggestion in enumerate(lint.suggestions):
                console.print(Text(f"    {j + 1}. {suggestion}"))

    for fault in result.faults:
        console.print(Text(f"Warning: {fault}", style="yellow"))

    if args.fix and result.lints:
        fixed_text, fixed_rules = apply_suggestions(document.text, result.lints)
        if args.file:
            args.file.expanduser().write_text(fixed_text, encoding="utf-8")
            console.print(f"Fixed ({', '.join(fixed_rules)}): {args.file}")
        else:
            console.print(Text(f"Fixed text: {fixed_text}"))


def rules_command(config: Config):
    """Execute the rules command."""
    from gramlint.core.linter.engine import get_available_rules

    enabled = set(config.selected_rules())

    table = Table(title="Lint rules")
    table.add_column("Rule", style="bold")
    table.add_column("Enabled")
    table.add_column("Description")

    for name, description in get_available_rules().items():
        table.add_row(name, "yes" if name in enabled else "no", description)

    console.print(table)


def check_command(config: Config):
    """Execute the check command."""
    print(f"gramlint v{__version__}")
    print("=" * 40)

    print("\nConfiguration:")
    print(f"  Config file: {config.config_path or '(none)'}")
    print(f"  Dialect: {config.dialect}")
    print(f"  Parallel: {config.parallel} (max workers: {config.max_workers or 'auto'})")
    print(f"  Log level: {config.log_level}")

    print("\nEnabled rules:")
    for name in config.selected_rules():
        print(f"  - {name}")

    print("\nMCP tools:")
    print("  - lint_text")
    print("  - lint_document_file")
    print("  - get_lint_rules")

    print("\n" + "=" * 40)


if __name__ == "__main__":
    main()
