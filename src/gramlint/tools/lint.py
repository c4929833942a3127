"""Lint tool implementations."""
import logging
from pathlib import Path

from gramlint.config import Config
from gramlint.core.errors import LintError
from gramlint.core.linter import engine

logger = logging.getLogger(__name__)


def register(mcp, config: Config):
    """Register lint tools with MCP server."""

    @mcp.tool()
    async def lint_text(
        text: str,
        rules: list[str] | None = None
    ) -> dict:
        """
        Lint a piece of English text for grammar, spacing and spelling issues.

        Rules:
        - missing_space_after_comma: "hello,World" (formatting)
        - space_before_punctuation: "World !" (punctuation)
        - repeated_spaces: two or more spaces between words (formatting)
        - repeated_word: "the the" (repetition)
        - sentence_capitalization: sentence starting lowercase (capitalization)
        - article_agreement: "a apple", "an car" (word choice)
        - dialect_spelling: spelling from another English dialect (spelling)

        Args:
            text: The text to lint
            rules: List of specific rules to run (default: configured rules)

        Returns:
            Dictionary with:
            - total_issues (int): Number of lints found
            - issues (list): Lints in run order, each with rule, kind,
              start/end codepoint offsets, fragment, message and suggestions
            - faults (list): Rules that failed during the run
            - cancelled (bool): Whether the run stopped early

        Example:
            {
                "text": "hello,World ! ",
                "rules": ["missing_space_after_comma"]
            }
        """
        logger.info(f"Linting {len(text)} chars (rules={rules})")

        try:
            result = await engine.lint_content(text, rules=rules, config=config)
        except (LintError, ValueError) as e:
            logger.error(f"Lint failed: {e}")
            return {"error": str(e)}

        report = result.to_dict()
        for issue, lint in zip(report["issues"], result.lints):
            issue["fragment"] = lint.span.get_content(text)

        logger.info(
            f"Lint complete: {len(result.lints)} issues ({len(result.faults)} rule faults)"
        )
        return report

    @mcp.tool()
    async def lint_document_file(
        path: str,
        fix: bool = False,
        rules: list[str] | None = None
    ) -> dict:
        """
        Lint a UTF-8 text file.

        Args:
            path: Path to the file
            fix: Apply the first suggestion of each lint and write back (default: False)
            rules: List of specific rules to run (default: configured rules)

        Returns:
            Dictionary with the same fields as lint_text plus:
            - path (str): Path that was linted
            - fixed (list): Rules whose suggestions were applied (if fix=True)
        """
        file_path = Path(path).expanduser()

        if not file_path.exists():
            return {"error": f"File not found: {file_path}"}

        logger.info(f"Linting {file_path} (fix={fix}, rules={rules})")

        try:
            result, fixed = await engine.lint_file(file_path, fix=fix, rules=rules, config=config)
        except (LintError, ValueError) as e:
            logger.error(f"Lint failed: {e}", exc_info=True)
            return {"error": str(e)}

        if fixed:
            logger.info(f"Auto-fixed: {', '.join(fixed)}")

        report = result.to_dict()
        report["path"] = str(file_path)
        report["fixed"] = fixed
        return report

    @mcp.tool()
    async def get_lint_rules() -> dict:
        """
        Get list of available lint rules with descriptions.

        Returns:
            Dictionary mapping rule names to their descriptions.

        Example response:
            {
                "rules": {
                    "missing_space_after_comma": "Flag a comma directly followed by a word.",
                    ...
                },
                "enabled": ["missing_space_after_comma", ...]
            }
        """
        return {
            "rules": engine.get_available_rules(),
            "enabled": config.selected_rules(),
        }
