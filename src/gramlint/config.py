"""Configuration management with YAML file and environment variable overrides."""
from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "gramlint" / "config.yaml"


def _parse_bool(val: str) -> bool:
    return val.lower() in ("true", "1", "yes")


def _parse_list(val: str) -> list[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class Config:
    """Configuration for the gramlint engine and its front ends."""

    # Rule selection (None = every registered rule, in registry order)
    rules: list[str] | None = None
    disabled_rules: list[str] = field(default_factory=list)

    # Spelling dialect: american, british, australian, canadian
    dialect: str = "american"

    # Execution
    parallel: bool = False
    max_workers: int | None = None

    # Logging
    log_level: str = "INFO"

    # Where settings were read from (None = defaults/env only)
    config_path: Path | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load config: defaults, then YAML file, then environment variables.

        Args:
            path: Explicit YAML file (default: $GRAMLINT_CONFIG or
                ~/.config/gramlint/config.yaml if it exists)
        """
        config = cls()

        if path is None:
            if val := os.environ.get("GRAMLINT_CONFIG"):
                path = Path(val).expanduser()
            elif DEFAULT_CONFIG_PATH.exists():
                path = DEFAULT_CONFIG_PATH

        if path is not None:
            config.apply_file(Path(path))

        # Override rule selection from env
        if val := os.environ.get("GRAMLINT_RULES"):
            config.rules = _parse_list(val)
        if val := os.environ.get("GRAMLINT_DISABLED_RULES"):
            config.disabled_rules = _parse_list(val)

        if val := os.environ.get("GRAMLINT_DIALECT"):
            config.dialect = val.lower()

        # Override execution settings from env
        if val := os.environ.get("GRAMLINT_PARALLEL"):
            config.parallel = _parse_bool(val)
        if val := os.environ.get("GRAMLINT_MAX_WORKERS"):
            config.max_workers = int(val)

        if val := os.environ.get("GRAMLINT_LOG_LEVEL"):
            config.log_level = val.upper()

        config.validate()
        return config

    def validate(self) -> None:
        """
        Check settings that would otherwise fail only when a run starts.

        Raises:
            ValueError: If max_workers is set but not a positive integer
        """
        if self.max_workers is not None:
            if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
                raise ValueError(f"max_workers must be an integer, got {self.max_workers!r}")
            if self.max_workers < 1:
                raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    def apply_file(self, path: Path) -> None:
        """
        Apply settings from a YAML file.

        Raises:
            FileNotFoundError: If path does not exist
            ValueError: If the file is not a YAML mapping or holds invalid settings
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        known_fields = {f for f in self.__dataclass_fields__ if f != "config_path"}
        for key, value in data.items():
            if key not in known_fields:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            setattr(self, key, value)

        self.validate()
        self.config_path = path
        logger.debug(f"Loaded config from {path}")

    def selected_rules(self) -> list[str]:
        """Rule names to run, in order, after applying disabled_rules."""
        from gramlint.core.linter.rules import DEFAULT_RULES

        names = self.rules if self.rules is not None else list(DEFAULT_RULES)
        disabled = set(self.disabled_rules)
        return [name for name in names if name not in disabled]
