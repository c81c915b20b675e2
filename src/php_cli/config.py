import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TABLE_NAME = "php-lint"


class LintConfig:
    """Handles loading and validation of [tool.php-lint] configuration"""

    def __init__(self, config_path: Path | None = None):
        self.select: list[str] = []
        self.ignore: list[str] = []
        self.tab_width: int = 4
        self.severity: str = "STYLE"

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    @classmethod
    def discover(cls, config_path: Path | None = None, root: Path | None = None) -> "LintConfig":
        """Use `config_path` if it exists, else the project's pyproject.toml"""
        if config_path and config_path.exists():
            return cls(config_path)
        return cls((root or Path.cwd()) / "pyproject.toml")

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return

        lint_data = data.get("tool", {}).get(TABLE_NAME, {})
        if not isinstance(lint_data, dict):
            logger.warning("[tool.%s] in %s is not a table", TABLE_NAME, path)
            return

        self.select = list(lint_data.get("select", self.select))
        self.ignore = list(lint_data.get("ignore", self.ignore))
        self.severity = str(lint_data.get("severity", self.severity)).upper()

        tab_width = lint_data.get("tab-width", self.tab_width)
        if isinstance(tab_width, int) and tab_width > 0:
            self.tab_width = tab_width
        else:
            logger.warning("Invalid tab-width %r in %s; keeping %d", tab_width, path, self.tab_width)

    def apply_to_registry(self, registry: Any) -> list[Any]:
        """Return list of enabled rules based on this config"""
        return registry.get_enabled_rules(select=self.select, ignore=self.ignore)
