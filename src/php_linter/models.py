from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(Enum):
    """Issue severity levels"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    STYLE = "style"


@dataclass
class Violation:
    """A defect reported by a rule against one token"""

    message: str  # may contain %s placeholders
    token_index: int
    code: str
    substitutions: tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> str:
        if not self.substitutions:
            return self.message
        return self.message % tuple(self.substitutions)


@dataclass
class InternalIssue:
    """Internal representation of a linting issue"""

    file_path: Path
    line: int
    rule_id: str
    message: str
    severity: Severity
    auto_fixable: bool = False
    column: int = 0
    context: str | None = None
