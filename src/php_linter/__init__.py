from .engine import FileReporter, LinterEngine
from .models import InternalIssue, Severity, Violation
from .registry import RuleRegistry, registry

__all__ = [
    "FileReporter",
    "InternalIssue",
    "LinterEngine",
    "RuleRegistry",
    "Severity",
    "Violation",
    "registry",
]
