from abc import ABC, abstractmethod
from typing import Protocol, Sequence

from php_tree_sitter.tokens import TokenKind, TokenStream

from ..models import Severity


class ViolationSink(Protocol):
    """Receives violations as a rule finds them"""

    def report_violation(
        self,
        message: str,
        token_index: int,
        code: str,
        substitutions: Sequence[str] = (),
    ) -> None: ...


class BaseTokenRule(ABC):
    """Abstract base class for rules that fire on specific tokens."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'ControlStructures.SwitchDeclaration')."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name (e.g., 'switch-declaration')."""
        pass

    @property
    def severity(self) -> Severity:
        return Severity.ERROR

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return ""

    @property
    def codes(self) -> tuple[str, ...]:
        """Violation codes this rule can report."""
        return ()

    @abstractmethod
    def registered_token_kinds(self) -> set[TokenKind]:
        """Token kinds this rule wants to be invoked on."""
        pass

    @abstractmethod
    def validate(self, stream: TokenStream, index: int, sink: ViolationSink) -> None:
        """Check the construct starting at `index`, reporting into `sink`."""
        pass
