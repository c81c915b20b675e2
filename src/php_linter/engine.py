import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from php_tree_sitter.parser import PHPParser
from php_tree_sitter.tokens import TokenStream

from .models import InternalIssue, Violation
from .registry import RuleRegistry
from .rules.base import BaseTokenRule

logger = logging.getLogger(__name__)


class FileReporter:
    """Report sink turning one rule's violations in one file into issues"""

    def __init__(
        self,
        file_path: Path,
        stream: TokenStream,
        rule: BaseTokenRule,
        ignore_codes: Iterable[str] = (),
    ):
        self.file_path = file_path
        self.stream = stream
        self.rule = rule
        self.ignore_codes = set(ignore_codes)
        self.issues: List[InternalIssue] = []

    def report_violation(
        self,
        message: str,
        token_index: int,
        code: str,
        substitutions: Sequence[str] = (),
    ) -> None:
        rule_id = f"{self.rule.rule_id}.{code}"
        if code in self.ignore_codes or rule_id in self.ignore_codes:
            return

        violation = Violation(message, token_index, code, tuple(substitutions))
        token = self.stream[token_index]
        self.issues.append(
            InternalIssue(
                file_path=self.file_path,
                line=token.line,
                column=token.column,
                rule_id=rule_id,
                message=violation.render(),
                severity=self.rule.severity,
                context=token.content.strip() or None,
            )
        )


class LinterEngine:
    """Core engine for PHP linting"""

    def __init__(
        self,
        tab_width: int = 4,
        ignore_codes: Iterable[str] = (),
        registry: Optional[RuleRegistry] = None,
    ):
        self.parser = PHPParser(tab_width=tab_width)
        self.registry = registry or RuleRegistry()
        self.ignore_codes = set(ignore_codes)
        self.issues: List[InternalIssue] = []

    def analyze_file(
        self, file_path: Path, rules: Optional[List[BaseTokenRule]] = None
    ) -> List[InternalIssue]:
        """Run all lint checks on a file"""
        file_path = Path(file_path)
        logger.debug("linting %s", file_path)
        source = file_path.read_text(encoding="utf-8")
        return self.analyze_string(source, file_path, rules)

    def analyze_string(
        self,
        source: str,
        file_path: Path | str = "<string>",
        rules: Optional[List[BaseTokenRule]] = None,
    ) -> List[InternalIssue]:
        result = self.parser.parse_string(source)
        if result.errors:
            logger.debug("%s: %d syntax error(s)", file_path, len(result.errors))
        return self.run_rules(result.stream, Path(file_path), rules)

    def run_rules(
        self,
        stream: TokenStream,
        file_path: Path,
        rules: Optional[List[BaseTokenRule]] = None,
    ) -> List[InternalIssue]:
        """Invoke each rule once per token of a kind it registered for"""
        if rules is None:
            rules = self.registry.get_all_rules()

        self.issues = []
        for rule in rules:
            reporter = FileReporter(file_path, stream, rule, self.ignore_codes)
            for index in stream.indices_of(rule.registered_token_kinds()):
                rule.validate(stream, index, reporter)
            self.issues.extend(reporter.issues)

        return sorted(self.issues, key=lambda x: (x.line, x.column, x.rule_id))
