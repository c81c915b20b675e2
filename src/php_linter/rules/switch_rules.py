import logging
from typing import Optional

from php_tree_sitter.tokens import TokenKind, TokenStream

from .base import BaseTokenRule, ViolationSink

logger = logging.getLogger(__name__)

CLAUSE_KINDS = frozenset({TokenKind.CASE, TokenKind.DEFAULT})
SEARCH_KINDS = CLAUSE_KINDS | {TokenKind.SWITCH}


class SwitchDeclarationRule(BaseTokenRule):
    """Ensures all switch statements are laid out correctly.

    Every case/default clause of the switch body is checked in source order:

    - the keyword is lower case and indented 4 columns from ``switch``
    - exactly one blank line separates it from the previous clause's body
    - ``case`` is followed by a single space, and nothing precedes the colon
    - the terminating statement is indented 4 columns from the keyword
    - a non-empty ``case`` that falls through has a comment before the next clause

    Nested switches are left alone; they get their own invocation.
    """

    INDENT = 4

    @property
    def rule_id(self) -> str:
        return "ControlStructures.SwitchDeclaration"

    @property
    def name(self) -> str:
        return "switch-declaration"

    @property
    def description(self) -> str:
        return "Checks the layout of case and default clauses in switch statements."

    @property
    def codes(self) -> tuple[str, ...]:
        return (
            "caseNotLower",
            "defaultNotLower",
            "caseIndent",
            "defaultIndent",
            "SpaceBetweenCase",
            "SpacingAfterCase",
            "SpaceBeforeColoncase",
            "SpaceBeforeColondefault",
            "BreakIndent",
            "TerminatingComment",
        )

    def registered_token_kinds(self) -> set[TokenKind]:
        return {TokenKind.SWITCH}

    def validate(self, stream: TokenStream, index: int, sink: ViolationSink) -> None:
        switch = stream[index]

        # We can't check a switch unless we know where its body starts and ends.
        if switch.scope_opener is None or switch.scope_closer is None:
            logger.debug("skipping unscoped switch at line %d", switch.line)
            return

        case_alignment = switch.column + self.INDENT
        case_count = 0
        found_default = False

        next_case = self._next_clause(stream, index + 1, switch.scope_closer)
        while next_case is not None:
            if stream[next_case].kind is TokenKind.DEFAULT:
                clause_type = "default"
                found_default = True
            else:
                clause_type = "case"
                case_count += 1

            self._check_clause(stream, index, next_case, clause_type, case_alignment, sink)
            next_case = self._next_clause(stream, next_case + 1, switch.scope_closer)

        logger.debug(
            "switch at line %d: %d case clause(s), default %s",
            switch.line,
            case_count,
            "present" if found_default else "absent",
        )

    @staticmethod
    def _next_clause(stream: TokenStream, start: int, end: int) -> Optional[int]:
        """Next case/default in [start, end), jumping over nested switch bodies."""
        position = start
        while True:
            found = stream.find_next(SEARCH_KINDS, position, end)
            if found is None or stream[found].kind is not TokenKind.SWITCH:
                return found
            nested_closer = stream[found].scope_closer
            position = (nested_closer if nested_closer is not None else found) + 1

    def _check_clause(
        self,
        stream: TokenStream,
        switch_index: int,
        case_index: int,
        clause_type: str,
        case_alignment: int,
        sink: ViolationSink,
    ) -> None:
        clause = stream[case_index]
        label = clause_type.upper()

        expected = clause.content.lower()
        if clause.content != expected:
            sink.report_violation(
                f'{label} keyword must be lowercase; expected "%s" but found "%s"',
                case_index,
                f"{clause_type}NotLower",
                (expected, clause.content),
            )

        if clause.column != case_alignment:
            sink.report_violation(
                f"{label} keyword must be indented 4 spaces from SWITCH keyword",
                case_index,
                f"{clause_type}Indent",
            )

        self._check_blank_lines(stream, switch_index, case_index, sink)

        if clause_type == "case":
            following = stream[case_index + 1] if case_index + 1 < len(stream) else None
            if (
                following is None
                or following.kind is not TokenKind.WHITESPACE
                or following.content != " "
            ):
                sink.report_violation(
                    "CASE keyword must be followed by a single space",
                    case_index,
                    "SpacingAfterCase",
                )

        opener = clause.scope_opener
        closer = clause.scope_closer
        if opener is None or closer is None:
            return

        if stream[opener - 1].kind is TokenKind.WHITESPACE:
            sink.report_violation(
                f"There must be no space before the colon in a {label} statement",
                case_index,
                f"SpaceBeforeColon{clause_type}",
            )

        # A closer shared by stacked or falling-through clauses is owned by
        # the first of them, so it is only checked once.
        if stream[closer].scope_condition == case_index:
            if stream[closer].column != case_alignment + self.INDENT:
                sink.report_violation(
                    "Terminating statement must be indented to the same level as the CASE body",
                    closer,
                    "BreakIndent",
                )

        if clause_type != "case":
            return

        next_code = stream.find_next(TokenKind.WHITESPACE, opener + 1, closer, negate=True)
        if next_code is None or stream[next_code].kind in CLAUSE_KINDS:
            # Empty body, stacked on the next label.
            return

        # The body has content. Reaching another clause before the closer means
        # there is no terminating statement, so a comment must say so.
        next_clause = self._next_clause(stream, opener + 1, closer)
        if next_clause is None:
            return

        prev_code = stream.find_previous(
            TokenKind.WHITESPACE, next_clause - 1, case_index, negate=True
        )
        if prev_code is None or stream[prev_code].kind is not TokenKind.COMMENT:
            sink.report_violation(
                "There must be a comment when fall-through is intentional in a non-empty case body",
                case_index,
                "TerminatingComment",
            )

    @staticmethod
    def _check_blank_lines(
        stream: TokenStream, switch_index: int, case_index: int, sink: ViolationSink
    ) -> None:
        prev_code = stream.find_previous(
            {TokenKind.WHITESPACE, TokenKind.COMMENT}, case_index - 1, switch_index, negate=True
        )
        if prev_code is None:
            return

        prev_line = stream[prev_code].line
        case_line = stream[case_index].line

        # line -> still blank; any comment on a line makes it non-blank
        lines: dict[int, bool] = {}
        for i in range(prev_code + 1, case_index):
            token = stream[i]
            if token.line == prev_line or token.line == case_line:
                continue
            lines.setdefault(token.line, True)
            if token.kind is TokenKind.COMMENT:
                lines[token.line] = False

        blank_lines = sum(1 for blank in lines.values() if blank)
        if blank_lines != 1 and stream[prev_code].kind not in (
            TokenKind.OPEN_BRACE,
            TokenKind.COLON,
        ):
            sink.report_violation(
                "Expected 1 blank line between case statements; %s found",
                case_index,
                "SpaceBetweenCase",
                (str(blank_lines),),
            )
