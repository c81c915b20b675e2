"""
PHP tokenizer built on Tree-sitter.

Turns the leaves of a tree-sitter-php syntax tree into a flat token stream
with line/column positions and switch scope metadata.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import tree_sitter_php as tsphp
from tree_sitter import Language, Node, Parser

from .ast_walker import ASTWalker
from .node_types import ATOMIC_NODE_TYPES, ParseResult
from .scope_map import ScopeMapper
from .tokens import Token, TokenKind, TokenStream

logger = logging.getLogger(__name__)

_GAP_RE = re.compile(r"\s+|\S+")
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")

# keyword -> parent node type it must appear in
_KEYWORD_KINDS = {
    "switch": ("switch_statement", TokenKind.SWITCH),
    "case": ("case_statement", TokenKind.CASE),
    "default": ("default_statement", TokenKind.DEFAULT),
}


def classify(node: Node) -> TokenKind:
    """Map a tree-sitter leaf onto a TokenKind"""
    node_type = node.type
    parent_type = node.parent.type if node.parent is not None else None

    if node_type == "comment":
        return TokenKind.COMMENT
    if node_type in _KEYWORD_KINDS:
        expected_parent, kind = _KEYWORD_KINDS[node_type]
        return kind if parent_type == expected_parent else TokenKind.OTHER
    if node_type == ":":
        return TokenKind.OTHER if parent_type == "conditional_expression" else TokenKind.COLON
    if node_type == "{":
        return TokenKind.OPEN_BRACE
    if node_type == "}":
        return TokenKind.CLOSE_BRACE
    return TokenKind.OTHER


class _TokenBuilder:
    """Accumulates tokens while tracking line and tab-expanded column"""

    def __init__(self, data: bytes, tab_width: int):
        self.data = data
        self.tab_width = tab_width
        self.tokens: List[Token] = []
        self.index_by_start: Dict[int, int] = {}
        self.offset = 0
        self.line = 1
        self.column = 1

    def gap_to(self, end: int) -> None:
        if end <= self.offset:
            return
        gap = self.data[self.offset : end].decode("utf-8")
        for match in _GAP_RE.finditer(gap):
            text = match.group()
            self._emit(TokenKind.WHITESPACE if text.isspace() else TokenKind.OTHER, text)
        self.offset = end

    def add_leaf(self, node: Node) -> None:
        self.gap_to(node.start_byte)
        self.index_by_start[node.start_byte] = len(self.tokens)
        self._emit(classify(node), ASTWalker.get_text(node, self.data))
        self.offset = node.end_byte

    def _emit(self, kind: TokenKind, text: str) -> None:
        # One token per physical line; the newline stays with the line it ends.
        for piece in _LINE_RE.findall(text):
            self.tokens.append(Token(kind=kind, content=piece, line=self.line, column=self.column))
            self._advance(piece)

    def _advance(self, text: str) -> None:
        for char in text:
            if char == "\n":
                self.line += 1
                self.column = 1
            elif char == "\t":
                self.column += self.tab_width - (self.column - 1) % self.tab_width
            else:
                self.column += 1


class PHPParser:
    """Parse PHP source into a TokenStream"""

    def __init__(self, tab_width: int = 4):
        self.tab_width = tab_width
        self.language = Language(tsphp.language_php())
        self.parser = Parser(self.language)

    def parse_string(self, source: str) -> ParseResult:
        source = source.replace("\r\n", "\n")
        data = source.encode("utf-8")
        tree = self.parser.parse(data)

        builder = _TokenBuilder(data, self.tab_width)
        for leaf in ASTWalker.leaves(tree.root_node, ATOMIC_NODE_TYPES):
            if leaf.is_missing or leaf.start_byte == leaf.end_byte:
                continue
            builder.add_leaf(leaf)
        builder.gap_to(len(data))

        tokens = ScopeMapper(builder.tokens, builder.index_by_start).apply(tree.root_node)
        errors = self._collect_errors(tree.root_node)
        if errors:
            logger.debug("syntax errors at %s", ", ".join(errors))

        return ParseResult(tree=tree, source=source, stream=TokenStream(tokens), errors=errors)

    def parse_file(self, file_path: Path, encoding: Optional[str] = "utf-8") -> ParseResult:
        return self.parse_string(Path(file_path).read_text(encoding=encoding))

    @staticmethod
    def _collect_errors(root: Node) -> List[str]:
        errors = []

        def check(node):
            if node.type == "ERROR" or node.is_missing:
                row, col = node.start_point
                errors.append(f"{row + 1}:{col + 1}")

        ASTWalker.walk(root, check)
        return errors
