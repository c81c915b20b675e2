"""Scope metadata for switch statements and their case/default clauses.

Scope relations are stored on tokens as indexes:

- ``scope_opener`` / ``scope_closer``: the tokens delimiting a body.
- ``scope_condition``: the token that owns an opener or closer. A closer
  shared by several clauses is owned by the first of them.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from tree_sitter import Node

from .ast_walker import ASTWalker
from .tokens import Token

logger = logging.getLogger(__name__)

TERMINATING_KEYWORDS = frozenset({"break", "return", "continue", "throw", "exit", "die"})
CLAUSE_NODE_TYPES = ("case_statement", "default_statement")


class ScopeMapper:
    """Attach switch and clause scope indexes to a flat token list"""

    def __init__(self, tokens: List[Token], index_by_start: Dict[int, int]):
        self.tokens = list(tokens)
        self.index_by_start = index_by_start
        self._scopes: Dict[int, Dict[str, int]] = {}

    def apply(self, root: Node) -> List[Token]:
        for node in ASTWalker.find_all_by_type(root, "switch_statement"):
            self._map_switch(node)

        for index, fields in self._scopes.items():
            self.tokens[index] = replace(self.tokens[index], **fields)
        return self.tokens

    def _index(self, node: Optional[Node]) -> Optional[int]:
        if node is None or node.is_missing:
            return None
        return self.index_by_start.get(node.start_byte)

    def _set(self, index: int, **fields: int) -> None:
        self._scopes.setdefault(index, {}).update(fields)

    def _claim(self, index: int, owner: int) -> None:
        self._scopes.setdefault(index, {}).setdefault("scope_condition", owner)

    def _map_switch(self, node: Node) -> None:
        switch_index = self._index(ASTWalker.get_child_of_type(node, "switch"))
        body = node.child_by_field_name("body") or ASTWalker.get_child_of_type(
            node, "switch_block"
        )
        if switch_index is None or body is None:
            return

        opener = self._index(ASTWalker.get_child_of_type(body, "{"))
        closer = self._index(ASTWalker.get_child_of_type(body, "}"))
        if opener is None or closer is None:
            logger.debug(
                "switch at line %d has no braced body; leaving it unscoped",
                node.start_point[0] + 1,
            )
            return

        for index in (switch_index, opener, closer):
            self._set(
                index,
                scope_opener=opener,
                scope_closer=closer,
                scope_condition=switch_index,
            )

        clauses = [child for child in body.named_children if child.type in CLAUSE_NODE_TYPES]
        self._map_clauses(clauses, closer)

    def _map_clauses(self, clauses: List[Node], switch_closer: int) -> None:
        entries = []
        for clause in clauses:
            keyword = clause.children[0] if clause.children else None
            colon = ASTWalker.get_child_of_type(clause, ":") or ASTWalker.get_child_of_type(
                clause, ";"
            )
            entries.append(
                (self._index(keyword), self._index(colon), self._terminator(clause, colon))
            )

        # A clause without its own terminator runs on into the next one.
        closers: List[int] = [switch_closer] * len(entries)
        next_closer = switch_closer
        for i in range(len(entries) - 1, -1, -1):
            own = entries[i][2]
            if own is not None:
                next_closer = own
            closers[i] = next_closer

        for (keyword, opener, _), closer in zip(entries, closers):
            if keyword is None or opener is None:
                continue
            self._set(keyword, scope_opener=opener, scope_closer=closer, scope_condition=keyword)
            self._set(opener, scope_opener=opener, scope_closer=closer, scope_condition=keyword)
            if closer != switch_closer:
                self._claim(closer, keyword)

    def _terminator(self, clause: Node, colon: Optional[Node]) -> Optional[int]:
        """Index of the keyword of the first break/return/... statement in the clause body.

        A body opening with a bare ``{ ... }`` block is searched inside that
        block first; blocks under if/loops are never searched.
        """
        if colon is None or colon.is_missing:
            return None
        statements = [
            child
            for child in clause.named_children
            if child.start_byte >= colon.end_byte and child.type != "comment"
        ]
        if statements and statements[0].type == "compound_statement":
            block = [child for child in statements[0].named_children if child.type != "comment"]
            statements = block + statements[1:]

        for statement in statements:
            index = self.index_by_start.get(statement.start_byte)
            if index is not None and self.tokens[index].content.lower() in TERMINATING_KEYWORDS:
                return index
        return None
