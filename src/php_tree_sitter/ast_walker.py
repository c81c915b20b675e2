from typing import Callable, Collection, Iterator, List, Optional

from tree_sitter import Node


class ASTWalker:
    """Utilities for traversing and searching the PHP syntax tree"""

    @staticmethod
    def walk(node: Node, callback: Callable[[Node], None]):
        """Perform a depth-first traversal of the AST"""
        callback(node)
        for child in node.children:
            ASTWalker.walk(child, callback)

    @staticmethod
    def leaves(node: Node, atomic_types: Collection[str] = ()) -> Iterator[Node]:
        """Yield the leaves of the tree in source order.

        Nodes whose type is in `atomic_types` are yielded whole, without
        descending into their children.
        """
        if node.child_count == 0 or node.type in atomic_types:
            yield node
            return
        for child in node.children:
            yield from ASTWalker.leaves(child, atomic_types)

    @staticmethod
    def get_child_of_type(node: Node, type_name: str) -> Optional[Node]:
        """Find the first direct child of a specific type"""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def find_all_by_type(node: Node, type_name: str) -> List[Node]:
        """Find all descendant nodes of a specific type, outermost first"""
        results = []

        def check(n):
            if n.type == type_name:
                results.append(n)

        ASTWalker.walk(node, check)
        return results

    @staticmethod
    def get_text(node: Node, source: bytes | str) -> str:
        if isinstance(source, str):
            source = source.encode("utf-8")
        return source[node.start_byte : node.end_byte].decode("utf-8")
