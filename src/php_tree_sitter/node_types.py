from dataclasses import dataclass, field
from typing import List

from tree_sitter import Tree

from .tokens import TokenStream

# Nodes taken as a single token instead of being split into their children.
ATOMIC_NODE_TYPES = frozenset(
    {
        "comment",
        "string",
        "encapsed_string",
        "heredoc",
        "nowdoc",
        "text",
        "shell_command_expression",
    }
)


@dataclass
class ParseResult:
    """Result of parsing one PHP source into a token stream"""

    tree: Tree
    source: str
    stream: TokenStream
    errors: List[str] = field(default_factory=list)
