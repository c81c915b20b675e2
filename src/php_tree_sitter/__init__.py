from .ast_walker import ASTWalker
from .node_types import ParseResult
from .parser import PHPParser
from .tokens import Token, TokenKind, TokenStream

__all__ = ["ASTWalker", "ParseResult", "PHPParser", "Token", "TokenKind", "TokenStream"]
