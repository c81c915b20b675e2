from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Union


class TokenKind(Enum):
    """Token categories the lint rules dispatch and search on"""

    SWITCH = "T_SWITCH"
    CASE = "T_CASE"
    DEFAULT = "T_DEFAULT"
    COLON = "T_COLON"
    WHITESPACE = "T_WHITESPACE"
    COMMENT = "T_COMMENT"
    OPEN_BRACE = "T_OPEN_CURLY_BRACKET"
    CLOSE_BRACE = "T_CLOSE_CURLY_BRACKET"
    OTHER = "T_STRING"


KindSpec = Union[TokenKind, Iterable[TokenKind]]


@dataclass(frozen=True)
class Token:
    """A single token of a PHP file.

    Scope fields are indexes into the owning TokenStream, never object links.
    """

    kind: TokenKind
    content: str
    line: int
    column: int
    scope_opener: Optional[int] = None
    scope_closer: Optional[int] = None
    scope_condition: Optional[int] = None

    @property
    def type(self) -> str:
        return self.kind.value


def _as_kind_set(kinds: KindSpec) -> frozenset:
    if isinstance(kinds, TokenKind):
        return frozenset((kinds,))
    return frozenset(kinds)


class TokenStream:
    """Ordered, read-only sequence of tokens for one file"""

    def __init__(self, tokens: Sequence[Token]):
        self._tokens = tuple(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def token_at(self, index: int) -> Token:
        return self._tokens[index]

    def find_next(
        self,
        kinds: KindSpec,
        start: int,
        end: Optional[int] = None,
        negate: bool = False,
    ) -> Optional[int]:
        """Index of the first token in [start, end) whose kind is in `kinds`.

        With `negate`, the first token whose kind is NOT in `kinds`.
        Returns None when nothing matches.
        """
        wanted = _as_kind_set(kinds)
        stop = len(self._tokens) if end is None else min(end, len(self._tokens))
        for i in range(max(start, 0), stop):
            if (self._tokens[i].kind in wanted) != negate:
                return i
        return None

    def find_previous(
        self,
        kinds: KindSpec,
        start: int,
        end: Optional[int] = None,
        negate: bool = False,
    ) -> Optional[int]:
        """Index of the nearest token at or before `start` whose kind is in `kinds`.

        Scans start, start - 1, ... down to `end` inclusive.
        """
        wanted = _as_kind_set(kinds)
        stop = 0 if end is None else max(end, 0)
        for i in range(min(start, len(self._tokens) - 1), stop - 1, -1):
            if (self._tokens[i].kind in wanted) != negate:
                return i
        return None

    def indices_of(self, kinds: KindSpec) -> list[int]:
        wanted = _as_kind_set(kinds)
        return [i for i, tok in enumerate(self._tokens) if tok.kind in wanted]
