"""
Token definitions for the Kava Programming Language
"""

from dataclasses import dataclass
from typing import Optional

from kava.source_map import Position, Source, Span


class TokenKind:
    # Sentinels
    EOF = "EOF"
    ERROR = "ERROR"

    # Literals
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"

    # Identifiers
    NAME = "NAME"
    TYPENAME = "TYPENAME"


# Keywords: a keyword token's kind is its own spelling
KEYWORDS = frozenset([
    "class", "interface", "final", "static", "native", "private", "public",
    "this",
    "abstract",
    "return",
    "for", "if", "else", "while", "break", "continue",
    "true", "false",
    "null",
    "var", "const", "goto",
    "package", "import",
])

PRIMITIVES = frozenset(["void", "boolean", "char", "int", "float"])

# Longest first, so that '++' wins over '+' and '...' over '.'
SYMBOLS = tuple(sorted([
    "(", ")", "[", "]", "{", "}", ",", ".", "...",
    ";", "#", "$", "=",
    "+", "-", "*", "/", "%", "++", "--",
    "&&", "||", "?", ":",
    "==", "!=", "<", ">", "<=", ">=", "!",
    "+=", "-=", "*=", "/=", "%=",
], key=lambda symbol: (len(symbol), symbol), reverse=True))

ESCAPES = {
    't': '\t',
    'n': '\n',
    'f': '\f',
    'r': '\r',
    '\\': '\\',
    "'": "'",
    '"': '"',
}


def is_keyword(name: str) -> bool:
    return name in KEYWORDS


def is_primitive(name: str) -> bool:
    return name in PRIMITIVES


def is_typename(name: str) -> bool:
    """Primitive type, or a cased uppercase initial followed by a rest that isn't ALL CAPS"""
    if is_primitive(name):
        return True
    if not name:
        return False
    first, rest = name[0], name[1:]
    return first.upper() == first and first.lower() != first and rest.upper() != rest


@dataclass(frozen=True)
class Token:
    source: Source
    pos: int
    kind: str
    data: Optional[str] = None
    end: Optional[int] = None  # exclusive end offset of the token text

    def __post_init__(self):
        if self.pos < 0 or self.pos > len(self.source.text):
            raise ValueError(f"Token offset {self.pos} out of bounds for {self.source.uri}")
        if self.end is None:
            object.__setattr__(self, 'end', self.pos)

    @property
    def position(self) -> Position:
        return self.source.offset_to_position(self.pos)

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    @property
    def line_text(self) -> str:
        return self.source.line_text(self.pos)

    @property
    def span(self) -> Span:
        end = min(max(self.end, self.pos + 1), len(self.source.text))
        return Span(self.source, self.pos, max(end, self.pos))

    def location_message(self) -> str:
        """Render 'in <uri>, line <n>' followed by the line and a '*' under the column"""
        return (f"\nin {self.source.uri}, line {self.line}"
                f"\n{self.line_text}"
                f"\n{' ' * (self.column - 1)}*")

    def __repr__(self):
        if self.data is not None:
            return f"Token({self.kind}, {self.data})"
        return f"Token({self.kind})"
