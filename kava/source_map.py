"""
Source buffers for the Kava Programming Language
Resolves byte offsets to line/column positions on demand
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Source:
    """A named text buffer: the unit handed to the lexer and parser"""
    uri: str
    text: str

    def _check_offset(self, offset: int):
        if offset < 0 or offset > len(self.text):
            raise ValueError(f"Offset {offset} out of bounds for {self.uri}")

    def offset_to_position(self, offset: int) -> 'Position':
        """Convert byte offset to line/column position"""
        self._check_offset(offset)
        line = self.text.count('\n', 0, offset) + 1
        line_start = self.text.rfind('\n', 0, offset) + 1
        return Position(line, offset - line_start + 1)

    def line_text(self, offset: int) -> str:
        """Get the content of the line containing offset (without the newline)"""
        self._check_offset(offset)
        start = self.text.rfind('\n', 0, offset) + 1
        end = self.text.find('\n', offset)
        if end == -1:
            end = len(self.text)
        return self.text[start:end]

    def line_count(self) -> int:
        return self.text.count('\n') + 1


@dataclass(frozen=True)
class Position:
    """Line/column position in a source (1-indexed)"""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """Represents a source span with start and end offsets"""
    source: Source
    start: int  # byte offset (inclusive)
    end: int    # byte offset (exclusive)

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid span: start ({self.start}) > end ({self.end})")

    def length(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def text(self) -> str:
        """Get the text content of the span"""
        return self.source.text[self.start:self.end]

    def positions(self):
        """Convert span to start and end positions"""
        start_pos = self.source.offset_to_position(self.start)
        end_pos = self.source.offset_to_position(max(self.start, self.end - 1))  # end is exclusive
        return start_pos, end_pos
