"""
Error handling for the Kava Programming Language
Every lexical and syntactic failure is a CompileError carrying a Diagnostic
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from kava.source_map import Span
from kava.tokens import Token


class Severity(Enum):
    """Error severity levels"""
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"


@dataclass
class LabeledSpan:
    """A span with an optional label"""
    span: Span
    label: Optional[str] = None
    is_primary: bool = False


class ErrorCode:
    """Error code constants"""
    # Lexical errors (KAV1xxx)
    UNTERMINATED_COMMENT = "KAV1001"
    UNRECOGNIZED_ESCAPE = "KAV1002"
    UNRECOGNIZED_TOKEN = "KAV1003"
    UNTERMINATED_STRING = "KAV1004"

    # Parser errors (KAV2xxx)
    EXPECTED_TOKEN = "KAV2001"
    EXPECTED_DECLARATION = "KAV2002"
    EXPECTED_EXPRESSION = "KAV2003"
    PRIVATE_INTERFACE_METHOD = "KAV2004"
    INVALID_ASSIGNMENT_TARGET = "KAV2005"
    NESTING_TOO_DEEP = "KAV2006"


@dataclass
class Diagnostic:
    """Structured description of one compile failure"""
    code: str
    severity: Severity
    message: str
    labels: List[LabeledSpan]
    notes: List[str] = field(default_factory=list)
    help: Optional[str] = None

    def __post_init__(self):
        # Ensure exactly one primary label
        primaries = [label for label in self.labels if label.is_primary]
        if not primaries and self.labels:
            self.labels[0].is_primary = True
        for label in primaries[1:]:
            label.is_primary = False

    def primary_span(self) -> Optional[Span]:
        """Get the primary span for this diagnostic"""
        for label in self.labels:
            if label.is_primary:
                return label.span
        return None

    def to_json(self) -> Dict[str, Any]:
        """Convert diagnostic to JSON-serializable format"""
        labels = []
        for label in self.labels:
            start_pos, _ = label.span.positions()
            labels.append({
                'span': {
                    'uri': label.span.source.uri,
                    'start': label.span.start,
                    'end': label.span.end,
                    'line': start_pos.line,
                    'column': start_pos.column,
                },
                'label': label.label,
                'is_primary': label.is_primary,
            })
        return {
            'code': self.code,
            'severity': self.severity.value,
            'message': self.message,
            'labels': labels,
            'notes': list(self.notes),
            'help': self.help,
        }


class CompileError(Exception):
    """Base exception for every lexing and parsing failure

    The message is the diagnostic text followed by one location block per
    attributed token:

        <message>
        in <uri>, line <n>
        <source line>
            *
    """

    def __init__(self, diagnostic: Diagnostic, tokens: Sequence[Token]):
        self.diagnostic = diagnostic
        self.tokens = tuple(tokens)
        self.message = diagnostic.message + "".join(token.location_message() for token in self.tokens)
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @classmethod
    def from_tokens(cls, code: str, message: str, tokens: Sequence[Token],
                    label: Optional[str] = None, help_text: Optional[str] = None):
        """Create error from simple parameters, labelling every token"""
        labels = [LabeledSpan(token.span, label, is_primary=(i == 0))
                  for i, token in enumerate(tokens)]
        diagnostic = Diagnostic(
            code=code,
            severity=Severity.ERROR,
            message=message,
            labels=labels,
            help=help_text
        )
        return cls(diagnostic, tokens)


class LexError(CompileError):
    """Lexical analysis errors"""

    @classmethod
    def unterminated_comment(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.UNTERMINATED_COMMENT,
            "Unterminated multiline comment",
            [token],
            label="comment starts here",
            help_text="close the comment with '*/'"
        )

    @classmethod
    def unrecognized_escape(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.UNRECOGNIZED_ESCAPE,
            "Unrecognized string escape",
            [token],
            label="unknown escape character",
            help_text="valid escapes are \\t \\n \\f \\r \\\\ \\' \\\", or use a raw string r\"...\""
        )

    @classmethod
    def unrecognized_token(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.UNRECOGNIZED_TOKEN,
            "Unrecognized token",
            [token],
            label="unexpected character",
            help_text="check for typos or unsupported characters"
        )

    @classmethod
    def unterminated_string(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.UNTERMINATED_STRING,
            "Unterminated string literal",
            [token],
            label="string starts here",
            help_text="add the closing quote to terminate the string"
        )


class ParseError(CompileError):
    """Parser errors"""

    @classmethod
    def expected_token(cls, token: Token, expected: str):
        return cls.from_tokens(
            ErrorCode.EXPECTED_TOKEN,
            f"Expected {expected} but got {token!r}",
            [token],
            label=f"expected {expected} here"
        )

    @classmethod
    def expected_declaration(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.EXPECTED_DECLARATION,
            "Expected class or interface",
            [token],
            label="expected 'class' or 'interface' here",
            help_text="only classes and interfaces may appear at the top level"
        )

    @classmethod
    def expected_expression(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.EXPECTED_EXPRESSION,
            "Expected expression",
            [token],
            label="expected expression here",
            help_text="add a valid expression (name, literal, call, or field access)"
        )

    @classmethod
    def private_interface_method(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.PRIVATE_INTERFACE_METHOD,
            "interface methods can't be private",
            [token],
            label="declared private here",
            help_text="remove 'private' or declare the method 'public'"
        )

    @classmethod
    def invalid_assignment_target(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.INVALID_ASSIGNMENT_TARGET,
            "Invalid assignment target",
            [token],
            label="cannot assign to this expression",
            help_text="only variables, fields and static fields can be assigned to"
        )

    @classmethod
    def nesting_too_deep(cls, token: Token):
        return cls.from_tokens(
            ErrorCode.NESTING_TOO_DEEP,
            "Nesting too deep",
            [token],
            label="nesting limit reached here",
            help_text="split the expression or block into smaller pieces"
        )
