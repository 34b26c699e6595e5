"""
Kava Programming Language front end: lexer, parser and AST
"""

from kava.ast_printer import format_node
from kava.diagnostics import ColorMode, DiagnosticFormatter, emit_diagnostic, get_formatter, set_color_mode
from kava.errors import CompileError, LexError, ParseError
from kava.lexer import Lexer, lex
from kava.parser import Parser, parse, parse_expression
from kava.source_map import Source
from kava.tokens import Token, TokenKind

__version__ = "0.1.0"
