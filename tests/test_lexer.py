"""Lexer tests: classification, literals, comments, positions and lexical errors."""

import pytest

from kava.errors import ErrorCode, LexError
from kava.lexer import Lexer, lex
from kava.source_map import Source
from kava.tokens import TokenKind


def kinds(text):
    return [token.kind for token in lex("<test>", text)]


def only_token(text):
    tokens = lex("<test>", text)
    assert len(tokens) == 2, tokens
    assert tokens[1].kind == TokenKind.EOF
    return tokens[0]


def test_simple_example():
    assert kinds("aa Bb class 1 2.4 'hi' ++") == [
        "NAME", "TYPENAME", "class", "INT", "FLOAT", "STRING", "++", "EOF",
    ]


def test_stream_ends_with_exactly_one_eof():
    tokens = lex("<test>", "public class Foo { }")
    assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
    assert tokens[-1].kind == TokenKind.EOF
    assert tokens[-1].pos == len("public class Foo { }")


def test_empty_and_blank_sources():
    assert kinds("") == ["EOF"]
    tokens = lex("<test>", "  \n\t\r\n")
    assert len(tokens) == 1
    assert tokens[0].pos == 6


def test_eof_is_idempotent():
    lexer = Lexer(Source("<test>", "x"))
    assert lexer.advance().kind == TokenKind.NAME
    eof = lexer.advance()
    assert eof.kind == TokenKind.EOF
    for _ in range(3):
        assert lexer.peek() == eof
        assert lexer.advance() == eof
    assert lexer.tokenize() == [eof]


def test_peek_does_not_advance():
    lexer = Lexer(Source("<test>", "a b"))
    assert lexer.peek() is lexer.peek()
    assert lexer.advance().data == "a"
    assert lexer.peek().data == "b"


@pytest.mark.parametrize("text", ["++", "--", "<=", ">=", "==", "!=", "&&", "||", "...", "+=", "%="])
def test_maximal_munch(text):
    assert kinds(text) == [text, "EOF"]


def test_maximal_munch_in_context():
    assert kinds("a+++b") == ["NAME", "++", "+", "NAME", "EOF"]
    assert kinds("x<=y") == ["NAME", "<=", "NAME", "EOF"]
    assert kinds("a.b") == ["NAME", ".", "NAME", "EOF"]


@pytest.mark.parametrize("text,kind", [
    ("MyClass", TokenKind.TYPENAME),
    ("Ab", TokenKind.TYPENAME),
    ("String", TokenKind.TYPENAME),
    ("myVar", TokenKind.NAME),
    ("CONST_NAME", TokenKind.NAME),
    ("A", TokenKind.NAME),
    ("_Private", TokenKind.NAME),
    ("extends", TokenKind.NAME),
    ("int", TokenKind.TYPENAME),
    ("void", TokenKind.TYPENAME),
    ("boolean", TokenKind.TYPENAME),
    ("char", TokenKind.TYPENAME),
    ("float", TokenKind.TYPENAME),
])
def test_typename_classification(text, kind):
    token = only_token(text)
    assert token.kind == kind
    assert token.data == text


@pytest.mark.parametrize("keyword", ["class", "interface", "static", "this", "return", "null", "goto", "import"])
def test_keywords_have_no_payload(keyword):
    token = only_token(keyword)
    assert token.kind == keyword
    assert token.data is None


def test_string_escapes():
    token = only_token(r'"a\tb\nc\\d\'e\"f\r\f"')
    assert token.kind == TokenKind.STRING
    assert token.data == "a\tb\nc\\d'e\"f\r\f"


def test_single_quoted_string():
    assert only_token("'hi there'").data == "hi there"


def test_raw_string_keeps_backslashes():
    assert only_token(r'r"a\nb\q"').data == "a\\nb\\q"
    assert only_token(r"r'C:\dir'").data == "C:\\dir"


def test_triple_quoted_strings():
    assert only_token('"""say "hi" now"""').data == 'say "hi" now'
    assert only_token("'''it's'''").data == "it's"
    assert only_token('"""two\nlines"""').data == "two\nlines"


def test_empty_strings():
    assert only_token('""').data == ""
    assert only_token("''").data == ""


def test_r_alone_is_a_name():
    assert kinds("r x") == ["NAME", "NAME", "EOF"]


def test_integer_literal():
    token = only_token("123")
    assert token.kind == TokenKind.INT
    assert token.data == "123"


@pytest.mark.parametrize("text", ["1.5", "1.", ".5", "0.25"])
def test_float_literals(text):
    token = only_token(text)
    assert token.kind == TokenKind.FLOAT
    assert token.data == text


def test_lone_dot_is_a_symbol():
    assert kinds(".") == [".", "EOF"]


def test_number_then_name():
    assert kinds("1abc") == ["INT", "NAME", "EOF"]


def test_comments_are_skipped():
    assert kinds("a // line comment\nb /* block\ncomment */ c") == ["NAME", "NAME", "NAME", "EOF"]
    assert kinds("/**/x//") == ["NAME", "EOF"]


def test_unterminated_block_comment():
    with pytest.raises(LexError) as excinfo:
        lex("<test>", "x /* comment")
    error = excinfo.value
    assert "Unterminated multiline comment" in str(error)
    assert error.code == ErrorCode.UNTERMINATED_COMMENT
    assert error.tokens[0].pos == 2
    assert error.tokens[0].kind == TokenKind.ERROR


def test_unrecognized_escape():
    with pytest.raises(LexError) as excinfo:
        lex("<test>", '"\\q"')
    assert str(excinfo.value).startswith("Unrecognized string escape")
    assert excinfo.value.tokens[0].pos == 2


def test_unterminated_string():
    with pytest.raises(LexError) as excinfo:
        lex("<test>", 'x = "abc')
    assert str(excinfo.value).startswith("Unterminated string literal")
    assert excinfo.value.tokens[0].pos == 4


@pytest.mark.parametrize("text,pos", [
    ("a @ b", 2), ("&", 0), ("x | y", 2), ("`", 0),
    ("café", 3), ("x²", 1), ("½", 0), ("٣", 0),
])
def test_unrecognized_token(text, pos):
    with pytest.raises(LexError) as excinfo:
        lex("<test>", text)
    assert str(excinfo.value).startswith("Unrecognized token")
    assert excinfo.value.tokens[0].pos == pos


def test_positions_are_resolved_lazily():
    tokens = lex("<test>", "a\n  bc")
    bc = tokens[1]
    assert bc.pos == 4
    assert bc.end == 6
    assert (bc.line, bc.column) == (2, 3)
    assert bc.line_text == "  bc"


def test_token_repr():
    name, semicolon, _ = lex("<test>", "foo;")
    assert repr(name) == "Token(NAME, foo)"
    assert repr(semicolon) == "Token(;)"
