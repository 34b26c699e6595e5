"""
Lexer for the Kava Programming Language
Converts source text into tokens, one token of lookahead at a time
"""

from typing import List

from kava.errors import LexError
from kava.source_map import Source
from kava.tokens import ESCAPES, SYMBOLS, Token, TokenKind, is_keyword, is_typename

WHITESPACE = " \r\n\t"


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def is_name_char(ch: str) -> bool:
    return ch == '_' or 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or is_digit(ch)


class Lexer:
    def __init__(self, source: Source):
        self.source = source
        self.text = source.text
        self.pos = 0
        self._peek = self._extract()

    def peek(self) -> Token:
        """Return the next token without consuming it"""
        return self._peek

    def advance(self) -> Token:
        """Consume and return the next token; EOF is returned forever once reached"""
        token = self._peek
        if token.kind != TokenKind.EOF:
            self._peek = self._extract()
        return token

    def tokenize(self) -> List[Token]:
        """Tokenize the rest of the source, ending with exactly one EOF token"""
        tokens = []
        while self.peek().kind != TokenKind.EOF:
            tokens.append(self.advance())
        tokens.append(self.peek())
        return tokens

    def _ch(self, dx: int = 0) -> str:
        """Character at the current position plus dx, or '' past the end"""
        pos = self.pos + dx
        return self.text[pos] if pos < len(self.text) else ''

    def _starts_with(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def _token(self, start: int, kind: str, data=None) -> Token:
        return Token(self.source, start, kind, data, self.pos)

    def _skip_whitespace_and_comments(self):
        while self._ch() != '':
            if self._ch() in WHITESPACE:
                self.pos += 1
            elif self._starts_with('//'):
                while self._ch() != '' and self._ch() != '\n':
                    self.pos += 1
            elif self._starts_with('/*'):
                start = self.pos
                self.pos += 2
                while self._ch() != '' and not self._starts_with('*/'):
                    self.pos += 1
                if self._ch() == '':
                    raise LexError.unterminated_comment(Token(self.source, start, TokenKind.ERROR, None, start + 2))
                self.pos += 2
            else:
                break

    def _extract(self) -> Token:
        self._skip_whitespace_and_comments()
        if self._ch() == '':
            return self._token(self.pos, TokenKind.EOF)

        for scan in (self._string, self._number, self._word, self._symbol):
            token = scan()
            if token is not None:
                return token

        start = self.pos
        raise LexError.unrecognized_token(Token(self.source, start, TokenKind.ERROR, None, start + 1))

    def _string(self):
        """Handle string literals: optional r prefix, '...', "...", or triple-quoted"""
        if not (self._starts_with('r"') or self._starts_with("r'")
                or self._ch() == '"' or self._ch() == "'"):
            return None

        start = self.pos
        raw = False
        if self._ch() == 'r':
            raw = True
            self.pos += 1

        quote = self._ch()
        if self._starts_with(quote * 3):
            quote = quote * 3
        self.pos += len(quote)

        chars = []
        while not self._starts_with(quote):
            if self._ch() == '':
                raise LexError.unterminated_string(Token(self.source, start, TokenKind.ERROR, None, self.pos))
            if not raw and self._ch() == '\\':
                self.pos += 1
                escaped = ESCAPES.get(self._ch())
                if escaped is None:
                    raise LexError.unrecognized_escape(Token(self.source, self.pos, TokenKind.ERROR, None, self.pos + 1))
                chars.append(escaped)
            else:
                chars.append(self._ch())
            self.pos += 1

        self.pos += len(quote)
        return self._token(start, TokenKind.STRING, ''.join(chars))

    def _number(self):
        """Handle INT and FLOAT literals; at least one digit is required"""
        start = self.pos
        found_digit = found_dot = False
        while is_digit(self._ch()):
            self.pos += 1
            found_digit = True
        if self._ch() == '.':
            self.pos += 1
            found_dot = True
        while is_digit(self._ch()):
            self.pos += 1
            found_digit = True

        if not found_digit:
            self.pos = start
            return None

        kind = TokenKind.FLOAT if found_dot else TokenKind.INT
        return self._token(start, kind, self.text[start:self.pos])

    def _word(self):
        """Handle keywords, typenames and names"""
        start = self.pos
        while is_name_char(self._ch()):
            self.pos += 1
        if start == self.pos:
            return None

        name = self.text[start:self.pos]
        if is_keyword(name):
            return self._token(start, name)
        if is_typename(name):
            return self._token(start, TokenKind.TYPENAME, name)
        return self._token(start, TokenKind.NAME, name)

    def _symbol(self):
        start = self.pos
        for symbol in SYMBOLS:
            if self._starts_with(symbol):
                self.pos += len(symbol)
                return self._token(start, symbol)
        return None


def lex(uri: str, text: str) -> List[Token]:
    """Tokenize a whole source, raising LexError on the first bad token"""
    return Lexer(Source(uri, text)).tokenize()
