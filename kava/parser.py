"""
Recursive descent parser for the Kava Programming Language

Pulls tokens from the lexer with one token of lookahead. The name of the
enclosing class is passed down explicitly as `this_class`, because an
unqualified call `name(args)` is read as a static call on that class.
"""

from typing import Optional, Tuple

from kava.ast_nodes import *
from kava.errors import ParseError
from kava.lexer import Lexer
from kava.source_map import Source
from kava.tokens import Token, TokenKind

# Binary operator precedence, higher binds tighter
BINARY_PRECEDENCE = {
    '||': 1,
    '&&': 2,
    '==': 3, '!=': 3,
    '<': 4, '<=': 4, '>': 4, '>=': 4,
    '+': 5, '-': 5,
    '*': 6, '/': 6, '%': 6,
}

ASSIGNMENT_OPERATORS = ('=', '+=', '-=', '*=', '/=', '%=')
UNARY_OPERATORS = ('!', '-')
POSTFIX_OPERATORS = ('++', '--')


class Parser:
    def __init__(self, source: Source):
        self.lexer = Lexer(source)

    # Token primitives

    def peek(self) -> Token:
        """Return current token without advancing"""
        return self.lexer.peek()

    def advance(self) -> Token:
        """Consume current token and return it"""
        return self.lexer.advance()

    def at(self, kind: str) -> bool:
        return self.peek().kind == kind

    def at_word(self, word: str) -> bool:
        """Check for a contextual keyword, which the lexer reports as a NAME"""
        token = self.peek()
        return token.kind == TokenKind.NAME and token.data == word

    def consume(self, kind: str) -> Optional[Token]:
        """Consume the current token if it has the given kind"""
        if self.at(kind):
            return self.advance()
        return None

    def consume_word(self, word: str) -> Optional[Token]:
        if self.at_word(word):
            return self.advance()
        return None

    def match(self, *kinds: str) -> Optional[Token]:
        """Consume the current token if it has any of the given kinds"""
        for kind in kinds:
            if self.at(kind):
                return self.advance()
        return None

    def expect(self, kind: str) -> Token:
        """Consume token of expected kind or raise error"""
        if not self.at(kind):
            raise ParseError.expected_token(self.peek(), kind)
        return self.advance()

    # Declarations

    def module(self) -> Program:
        """Parse a whole source into a Program"""
        start = self.peek()
        classes = []
        interfaces = []
        while not self.at(TokenKind.EOF):
            token = self.peek()
            access = self.access_modifier()
            if self.at('class'):
                classes.append(self.class_declaration(token, access))
            elif self.at('interface'):
                interfaces.append(self.interface_declaration(token, access))
            else:
                raise ParseError.expected_declaration(self.peek())
        return Program(start, tuple(classes), tuple(interfaces))

    def access_modifier(self) -> AccessModifier:
        """Parse an optional access modifier; members and types default to public"""
        token = self.match('public', 'private')
        if token is None:
            return AccessModifier.PUBLIC
        return AccessModifier(token.kind)

    def type_list(self) -> Tuple[str, ...]:
        names = [self.expect(TokenKind.TYPENAME).data]
        while self.consume(','):
            names.append(self.expect(TokenKind.TYPENAME).data)
        return tuple(names)

    def interface_declaration(self, token: Token, access: AccessModifier) -> Interface:
        self.expect('interface')
        name = self.expect(TokenKind.TYPENAME).data
        bases = ()
        if self.consume_word('extends'):
            bases = self.type_list()
        self.expect('{')
        method_stubs = []
        while not self.consume('}'):
            method_stubs.append(self.method_stub())
        return Interface(token, access, name, bases, tuple(method_stubs))

    def method_stub(self) -> MethodStub:
        token = self.peek()
        access = self.access_modifier()
        if access == AccessModifier.PRIVATE:
            raise ParseError.private_interface_method(token)
        return_type = self.expect(TokenKind.TYPENAME).data
        name = self.expect(TokenKind.NAME).data
        args = self.argument_list()
        self.expect(';')
        return MethodStub(token, access, return_type, name, args)

    def argument_list(self) -> Tuple[Argument, ...]:
        """Parse '(' (TYPENAME NAME (',' TYPENAME NAME)*)? ')'"""
        self.expect('(')
        if self.consume(')'):
            return ()
        args = [self.argument()]
        while self.consume(','):
            args.append(self.argument())
        self.expect(')')
        return tuple(args)

    def argument(self) -> Argument:
        token = self.peek()
        arg_type = self.expect(TokenKind.TYPENAME).data
        name = self.expect(TokenKind.NAME).data
        return Argument(token, arg_type, name)

    def class_declaration(self, token: Token, access: AccessModifier) -> Class:
        self.expect('class')
        name = self.expect(TokenKind.TYPENAME).data
        base = "Object"
        if self.consume_word('extends'):
            base = self.expect(TokenKind.TYPENAME).data
        interfaces = ()
        if self.consume_word('implements'):
            interfaces = self.type_list()
        self.expect('{')
        fields = []
        methods = []
        while not self.consume('}'):
            member = self.member(name)
            if isinstance(member, Method):
                methods.append(member)
            else:
                fields.append(member)
        return Class(token, access, name, base, interfaces, tuple(fields), tuple(methods))

    def member(self, this_class: str):
        """Parse a field or method; a '(' after the name makes it a method"""
        token = self.peek()
        access = self.access_modifier()
        is_static = self.consume('static') is not None
        member_type = self.expect(TokenKind.TYPENAME).data
        name = self.expect(TokenKind.NAME).data
        if self.at('('):
            args = self.argument_list()
            body = self.block(this_class)
            return Method(token, access, is_static, member_type, name, args, body)

        value = None
        if self.consume('='):
            value = self.expression(this_class)
        self.expect(';')
        return Field(token, access, is_static, member_type, name, value)

    # Statements

    def block(self, this_class: Optional[str]) -> Block:
        token = self.expect('{')
        statements = []
        while not self.consume('}'):
            statements.append(self.statement(this_class))
        return Block(token, tuple(statements))

    def statement(self, this_class: Optional[str]) -> Statement:
        token = self.peek()
        if self.at('{'):
            return self.block(this_class)
        if self.consume('if'):
            return self.if_statement(token, this_class)
        if self.consume('while'):
            condition = self.parenthesized(this_class)
            return While(token, condition, self.block(this_class))
        if self.consume('for'):
            return self.for_statement(token, this_class)
        if self.consume('return'):
            expression = None
            if not self.at(';'):
                expression = self.expression(this_class)
            self.expect(';')
            return Return(token, expression)
        if self.consume('break'):
            self.expect(';')
            return Break(token)
        if self.consume('continue'):
            self.expect(';')
            return Continue(token)

        statement = self.simple_statement(this_class)
        self.expect(';')
        return statement

    def simple_statement(self, this_class: Optional[str]):
        """Parse a declaration or an expression statement, without the ';'"""
        token = self.peek()
        if self.consume('var'):
            return self.declaration(token, 'var', this_class)
        if self.at(TokenKind.TYPENAME):
            type_token = self.advance()
            if self.at(TokenKind.NAME):
                return self.declaration(token, type_token.data, this_class)
            # Not a declaration: the type owns a static member access
            left = self.postfix(this_class, self.static_member(type_token, this_class))
            return ExpressionStatement(token, self.expression(this_class, left))
        return ExpressionStatement(token, self.expression(this_class))

    def declaration(self, token: Token, declared_type: str, this_class: Optional[str]) -> Declaration:
        name = self.expect(TokenKind.NAME).data
        expression = None
        if self.consume('='):
            expression = self.expression(this_class)
        return Declaration(token, declared_type, name, expression)

    def parenthesized(self, this_class: Optional[str]) -> Expression:
        self.expect('(')
        expression = self.expression(this_class)
        self.expect(')')
        return expression

    def if_statement(self, token: Token, this_class: Optional[str]) -> If:
        condition = self.parenthesized(this_class)
        body = self.block(this_class)
        other = None
        if self.consume('else'):
            else_token = self.peek()
            if self.consume('if'):
                other = self.if_statement(else_token, this_class)
            else:
                other = self.block(this_class)
        return If(token, condition, body, other)

    def for_statement(self, token: Token, this_class: Optional[str]) -> For:
        self.expect('(')
        initialize = None
        if not self.at(';'):
            initialize = self.simple_statement(this_class)
        self.expect(';')
        condition = None
        if not self.at(';'):
            condition = self.expression(this_class)
        self.expect(';')
        increment = None
        if not self.at(')'):
            increment = self.expression(this_class)
        self.expect(')')
        return For(token, initialize, condition, increment, self.block(this_class))

    # Expressions, lowest precedence first

    def expression(self, this_class: Optional[str], left: Optional[Expression] = None) -> Expression:
        """Parse an expression; `left` is an already-parsed leading operand"""
        return self.assignment(this_class, left)

    def assignment(self, this_class: Optional[str], left: Optional[Expression] = None) -> Expression:
        """Parse assignment expression (right-associative)"""
        target = self.ternary(this_class, left)
        operator = self.match(*ASSIGNMENT_OPERATORS)
        if operator is None:
            return target

        value = self.assignment(this_class)
        if operator.kind != '=':
            if not isinstance(target, (Name, GetAttribute, GetStaticAttribute)):
                raise ParseError.invalid_assignment_target(operator)
            return Operator(target.token, operator.kind, (target, value))
        if isinstance(target, Name):
            return Assign(target.token, target.name, value)
        if isinstance(target, GetAttribute):
            return SetAttribute(target.token, target.owner, target.name, value)
        if isinstance(target, GetStaticAttribute):
            return SetStaticAttribute(target.token, target.type, target.name, value)
        raise ParseError.invalid_assignment_target(operator)

    def ternary(self, this_class: Optional[str], left: Optional[Expression] = None) -> Expression:
        """Parse condition ? a : b (right-associative)"""
        condition = self.binary(1, this_class, left)
        if not self.consume('?'):
            return condition
        then = self.expression(this_class)
        self.expect(':')
        other = self.ternary(this_class)
        return Operator(condition.token, '?:', (condition, then, other))

    def binary(self, min_precedence: int, this_class: Optional[str],
               left: Optional[Expression] = None) -> Expression:
        """Precedence climbing over the left-associative binary operators"""
        if left is None:
            left = self.unary(this_class)
        while BINARY_PRECEDENCE.get(self.peek().kind, 0) >= min_precedence:
            operator = self.advance()
            right = self.binary(BINARY_PRECEDENCE[operator.kind] + 1, this_class)
            left = Operator(left.token, operator.kind, (left, right))
        return left

    def unary(self, this_class: Optional[str]) -> Expression:
        operator = self.match(*UNARY_OPERATORS)
        if operator is not None:
            return Operator(operator, operator.kind, (self.unary(this_class),))
        return self.postfix(this_class)

    def postfix(self, this_class: Optional[str], primary: Optional[Expression] = None) -> Expression:
        """Parse postfix ++/-- over a member access chain"""
        if primary is None:
            primary = self.primary(this_class)
        expr = self.member_access(this_class, primary)
        while True:
            operator = self.match(*POSTFIX_OPERATORS)
            if operator is None:
                return expr
            expr = Operator(expr.token, operator.kind, (expr,))

    def member_access(self, this_class: Optional[str], expr: Expression) -> Expression:
        """Fold '.name' and '.name(args)' steps onto expr, left to right"""
        while True:
            token = self.consume('.')
            if token is None:
                return expr
            name = self.expect(TokenKind.NAME).data
            if self.at('('):
                expr = MethodCall(token, expr, name, self.expression_list(this_class))
            else:
                expr = GetAttribute(token, expr, name)

    def static_member(self, type_token: Token, this_class: Optional[str]) -> Expression:
        """Parse '.name' or '.name(args)' after an already-consumed TYPENAME"""
        self.expect('.')
        name = self.expect(TokenKind.NAME).data
        if self.at('('):
            return StaticMethodCall(type_token, type_token.data, name, self.expression_list(this_class))
        return GetStaticAttribute(type_token, type_token.data, name)

    def primary(self, this_class: Optional[str]) -> Expression:
        """Parse primary expressions"""
        token = self.peek()
        if self.consume('this'):
            return This(token)
        if self.consume('true'):
            return Bool(token, True)
        if self.consume('false'):
            return Bool(token, False)
        if self.consume('null'):
            return Null(token)
        if self.consume(TokenKind.INT):
            return Int(token, int(token.data))
        if self.consume(TokenKind.FLOAT):
            return Float(token, float(token.data))
        if self.consume(TokenKind.STRING):
            return String(token, token.data)
        if self.consume('('):
            expr = self.expression(this_class)
            self.expect(')')
            return expr
        if self.consume(TokenKind.TYPENAME):
            return self.static_member(token, this_class)
        if self.consume(TokenKind.NAME):
            if token.data == 'new' and self.at(TokenKind.TYPENAME):
                new_type = self.advance().data
                return New(token, new_type, self.expression_list(this_class))
            if self.at('('):
                # Unqualified calls are taken to be static calls on the enclosing class
                return StaticMethodCall(token, this_class, token.data, self.expression_list(this_class))
            return Name(token, token.data)
        raise ParseError.expected_expression(token)

    def expression_list(self, this_class: Optional[str]) -> Tuple[Expression, ...]:
        """Parse '(' (Expression (',' Expression)*)? ')'"""
        self.expect('(')
        if self.consume(')'):
            return ()
        exprs = [self.expression(this_class)]
        while self.consume(','):
            exprs.append(self.expression(this_class))
        self.expect(')')
        return tuple(exprs)


def parse(uri: str, text: str) -> Program:
    """Parse a whole source file, raising CompileError on the first failure"""
    parser = Parser(Source(uri, text))
    try:
        return parser.module()
    except RecursionError:
        raise ParseError.nesting_too_deep(parser.peek()) from None


def parse_expression(text: str, uri: str = "<expression>") -> Expression:
    """Parse a standalone expression that must span the whole text"""
    parser = Parser(Source(uri, text))
    try:
        expr = parser.expression(None)
    except RecursionError:
        raise ParseError.nesting_too_deep(parser.peek()) from None
    parser.expect(TokenKind.EOF)
    return expr
