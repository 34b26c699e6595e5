"""
Abstract Syntax Tree node definitions for the Kava Programming Language

Every node records the token it starts at, for error attribution. Tokens are
left out of equality, so two parses of the same text compare equal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from kava.tokens import Token


class AccessModifier(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes"""
    token: Token = field(compare=False, repr=False)


# Expressions

@dataclass(frozen=True)
class This(Node):
    pass


@dataclass(frozen=True)
class Null(Node):
    pass


@dataclass(frozen=True)
class Bool(Node):
    value: bool


@dataclass(frozen=True)
class Int(Node):
    value: int


@dataclass(frozen=True)
class Float(Node):
    value: float


@dataclass(frozen=True)
class String(Node):
    value: str


@dataclass(frozen=True)
class Name(Node):
    name: str


@dataclass(frozen=True)
class Operator(Node):
    """Unary, binary, ternary ('?:'), postfix and compound-assignment operators"""
    operator: str
    args: Tuple['Expression', ...]


@dataclass(frozen=True)
class Assign(Node):
    """Plain variable assignment (name = value)"""
    name: str
    value: 'Expression'


@dataclass(frozen=True)
class GetAttribute(Node):
    """Field read (owner.name)"""
    owner: 'Expression'
    name: str


@dataclass(frozen=True)
class SetAttribute(Node):
    """Field write (owner.name = value)"""
    owner: 'Expression'
    name: str
    value: 'Expression'


@dataclass(frozen=True)
class GetStaticAttribute(Node):
    type: str
    name: str


@dataclass(frozen=True)
class SetStaticAttribute(Node):
    type: str
    name: str
    value: 'Expression'


@dataclass(frozen=True)
class MethodCall(Node):
    owner: 'Expression'
    name: str
    args: Tuple['Expression', ...]


@dataclass(frozen=True)
class StaticMethodCall(Node):
    # None when an unqualified call is parsed outside any class
    type: Optional[str]
    name: str
    args: Tuple['Expression', ...]


@dataclass(frozen=True)
class New(Node):
    type: str
    args: Tuple['Expression', ...]


Expression = Union[
    This, Null, Bool, Int, Float, String, Name, Operator, Assign,
    GetAttribute, SetAttribute, GetStaticAttribute, SetStaticAttribute,
    MethodCall, StaticMethodCall, New,
]

EXPRESSION_TYPES = Expression.__args__


# Statements

@dataclass(frozen=True)
class Block(Node):
    statements: Tuple['Statement', ...]


@dataclass(frozen=True)
class If(Node):
    condition: Expression
    body: Block
    other: Optional[Union['If', Block]] = None


@dataclass(frozen=True)
class For(Node):
    initialize: Optional[Union['Declaration', 'ExpressionStatement']]
    condition: Optional[Expression]
    increment: Optional[Expression]
    body: Block


@dataclass(frozen=True)
class While(Node):
    condition: Expression
    body: Block


@dataclass(frozen=True)
class Break(Node):
    pass


@dataclass(frozen=True)
class Continue(Node):
    pass


@dataclass(frozen=True)
class Declaration(Node):
    type: str
    name: str
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class Return(Node):
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression


Statement = Union[Block, If, For, While, Break, Continue, Declaration, Return, ExpressionStatement]

STATEMENT_TYPES = Statement.__args__


# Declarations

@dataclass(frozen=True)
class Argument(Node):
    type: str
    name: str


@dataclass(frozen=True)
class Field(Node):
    access: AccessModifier
    is_static: bool
    type: str
    name: str
    value: Optional[Expression] = None


@dataclass(frozen=True)
class MethodStub(Node):
    access: AccessModifier
    return_type: str
    name: str
    args: Tuple[Argument, ...]


@dataclass(frozen=True)
class Method(Node):
    access: AccessModifier
    is_static: bool
    return_type: str
    name: str
    args: Tuple[Argument, ...]
    body: Block


@dataclass(frozen=True)
class Class(Node):
    access: AccessModifier
    name: str
    base: str
    interfaces: Tuple[str, ...]
    fields: Tuple[Field, ...]
    methods: Tuple[Method, ...]


@dataclass(frozen=True)
class Interface(Node):
    access: AccessModifier
    name: str
    bases: Tuple[str, ...]
    method_stubs: Tuple[MethodStub, ...]


@dataclass(frozen=True)
class Program(Node):
    """Root node containing all classes and interfaces"""
    classes: Tuple[Class, ...]
    interfaces: Tuple[Interface, ...]
