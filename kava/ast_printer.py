"""
Structural pretty printer for Kava ASTs
Renders a node as an indented tree, one line per node
"""

from typing import List

from kava.ast_nodes import *

INDENT = "  "


def format_node(node) -> str:
    """Render any AST node (including Program) as an indented tree"""
    lines: List[str] = []
    _format(node, 0, lines)
    return "\n".join(lines)


def _format_arguments(args) -> str:
    return ", ".join(f"{arg.type} {arg.name}" for arg in args)


def _modifiers(access: AccessModifier, is_static: bool = False) -> str:
    return access.value + (" static" if is_static else "")


def _format(node, depth: int, lines: List[str]):
    def emit(text: str):
        lines.append(INDENT * depth + text)

    def children(*nodes):
        for child in nodes:
            _format(child, depth + 1, lines)

    # Declarations
    if isinstance(node, Program):
        emit("Program")
        children(*node.interfaces, *node.classes)
    elif isinstance(node, Interface):
        header = f"Interface {node.access.value} {node.name}"
        if node.bases:
            header += " extends " + ", ".join(node.bases)
        emit(header)
        children(*node.method_stubs)
    elif isinstance(node, MethodStub):
        emit(f"MethodStub {node.access.value} {node.return_type} {node.name}({_format_arguments(node.args)})")
    elif isinstance(node, Class):
        header = f"Class {node.access.value} {node.name} extends {node.base}"
        if node.interfaces:
            header += " implements " + ", ".join(node.interfaces)
        emit(header)
        children(*node.fields, *node.methods)
    elif isinstance(node, Field):
        emit(f"Field {_modifiers(node.access, node.is_static)} {node.type} {node.name}")
        if node.value is not None:
            children(node.value)
    elif isinstance(node, Method):
        emit(f"Method {_modifiers(node.access, node.is_static)} {node.return_type} "
             f"{node.name}({_format_arguments(node.args)})")
        children(node.body)
    elif isinstance(node, Argument):
        emit(f"Argument {node.type} {node.name}")

    # Statements
    elif isinstance(node, Block):
        emit("Block")
        children(*node.statements)
    elif isinstance(node, If):
        emit("If")
        children(node.condition, node.body)
        if node.other is not None:
            emit("Else")
            children(node.other)
    elif isinstance(node, For):
        emit("For")
        for part in (node.initialize, node.condition, node.increment):
            if part is None:
                lines.append(INDENT * (depth + 1) + "Empty")
            else:
                children(part)
        children(node.body)
    elif isinstance(node, While):
        emit("While")
        children(node.condition, node.body)
    elif isinstance(node, Break):
        emit("Break")
    elif isinstance(node, Continue):
        emit("Continue")
    elif isinstance(node, Declaration):
        emit(f"Declaration {node.type} {node.name}")
        if node.expression is not None:
            children(node.expression)
    elif isinstance(node, Return):
        emit("Return")
        if node.expression is not None:
            children(node.expression)
    elif isinstance(node, ExpressionStatement):
        emit("ExpressionStatement")
        children(node.expression)

    # Expressions
    elif isinstance(node, This):
        emit("This")
    elif isinstance(node, Null):
        emit("Null")
    elif isinstance(node, Bool):
        emit(f"Bool {'true' if node.value else 'false'}")
    elif isinstance(node, (Int, Float)):
        emit(f"{type(node).__name__} {node.value}")
    elif isinstance(node, String):
        emit(f"String {node.value!r}")
    elif isinstance(node, Name):
        emit(f"Name {node.name}")
    elif isinstance(node, Operator):
        emit(f"Operator {node.operator}")
        children(*node.args)
    elif isinstance(node, Assign):
        emit(f"Assign {node.name}")
        children(node.value)
    elif isinstance(node, GetAttribute):
        emit(f"GetAttribute {node.name}")
        children(node.owner)
    elif isinstance(node, SetAttribute):
        emit(f"SetAttribute {node.name}")
        children(node.owner, node.value)
    elif isinstance(node, GetStaticAttribute):
        emit(f"GetStaticAttribute {node.type}.{node.name}")
    elif isinstance(node, SetStaticAttribute):
        emit(f"SetStaticAttribute {node.type}.{node.name}")
        children(node.value)
    elif isinstance(node, MethodCall):
        emit(f"MethodCall {node.name}")
        children(node.owner, *node.args)
    elif isinstance(node, StaticMethodCall):
        emit(f"StaticMethodCall {node.type}.{node.name}")
        children(*node.args)
    elif isinstance(node, New):
        emit(f"New {node.type}")
        children(*node.args)
    else:
        raise TypeError(f"Cannot format {type(node).__name__} as an AST node")
