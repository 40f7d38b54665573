"""Abstract Syntax Tree (AST) definitions for letlang.

Expressions and statements share one node hierarchy. Every compound node
owns its children outright; the parser never shares a node between two
parents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class Number(Node):
    value: float


@dataclass
class Identifier(Node):
    name: str


@dataclass
class BinaryExpr(Node):
    left: Node
    right: Node
    operator: str  # one of '+', '-', '*', '/'


@dataclass
class AssignmentExpr(Node):
    target: Node  # must be an Identifier when evaluated
    value: Node


@dataclass
class VarDeclaration(Node):
    name: str
    is_const: bool
    initializer: Node  # Null() when the declaration has no value


@dataclass
class Null(Node):
    pass
