"""JSON serialization/deserialization for the letlang AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding, so a parsed program can be written
out by `python -m letlang --emit-ast` and evaluated later with `--ast`.
"""

from __future__ import annotations

from typing import Any

from .ast import AssignmentExpr, BinaryExpr, Identifier, Null, Number, Program, VarDeclaration

OPERATORS = {"+", "-", "*", "/"}


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Number):
        return {"type": "Number", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, BinaryExpr):
        return {
            "type": "BinaryExpr",
            "operator": node.operator,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, AssignmentExpr):
        return {"type": "AssignmentExpr", "target": ast_to_obj(node.target), "value": ast_to_obj(node.value)}
    if isinstance(node, VarDeclaration):
        return {
            "type": "VarDeclaration",
            "name": node.name,
            "is_const": node.is_const,
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Null):
        return {"type": "Null"}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "Number":
        return Number(value=float(obj["value"]))
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "BinaryExpr":
        if obj.get("operator") not in OPERATORS:
            raise ValueError(f"Unknown binary operator: {obj.get('operator')!r}")
        return BinaryExpr(
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
            operator=obj["operator"],
        )
    if t == "AssignmentExpr":
        return AssignmentExpr(target=ast_from_obj(obj["target"]), value=ast_from_obj(obj["value"]))
    if t == "VarDeclaration":
        return VarDeclaration(
            name=obj["name"],
            is_const=bool(obj.get("is_const", False)),
            initializer=ast_from_obj(obj.get("initializer", {"type": "Null"})),
        )
    if t == "Null":
        return Null()

    raise ValueError(f"Unknown AST node type: {t}")
