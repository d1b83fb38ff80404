from typing import Any, List, Optional

from externgen.models import DeclarationNode, NodeKind
from externgen.typerender import (
    WILDCARD,
    TypeRenderer,
    type_text,
    to_token,
    uses_template_marker,
)

CONSTRUCTOR = "@constructor"
TEMPLATE = "@template T"


def _has_type(value: Any) -> bool:
    # Empty unions and structural types still count as declared
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


class DeclarationEmitter:
    """
    Per-kind rendering rules. Every ``write_*`` method returns one text block
    for the output buffer.
    """

    def __init__(self, renderer: Optional[TypeRenderer] = None) -> None:
        self.renderer = renderer or TypeRenderer()

    def emit(self, node: DeclarationNode) -> Optional[str]:
        """Dispatch on the node kind. Unknown kinds produce ``None``."""
        kind = node.node_kind
        if kind is NodeKind.MODULE:
            return self.write_module(node)
        if kind is NodeKind.CLASS:
            return self.write_class(node)
        if kind is NodeKind.INTERFACE:
            return self.write_interface(node)
        if kind in (NodeKind.FUNCTION, NodeKind.METHOD):
            return self.write_function(node)
        if kind in (NodeKind.PROPERTY, NodeKind.VARIABLE):
            return self.write_property(node)
        if kind is NodeKind.OBJECT:
            return self.write_object(node)
        if kind is NodeKind.ENUM:
            return self.write_enum(node)
        return None

    def write_module(self, node: DeclarationNode) -> str:
        return f"var {to_token(node.qualified_name)} = {{}};"

    def write_class(self, node: DeclarationNode) -> str:
        comments = [CONSTRUCTOR]
        if node.extends:
            comments.append(f"@extends {{{node.extends}}}")
        if node.implements:
            comments.append(f"@implements {{{node.implements}}}")

        self.add_parameter_comments(node, comments)
        return self.write_function_declaration(node, comments)

    def write_interface(self, node: DeclarationNode) -> str:
        comments = ["@interface"]
        self.add_parameter_comments(node, comments)
        return self.write_function_declaration(node, comments)

    def write_function(self, node: DeclarationNode) -> str:
        comments: List[str] = []
        self.add_parameter_comments(node, comments)

        if _has_type(node.type):
            comments.append(f"@return {{{self.renderer.render(node.type, node)}}}")

        return self.write_function_declaration(node, comments)

    def write_property(self, node: DeclarationNode) -> str:
        return self.write_expression(node, self._type_comments(node), "")

    def write_object(self, node: DeclarationNode) -> str:
        return self.write_expression(node, self._type_comments(node), " = {}")

    def write_enum(self, node: DeclarationNode) -> str:
        body = ",\n".join(
            f"{member.name}: {to_token(member.value)}" for member in node.enum_members
        )
        return self.write_expression(node, ["@enum {number}"], f" = {{\n{body}\n}}")

    def _type_comments(self, node: DeclarationNode) -> List[str]:
        if not _has_type(node.type):
            return []
        return [f"@type {{{self.renderer.render(node.type, node)}}}"]

    def add_parameter_comments(self, node: DeclarationNode, comments: List[str]) -> None:
        """
        Append ``@param`` lines to *comments*, then ``@template T`` when a
        parameter type mentions ``T`` and the node is a constructor or static.
        """
        is_constructor = CONSTRUCTOR in comments

        template = False
        for param in node.parameters:
            param_type = param.type if _has_type(param.type) else WILDCARD
            template = template or uses_template_marker(type_text(param_type))
            comments.append(
                f"@param {{{self.renderer.render(param_type, param)}}} {param.name}"
            )

        if template and (is_constructor or node.is_static):
            comments.append(TEMPLATE)

    def write_function_declaration(
        self, node: DeclarationNode, comments: List[str]
    ) -> str:
        return self.write_expression(
            node, comments, f" = function({parameters_string(node)}) {{}}"
        )

    def write_expression(
        self, node: DeclarationNode, comments: List[str], expr: str
    ) -> str:
        lines = ["/**"]
        lines.extend(f" * {comment}" for comment in comments)
        lines.append("*/")
        lines.append(f"{to_token(node.qualified_name)}{expr};")
        return "\n".join(lines)


def parameters_string(node: DeclarationNode) -> str:
    return ", ".join(param.name for param in node.parameters)
