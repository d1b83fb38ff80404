from typing import Any, List, Mapping, Optional, Tuple, Union

from externgen.emitter import DeclarationEmitter
from externgen.formatter import format_code
from externgen.ingest import parse_node
from externgen.logger import logger
from externgen.models import CONTAINER_KINDS, MEMBER_KINDS, DeclarationNode
from externgen.settings import ExternsSettings
from externgen.typerender import TypeRenderer

FILE_BANNER = "/**\n * @fileoverview This is an externs file.\n * @externs\n */"
STRICT_DIRECTIVE = "'use strict';"


class ExternsWriter:
    """
    Generates an externs document for a declaration tree.

    The tree is walked once, at construction. Each emitted declaration is
    appended to an ordered buffer that is serialized by ``render`` (raw text)
    or ``to_code`` (formatted text).
    """

    def __init__(
        self,
        ast: Union[DeclarationNode, Mapping[str, Any]],
        settings: Optional[ExternsSettings] = None,
        strict_null_checks: bool = False,
    ) -> None:
        self.settings = settings or ExternsSettings()
        if isinstance(ast, DeclarationNode):
            self.ast = ast
        else:
            self.ast = parse_node(ast, validate=self.settings.validate_input)

        self.emitter = DeclarationEmitter(TypeRenderer(strict_null_checks))
        self._header: List[str] = [FILE_BANNER]
        if self.settings.strict:
            self._header.append(STRICT_DIRECTIVE)

        self._blocks: List[str] = []
        self._code: Optional[str] = None

        self._traverse(self.ast)
        logger.debug("Externs generated", declarations=len(self._blocks))

    @property
    def blocks(self) -> Tuple[str, ...]:
        return tuple(self._blocks)

    def _traverse(self, node: DeclarationNode, name: Optional[str] = None) -> None:
        kind = node.node_kind

        # The root is reached without a name and is never emitted
        if node.is_typed and name:
            block = self.emitter.emit(node)
            if block is None:
                logger.debug("Skipped unknown node kind", kind=node.kind, name=name)
            else:
                self._blocks.append(block)

        # Untyped and unknown nodes are walked like containers
        if kind is None or kind in CONTAINER_KINDS:
            for key, child in node.children.items():
                self._traverse(child, key)

        if kind in MEMBER_KINDS and node.members:
            for key, member in node.members.items():
                self._traverse(member, key)

    def render(self) -> str:
        """Return the unformatted document."""
        parts = ["\n".join(self._header)]
        parts.extend(self._blocks)
        return "\n\n".join(parts) + "\n"

    def to_code(self) -> str:
        """Return the document, formatted unless ``beautify`` is off."""
        if self._code is None:
            code = self.render()
            if self.settings.beautify:
                code = format_code(code, indent_size=self.settings.indent_size)
            self._code = code
        return self._code


def generate_externs(
    ast: Union[DeclarationNode, Mapping[str, Any]],
    settings: Optional[ExternsSettings] = None,
) -> str:
    return ExternsWriter(ast, settings=settings).to_code()
