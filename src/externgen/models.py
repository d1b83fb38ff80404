from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class NodeKind(str, Enum):
    MODULE = "module"
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    METHOD = "method"
    PROPERTY = "property"
    VARIABLE = "variable"
    OBJECT = "object"
    ENUM = "enum"

    @classmethod
    def parse(cls, value: Any) -> Optional["NodeKind"]:
        """Case-insensitive lookup, ``None`` for tags outside the known set."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


# Kinds whose non-reserved keys hold nested declarations
CONTAINER_KINDS = frozenset(
    {NodeKind.MODULE, NodeKind.CLASS, NodeKind.INTERFACE, NodeKind.OBJECT}
)
# Kinds that own a members bucket
MEMBER_KINDS = frozenset({NodeKind.CLASS, NodeKind.INTERFACE})


# A type descriptor is a primitive token, a union (list of tokens) or a
# structural type (field name -> ObjectField).
TypeDescriptor = Union[str, List[Any], Dict[str, "ObjectField"]]


class Optionality(BaseModel):
    """Anything the type renderer can use as its context."""

    model_config = ConfigDict(populate_by_name=True)

    is_optional: bool = Field(default=False, alias="isOptional")


class ObjectField(Optionality):
    type: Any = None


class Parameter(Optionality):
    name: str
    type: Any = None
    is_spread: bool = Field(default=False, alias="isSpread")


class EnumMember(BaseModel):
    name: str
    value: Any = None


class DeclarationNode(Optionality):
    """
    A single node of the declaration tree. Structural fields are named;
    nested declarations found under any other key live in ``children``.
    """

    kind: Optional[str] = None
    qualified_name: Optional[str] = Field(default=None, alias="qualifiedName")
    parameters: List[Parameter] = Field(default_factory=list)
    type: Any = None
    is_static: bool = Field(default=False, alias="isStatic")
    is_spread: bool = Field(default=False, alias="isSpread")
    extends: Optional[str] = None
    implements: Optional[str] = None

    # Class / interface inner declarations
    members: Dict[str, "DeclarationNode"] = Field(default_factory=dict)
    # Enum entries
    enum_members: List[EnumMember] = Field(default_factory=list)
    # Nested declarations under non-reserved keys, in input order
    children: Dict[str, "DeclarationNode"] = Field(default_factory=dict)

    @property
    def node_kind(self) -> Optional[NodeKind]:
        return NodeKind.parse(self.kind)

    @property
    def is_typed(self) -> bool:
        return bool(self.kind)
