"""
Conversion of the raw declaration tree (nested mappings, as produced by the
parser and usually loaded from JSON) into ``DeclarationNode`` models.

Ingestion is permissive by default: values that cannot be traversed are
dropped and missing fields fall back to defaults. Pass ``validate=True`` to
reject malformed input with ``MalformedNodeError`` instead.
"""

from typing import Any, Dict, List, Mapping, Optional

from externgen.errors import MalformedNodeError
from externgen.logger import logger
from externgen.models import (
    MEMBER_KINDS,
    DeclarationNode,
    EnumMember,
    NodeKind,
    ObjectField,
    Parameter,
)

MEMBERS_KEY = "#"
ENUM_MEMBERS_KEY = "members"

# Keys holding structural fields rather than nested declarations
RESERVED_KEYS = frozenset(
    {
        "kind",
        "qualifiedName",
        "parameters",
        "isStatic",
        "type",
        "isSpread",
        "isOptional",
        "extends",
        "implements",
        MEMBERS_KEY,
    }
)


def parse_node(raw: Any, *, validate: bool = False) -> DeclarationNode:
    """
    Build a ``DeclarationNode`` tree from the root mapping *raw*.

    The root must always be a mapping. With *validate* enabled every node is
    checked for a known kind, a qualified name and well-formed parameters.
    """
    if not isinstance(raw, Mapping):
        raise MalformedNodeError(
            f"expected a mapping for the root node, got {type(raw).__name__}"
        )
    return _parse(raw, "", validate)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _is_members_bucket(kind: Optional[NodeKind], value: Any) -> bool:
    # A mapping with its own kind is a declaration named "members"
    return (
        kind in MEMBER_KINDS and isinstance(value, Mapping) and "kind" not in value
    )


def _parse(raw: Mapping[str, Any], path: str, validate: bool) -> DeclarationNode:
    kind_tag = raw.get("kind")
    kind = NodeKind.parse(kind_tag)

    if validate:
        _validate(raw, kind, path)

    children: Dict[str, DeclarationNode] = {}
    for key, value in raw.items():
        if key in RESERVED_KEYS:
            continue
        if key == ENUM_MEMBERS_KEY and (
            isinstance(value, list) or _is_members_bucket(kind, value)
        ):
            continue
        if not isinstance(value, Mapping):
            logger.debug(
                "Dropped non-traversable value",
                path=_join(path, key),
                value_type=type(value).__name__,
            )
            continue
        children[key] = _parse(value, _join(path, key), validate)

    members: Dict[str, DeclarationNode] = {}
    for bucket_key in (MEMBERS_KEY, ENUM_MEMBERS_KEY):
        bucket = raw.get(bucket_key)
        if kind not in MEMBER_KINDS or not isinstance(bucket, Mapping):
            continue
        if bucket_key == ENUM_MEMBERS_KEY and not _is_members_bucket(kind, bucket):
            continue
        for name, member in bucket.items():
            if not isinstance(member, Mapping):
                logger.debug(
                    "Dropped non-traversable member",
                    path=_join(_join(path, bucket_key), name),
                    value_type=type(member).__name__,
                )
                continue
            members[name] = _parse(
                member, _join(_join(path, bucket_key), name), validate
            )

    qualified_name = raw.get("qualifiedName")
    return DeclarationNode(
        kind=str(kind_tag) if kind_tag else None,
        qualified_name=str(qualified_name) if qualified_name is not None else None,
        parameters=_parse_parameters(raw.get("parameters")),
        type=_parse_type(raw.get("type")),
        is_static=bool(raw.get("isStatic")),
        is_optional=bool(raw.get("isOptional")),
        is_spread=bool(raw.get("isSpread")),
        extends=str(raw["extends"]) if raw.get("extends") else None,
        implements=str(raw["implements"]) if raw.get("implements") else None,
        members=members,
        enum_members=_parse_enum_members(raw.get(ENUM_MEMBERS_KEY)),
        children=children,
    )


def _parse_parameters(raw: Any) -> List[Parameter]:
    if not isinstance(raw, list):
        return []

    params: List[Parameter] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        params.append(
            Parameter(
                name=str(entry.get("name", "")),
                type=_parse_type(entry.get("type")),
                is_optional=bool(entry.get("isOptional")),
                is_spread=bool(entry.get("isSpread")),
            )
        )
    return params


def _parse_enum_members(raw: Any) -> List[EnumMember]:
    if not isinstance(raw, list):
        return []
    return [
        EnumMember(name=str(entry.get("name", "")), value=entry.get("value"))
        for entry in raw
        if isinstance(entry, Mapping)
    ]


def _parse_type(raw: Any) -> Any:
    """Structural descriptors become ``ObjectField`` maps, recursively."""
    if not isinstance(raw, Mapping):
        return raw

    fields: Dict[str, ObjectField] = {}
    for name, entry in raw.items():
        if isinstance(entry, Mapping):
            fields[name] = ObjectField(
                type=_parse_type(entry.get("type")),
                is_optional=bool(entry.get("isOptional")),
            )
        else:
            fields[name] = ObjectField(type=entry)
    return fields


def _validate(raw: Mapping[str, Any], kind: Optional[NodeKind], path: str) -> None:
    where = path or "<root>"
    kind_tag = raw.get("kind")

    if kind_tag and kind is None:
        raise MalformedNodeError(f"unknown node kind {kind_tag!r}", where)

    # The root is never emitted, so it needs no name
    if kind is not None and path and not isinstance(raw.get("qualifiedName"), str):
        raise MalformedNodeError("missing qualifiedName", where)

    params = raw.get("parameters")
    if params is not None:
        if not isinstance(params, list):
            raise MalformedNodeError("parameters must be a list", where)
        for idx, entry in enumerate(params):
            if not isinstance(entry, Mapping) or not entry.get("name"):
                raise MalformedNodeError(
                    f"parameter #{idx} must be a mapping with a name", where
                )

    if kind is NodeKind.ENUM and not isinstance(raw.get(ENUM_MEMBERS_KEY), list):
        raise MalformedNodeError("enum members must be a list", where)
