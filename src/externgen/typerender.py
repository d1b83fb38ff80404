import re
from typing import Any, Mapping, Optional

from externgen.models import ObjectField, Optionality

NON_NULLABLE = frozenset({"number", "boolean", "*", "T"})
WILDCARD = "*"

_TEMPLATE_MARKER_RE = re.compile(r"(^|[^0-9A-Za-z_])T($|[^0-9A-Za-z_])")


def uses_template_marker(type_text: str) -> bool:
    """
    Return True when *type_text* contains a standalone ``T`` token.

    This is a lexical heuristic over the raw annotation text, not an
    inspection of the type descriptor. It over-matches (``T`` inside a string
    literal type) and under-matches (template names other than ``T``).
    """
    return bool(_TEMPLATE_MARKER_RE.search(type_text))


def type_text(type_: Any) -> str:
    """Raw text of a descriptor, as seen by ``uses_template_marker``."""
    if type_ is None:
        return ""
    if isinstance(type_, list):
        return ",".join(to_token(t) for t in type_)
    if isinstance(type_, Mapping):
        return ""
    return to_token(type_)


def to_token(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TypeRenderer:
    """
    Turns a type descriptor into annotation text.

    Nullable by default (``?``), or non-null (``!``) when
    *strict_null_checks* is set. The prefix is dropped for optional contexts
    and for the non-nullable primitives.
    """

    def __init__(self, strict_null_checks: bool = False) -> None:
        self.strict_null_checks = strict_null_checks

    @property
    def default_prefix(self) -> str:
        return "!" if self.strict_null_checks else "?"

    def prefix_for(self, type_: Any, optional: bool) -> str:
        if optional:
            return ""
        if isinstance(type_, str) and type_ in NON_NULLABLE:
            return ""
        return self.default_prefix

    def render(self, type_: Any, context: Optional[Optionality] = None) -> str:
        optional = bool(context and context.is_optional)
        prefix = self.prefix_for(type_, optional)
        suffix = "=" if optional else ""

        if isinstance(type_, list):
            return f"{prefix}({'|'.join(to_token(t) for t in type_)}){suffix}"

        if isinstance(type_, Mapping):
            fields = ", ".join(
                f"{name}: {self._render_field(field)}" for name, field in type_.items()
            )
            return f"{prefix}{{{fields}}}"

        return f"{prefix}{to_token(type_)}{suffix}"

    def _render_field(self, field: Any) -> str:
        if isinstance(field, ObjectField):
            return self.render(field.type, field)
        # Raw descriptors that bypassed ingestion
        if isinstance(field, Mapping):
            return self.render(
                field.get("type"),
                ObjectField(is_optional=bool(field.get("isOptional"))),
            )
        return self.render(field)
