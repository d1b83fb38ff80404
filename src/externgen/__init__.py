from externgen.errors import ExternsError, MalformedNodeError
from externgen.ingest import parse_node
from externgen.models import DeclarationNode, NodeKind
from externgen.settings import ExternsSettings
from externgen.writer import ExternsWriter, generate_externs

__all__ = [
    "DeclarationNode",
    "ExternsError",
    "ExternsSettings",
    "ExternsWriter",
    "MalformedNodeError",
    "NodeKind",
    "generate_externs",
    "parse_node",
]
