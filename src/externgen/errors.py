from typing import Optional


class ExternsError(Exception):
    """Base class for errors raised by externgen."""


class MalformedNodeError(ExternsError, ValueError):
    """
    Raised at the AST ingestion boundary when an input node does not have
    the expected shape. ``path`` is the dotted key path to the node.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
