import jsbeautifier


def format_code(code: str, indent_size: int = 2) -> str:
    """
    Pretty-print the assembled externs text. Whitespace rules belong to
    jsbeautifier.
    """
    opts = jsbeautifier.default_options()
    opts.indent_size = indent_size
    return jsbeautifier.beautify(code, opts)
