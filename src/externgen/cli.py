import json
from pathlib import Path
from typing import Optional

import click
from pydantic_settings import SettingsConfigDict

from externgen import settings
from externgen.errors import ExternsError
from externgen.logger import logger, setup_logging
from externgen.writer import ExternsWriter


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    **kwargs,
) -> settings.ExternsSettings:
    """
    Build ``ExternsSettings`` from the environment and an optional dotenv
    file. Keyword arguments take precedence over every other source.
    """
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "EXTERNGEN_",
        env_file=env_file,
    )

    class Settings(settings.ExternsSettings):
        model_config = config_dict

    return Settings(**kwargs)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "source",
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the externs file here (default: stdout).",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Emit the 'use strict' directive (default: on).",
)
@click.option(
    "--beautify/--no-beautify",
    default=None,
    help="Pretty-print the generated code (default: on).",
)
@click.option(
    "--indent-size",
    type=int,
    default=None,
    help="Formatter indentation width (default: 2).",
)
@click.option(
    "--validate/--no-validate",
    default=None,
    help="Reject malformed declaration trees instead of skipping bad nodes.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging.",
)
def main(
    source: Path,
    output: Optional[Path],
    strict: Optional[bool],
    beautify: Optional[bool],
    indent_size: Optional[int],
    validate: Optional[bool],
    debug: bool,
) -> None:
    """
    Generate an externs file from a JSON declaration tree.
    """
    setup_logging(debug)

    overrides = {
        "strict": strict,
        "beautify": beautify,
        "indent_size": indent_size,
        "validate_input": validate,
    }
    config = load_settings(**{k: v for k, v in overrides.items() if v is not None})

    try:
        with open(source, "r", encoding="utf-8") as f:
            ast = json.load(f)
        code = ExternsWriter(ast, settings=config).to_code()
    except json.JSONDecodeError as exc:
        click.echo(f"Error: {source} is not valid JSON: {exc}", err=True)
        raise SystemExit(1)
    except ExternsError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    if output is None:
        click.echo(code, nl=not code.endswith("\n"))
        return

    output.write_text(code, encoding="utf-8")
    logger.info("Externs written", path=str(output))


if __name__ == "__main__":
    main()
