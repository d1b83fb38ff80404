from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExternsSettings(BaseSettings):
    """Settings for externs generation."""

    model_config = SettingsConfigDict(env_prefix="EXTERNGEN_")

    strict: bool = Field(
        default=True,
        description="If True, a 'use strict' directive is emitted after the file banner.",
    )
    beautify: bool = Field(
        default=True,
        description="If True, the generated code is passed through the formatter.",
    )
    indent_size: int = Field(
        default=2, description="Indentation width used by the formatter."
    )
    validate_input: bool = Field(
        default=False,
        description=(
            "If True, the input tree is validated on ingestion and malformed "
            "nodes raise an error instead of being skipped."
        ),
    )
