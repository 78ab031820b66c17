"""
Runtime configuration for the Pokédex MCP Server.

Values come from environment variables (optionally loaded from a ``.env``
file by the server entry point) and are validated by a pydantic model.
"""

from __future__ import annotations

import os
from typing import Literal, Mapping

from pydantic import BaseModel, Field, field_validator

from .sources.schema import DEFAULT_LANGUAGE, POKEAPI_BASE_URL

ENV_PREFIX = "POKEDEX_"


class PokedexConfig(BaseModel):
    """Configuration for acquisition, querying and logging."""

    api_base_url: str = Field(
        default=POKEAPI_BASE_URL,
        description="Base URL of the PokeAPI v2 service",
    )
    total: int = Field(
        default=151,
        ge=0,
        description="Highest national dex number to acquire, starting at 1",
    )
    batch_size: int = Field(
        default=10,
        ge=1,
        description="Identifiers looked up concurrently per batch",
    )
    batch_delay: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause in seconds between batches",
    )
    debounce_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Input inactivity window before a text query is applied",
    )
    language: str = Field(
        default=DEFAULT_LANGUAGE,
        min_length=1,
        description="Language code used to pick the flavor text",
    )
    timeout: float = Field(
        default=10.0,
        gt=0.0,
        description="HTTP timeout in seconds for each request",
    )
    strategy: Literal["concurrent", "sequential"] = Field(
        default="concurrent",
        description="Acquisition strategy used by load_pokedex when none is given",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level name",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PokedexConfig:
        """Build a config from ``POKEDEX_*`` environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Validated PokedexConfig. Unset variables keep their defaults.

        Raises:
            pydantic.ValidationError: If a variable has an invalid value.
        """
        if environ is None:
            environ = os.environ

        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()

        return cls.model_validate(values)
