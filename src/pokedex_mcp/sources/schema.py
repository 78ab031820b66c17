"""
PokeAPI constants and payload schemas.

Only the fields the mapper reads are declared; everything else PokeAPI
returns is ignored. Validation failures surface as PayloadError.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .base import PayloadError

# ---------------------------------------------------------------------------
# API endpoint
# ---------------------------------------------------------------------------

POKEAPI_BASE_URL = "https://pokeapi.co/api/v2"

POKEMON_ENDPOINT = "pokemon"
SPECIES_ENDPOINT = "pokemon-species"

# ---------------------------------------------------------------------------
# Flavor text
# ---------------------------------------------------------------------------

DEFAULT_LANGUAGE = "en"

# Form feeds and line breaks embedded in game text
FLAVOR_CONTROL_CHARS = re.compile(r"[\f\n\r\t\v]")

# Height arrives in decimetres, weight in hectograms
MEASUREMENT_DIVISOR = 10


# ---------------------------------------------------------------------------
# Nested resource references
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class NamedResource(_Payload):
    """A ``{"name": ..., "url": ...}`` reference."""

    name: str
    url: str | None = None


class TypeSlot(_Payload):
    slot: int | None = None
    type: NamedResource


class AbilitySlot(_Payload):
    slot: int | None = None
    is_hidden: bool = False
    ability: NamedResource


class StatValue(_Payload):
    base_stat: int
    stat: NamedResource


class Sprites(_Payload):
    front_default: str | None = None


class FlavorTextEntry(_Payload):
    flavor_text: str
    language: NamedResource


# ---------------------------------------------------------------------------
# Top-level payloads
# ---------------------------------------------------------------------------


class PokemonPayload(_Payload):
    """The ``/pokemon/{id}`` resource."""

    id: int = Field(gt=0)
    name: str
    height: int
    weight: int
    types: list[TypeSlot] = Field(min_length=1)
    abilities: list[AbilitySlot] = Field(default_factory=list)
    stats: list[StatValue] = Field(default_factory=list)
    sprites: Sprites = Field(default_factory=Sprites)


class SpeciesPayload(_Payload):
    """The ``/pokemon-species/{id}`` resource."""

    flavor_text_entries: list[FlavorTextEntry] = Field(default_factory=list)


def parse_pokemon_payload(data: Any) -> PokemonPayload:
    """Validate a raw pokemon resource.

    Raises:
        PayloadError: If the data does not match the expected shape.
    """
    if isinstance(data, PokemonPayload):
        return data
    try:
        return PokemonPayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Malformed pokemon payload: {e}") from e


def parse_species_payload(data: Any) -> SpeciesPayload:
    """Validate a raw pokemon-species resource.

    Raises:
        PayloadError: If the data does not match the expected shape.
    """
    if isinstance(data, SpeciesPayload):
        return data
    try:
        return SpeciesPayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Malformed species payload: {e}") from e
