"""
Data models for the Pokédex MCP Server.
"""

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Base stats as PokeAPI names them, in display order
STAT_NAMES: tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special-attack",
    "special-defense",
    "speed",
)

# Upper bound of a single base stat by source convention (not enforced)
MAX_BASE_STAT = 255

NO_DESCRIPTION = "No description available"


class PokemonEntry(BaseModel):
    """A normalized Pokédex entry built from the pokemon and species payloads.

    Entries are immutable once normalized, including the ``stats`` mapping.
    ``base_stat_total`` is computed once by the mapper and never recomputed.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0, description="National Pokédex number")
    name: str = Field(description="PokeAPI slug, e.g. 'mr-mime'")
    types: tuple[str, ...] = Field(description="Elemental types in display order")
    height: float = Field(description="Height in metres")
    weight: float = Field(description="Weight in kilograms")
    abilities: tuple[str, ...] = Field(default=(), description="Ability names")
    stats: Mapping[str, int] = Field(
        default_factory=dict,
        validate_default=True,
        description="Stat name to base stat (read-only)",
    )
    base_stat_total: int | None = Field(default=None, description="Sum of all base stats")
    sprite: str | None = Field(default=None, description="Front sprite URL")
    description: str = Field(default=NO_DESCRIPTION, description="Pokédex flavor text")

    @field_validator("stats", mode="after")
    @classmethod
    def _freeze_stats(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    @field_serializer("stats")
    def _serialize_stats(self, value: Mapping[str, int]) -> dict[str, int]:
        return dict(value)

    @property
    def display_name(self) -> str:
        """Name with its first letter capitalised."""
        return self.name[:1].upper() + self.name[1:]

    @property
    def dex_number(self) -> str:
        """Zero-padded dex number, e.g. ``#025``."""
        return f"#{self.id:03d}"

    def stat_percent(self, stat: str) -> float:
        """Return a base stat as a percentage of MAX_BASE_STAT."""
        return self.stats.get(stat, 0) / MAX_BASE_STAT * 100
