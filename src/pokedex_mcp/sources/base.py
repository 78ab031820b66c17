"""
Exceptions and result models for Pokédex acquisition.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models import PokemonEntry


class PokedexError(Exception):
    """Base class for all Pokédex errors."""


class PayloadError(PokedexError):
    """Raised when a PokeAPI response does not match the expected schema."""


class LookupFailedError(PokedexError):
    """Raised when the pokemon/species pair for one identifier cannot be fetched.

    This failure is isolated: acquisition drops the identifier and continues.
    """

    def __init__(self, pokemon_id: int, reason: str) -> None:
        self.pokemon_id = pokemon_id
        self.reason = reason
        super().__init__(f"Failed to fetch Pokemon {pokemon_id}: {reason}")


class AcquisitionError(PokedexError):
    """Raised when an acquisition run aborts outside per-identifier isolation.

    No partial collection is made available when this is raised.
    """


class PokedexNotLoadedError(PokedexError):
    """Raised when the Pokédex is queried before a successful load."""


class UnknownPokemonError(PokedexError):
    """Raised when a requested Pokémon is not in the loaded collection."""


class AcquisitionResult(BaseModel):
    """Outcome of a completed acquisition run."""

    model_config = ConfigDict(frozen=True)

    pokemon: tuple[PokemonEntry, ...] = Field(
        default=(),
        description="Successfully normalized entries, sorted by id",
    )
    attempted: int = Field(default=0, description="Number of identifiers looked up")
    failed_ids: tuple[int, ...] = Field(
        default=(),
        description="Identifiers whose lookup failed, in ascending order",
    )
    batches: int = Field(default=0, description="Number of batches processed")
    elapsed_seconds: float = Field(default=0.0, description="Wall-clock duration of the run")

    @property
    def succeeded(self) -> int:
        """Number of identifiers that produced an entry."""
        return len(self.pokemon)

    def summary(self) -> str:
        """One-line human-readable summary of the run."""
        line = (
            f"Loaded {self.succeeded}/{self.attempted} Pokémon "
            f"in {self.batches} batches ({self.elapsed_seconds:.2f}s)"
        )
        if self.failed_ids:
            failed = ", ".join(str(i) for i in self.failed_ids)
            line += f"; failed: {failed}"
        return line
