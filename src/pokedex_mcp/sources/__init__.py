"""
Pokédex acquisition from PokeAPI.

Components:
- schema: API constants and payload schemas
- fetcher: per-identifier lookup (pokemon + species fetched concurrently)
- mapper: pure normalization into PokemonEntry
- strategy: batched acquisition (concurrent or sequential)
"""

from .base import (
    AcquisitionError,
    AcquisitionResult,
    LookupFailedError,
    PayloadError,
    PokedexError,
    PokedexNotLoadedError,
    UnknownPokemonError,
)
from .fetcher import fetch_payloads, lookup_pokemon
from .mapper import normalize
from .strategy import (
    CONCURRENT,
    SEQUENTIAL,
    AcquisitionStrategy,
    ProgressCallback,
    make_batches,
    strategy_for,
)

__all__ = [
    # Acquisition
    "AcquisitionStrategy",
    "AcquisitionResult",
    "ProgressCallback",
    "CONCURRENT",
    "SEQUENTIAL",
    "make_batches",
    "strategy_for",
    "fetch_payloads",
    "lookup_pokemon",
    "normalize",
    # Errors
    "PokedexError",
    "PayloadError",
    "LookupFailedError",
    "AcquisitionError",
    "PokedexNotLoadedError",
    "UnknownPokemonError",
]
