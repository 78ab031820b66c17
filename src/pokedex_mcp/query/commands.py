"""
User intents consumed by the query layer.

Controls (text input, type select, card click, dismissal) produce one of the
commands below; ``dispatch`` folds a command into a new PokedexState.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from ..sources.base import UnknownPokemonError
from .state import ALL_TYPES, PokedexState, find_pokemon


@dataclass(frozen=True)
class SetQuery:
    """Replace the free-text query."""
    text: str


@dataclass(frozen=True)
class SetTagFilter:
    """Replace the type filter; ``"all"`` clears it."""
    tag: str = ALL_TYPES


@dataclass(frozen=True)
class SelectRecord:
    """Open the detail view for one entry."""
    pokemon_id: int


@dataclass(frozen=True)
class Dismiss:
    """Close the detail view."""


Command = Union[SetQuery, SetTagFilter, SelectRecord, Dismiss]


def dispatch(state: PokedexState, command: Command) -> PokedexState:
    """Apply a command and return the resulting state.

    Args:
        state: Current state; never modified.
        command: Intent to apply.

    Returns:
        New PokedexState.

    Raises:
        UnknownPokemonError: If SelectRecord names an id not in the collection.
        TypeError: If the command type is not recognised.
    """
    if isinstance(command, SetQuery):
        return replace(state, query=command.text)

    if isinstance(command, SetTagFilter):
        return replace(state, type_filter=command.tag or ALL_TYPES)

    if isinstance(command, SelectRecord):
        if find_pokemon(state.pokemon, command.pokemon_id) is None:
            raise UnknownPokemonError(
                f"Pokémon #{command.pokemon_id} is not in the loaded Pokédex."
            )
        return replace(state, selected_id=command.pokemon_id)

    if isinstance(command, Dismiss):
        return replace(state, selected_id=None)

    raise TypeError(f"Unsupported command: {command!r}")
