"""
Query layer for the loaded Pokédex.

Components:
- PokedexState: explicit application state (collection, query, type filter, selection)
- apply_filter / collect_types / find_pokemon: pure queries over the collection
- SetQuery / SetTagFilter / SelectRecord / Dismiss + dispatch: user intents
- QueryDebouncer: coalesces rapid text input
"""

from .commands import Command, Dismiss, SelectRecord, SetQuery, SetTagFilter, dispatch
from .debounce import DEBOUNCE_SECONDS, QueryDebouncer
from .state import ALL_TYPES, PokedexState, apply_filter, collect_types, find_pokemon

__all__ = [
    # State
    "PokedexState",
    "ALL_TYPES",
    "apply_filter",
    "collect_types",
    "find_pokemon",
    # Commands
    "Command",
    "SetQuery",
    "SetTagFilter",
    "SelectRecord",
    "Dismiss",
    "dispatch",
    # Debouncing
    "QueryDebouncer",
    "DEBOUNCE_SECONDS",
]
