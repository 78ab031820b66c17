"""
In-memory query layer over the acquired Pokédex.

Everything here is a pure transform over an immutable collection: filters
never re-sort and never mutate entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..models import PokemonEntry

ALL_TYPES = "all"


def matches_query(entry: PokemonEntry, query: str, match_total: bool = True) -> bool:
    """Check the free-text query against name, dex number and (optionally) BST.

    Args:
        entry: Entry to test.
        query: Raw text; compared case-insensitively as a substring, untrimmed.
        match_total: Also match against the base stat total.
    """
    needle = query.lower()
    if not needle:
        return True
    if needle in entry.name.lower():
        return True
    if needle in str(entry.id):
        return True
    if match_total and entry.base_stat_total is not None:
        return needle in str(entry.base_stat_total)
    return False


def matches_type(entry: PokemonEntry, type_filter: str) -> bool:
    return type_filter == ALL_TYPES or type_filter in entry.types


def apply_filter(
    pokemon: Sequence[PokemonEntry],
    query: str = "",
    type_filter: str = ALL_TYPES,
    match_total: bool = True,
) -> list[PokemonEntry]:
    """Return the entries matching both the text query and the type filter.

    Args:
        pokemon: Collection in display order.
        query: Free-text query; empty matches everything.
        type_filter: ``"all"`` or an exact type name.
        match_total: Whether the query also matches base stat totals.

    Returns:
        Matching entries in their original order.
    """
    return [
        entry
        for entry in pokemon
        if matches_type(entry, type_filter) and matches_query(entry, query, match_total)
    ]


def collect_types(pokemon: Iterable[PokemonEntry]) -> list[str]:
    """Distinct types across the collection, sorted alphabetically."""
    return sorted({t for entry in pokemon for t in entry.types})


def find_pokemon(pokemon: Sequence[PokemonEntry], key: str | int) -> PokemonEntry | None:
    """Find an entry by dex number (``25``, ``"025"``, ``"#25"``) or name.

    Name matching is case-insensitive and treats spaces as hyphens, so
    ``"Mr Mime"`` finds ``mr-mime``.
    """
    if isinstance(key, int):
        return next((entry for entry in pokemon if entry.id == key), None)

    text = key.strip().lstrip("#")
    if text.isdigit():
        return find_pokemon(pokemon, int(text))

    slug = text.lower().replace(" ", "-")
    return next((entry for entry in pokemon if entry.name.lower() == slug), None)


@dataclass(frozen=True)
class PokedexState:
    """Explicit application state for the query layer.

    Attributes:
        pokemon: Full acquired collection, sorted by id.
        query: Current free-text query.
        type_filter: Current type filter (``"all"`` or a type name).
        selected_id: Entry shown in the detail view, if any.
        match_total: Whether text queries also match base stat totals.
    """
    pokemon: tuple[PokemonEntry, ...] = ()
    query: str = ""
    type_filter: str = ALL_TYPES
    selected_id: int | None = None
    match_total: bool = True

    @property
    def filtered(self) -> list[PokemonEntry]:
        """Entries visible under the current query and type filter."""
        return apply_filter(self.pokemon, self.query, self.type_filter, self.match_total)

    @property
    def selected(self) -> PokemonEntry | None:
        if self.selected_id is None:
            return None
        return find_pokemon(self.pokemon, self.selected_id)

    @property
    def types(self) -> list[str]:
        return collect_types(self.pokemon)
