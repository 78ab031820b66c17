"""
Mapper functions for translating PokeAPI payloads into PokemonEntry.

PokeAPI nests every name inside single-field reference objects
(``{"type": {"name": "grass"}}``). The helpers here flatten those into plain
lists and mappings. All functions are pure and perform no I/O.
"""

from __future__ import annotations

from typing import Any

from ..models import NO_DESCRIPTION, PokemonEntry
from .schema import (
    DEFAULT_LANGUAGE,
    FLAVOR_CONTROL_CHARS,
    MEASUREMENT_DIVISOR,
    FlavorTextEntry,
    PokemonPayload,
    SpeciesPayload,
    parse_pokemon_payload,
    parse_species_payload,
)


def scale_measurement(raw: int) -> float:
    """Convert decimetres/hectograms to metres/kilograms."""
    return raw / MEASUREMENT_DIVISOR


def extract_types(pokemon: PokemonPayload) -> tuple[str, ...]:
    return tuple(slot.type.name for slot in pokemon.types)


def extract_abilities(pokemon: PokemonPayload) -> tuple[str, ...]:
    """Ability names with the first hyphen shown as a space (``solar power``)."""
    return tuple(slot.ability.name.replace("-", " ", 1) for slot in pokemon.abilities)


def build_stats(pokemon: PokemonPayload) -> dict[str, int]:
    """Map stat name to base stat. A repeated stat name keeps the last value."""
    stats: dict[str, int] = {}
    for entry in pokemon.stats:
        stats[entry.stat.name] = entry.base_stat
    return stats


def select_description(
    entries: list[FlavorTextEntry],
    language: str = DEFAULT_LANGUAGE,
) -> str:
    """Pick the first flavor text in the given language.

    Args:
        entries: Flavor text entries from the species payload.
        language: Language code to match against ``entry.language.name``.

    Returns:
        The flavor text with embedded control characters replaced by spaces,
        or NO_DESCRIPTION if no entry matches.
    """
    for entry in entries:
        if entry.language.name == language:
            return FLAVOR_CONTROL_CHARS.sub(" ", entry.flavor_text)
    return NO_DESCRIPTION


def normalize(
    pokemon: PokemonPayload | dict[str, Any],
    species: SpeciesPayload | dict[str, Any],
    language: str = DEFAULT_LANGUAGE,
) -> PokemonEntry:
    """Merge a pokemon payload and its species payload into a PokemonEntry.

    Args:
        pokemon: The ``/pokemon/{id}`` payload, validated or raw.
        species: The ``/pokemon-species/{id}`` payload, validated or raw.
        language: Language code for the description.

    Returns:
        A new immutable PokemonEntry.

    Raises:
        PayloadError: If a raw payload is malformed.
    """
    pokemon = parse_pokemon_payload(pokemon)
    species = parse_species_payload(species)

    stats = build_stats(pokemon)

    return PokemonEntry(
        id=pokemon.id,
        name=pokemon.name,
        types=extract_types(pokemon),
        height=scale_measurement(pokemon.height),
        weight=scale_measurement(pokemon.weight),
        abilities=extract_abilities(pokemon),
        stats=stats,
        base_stat_total=sum(stats.values()),
        sprite=pokemon.sprites.front_default,
        description=select_description(species.flavor_text_entries, language),
    )
