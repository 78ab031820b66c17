"""
Fetch the pokemon and species resources for a single identifier.

Both requests for an identifier are issued concurrently and always allowed to
settle. Any transport error, non-success status or malformed body turns the
whole lookup into a LookupFailedError, which callers treat as isolated.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..models import PokemonEntry
from .base import LookupFailedError, PayloadError
from .mapper import normalize
from .schema import (
    DEFAULT_LANGUAGE,
    POKEAPI_BASE_URL,
    POKEMON_ENDPOINT,
    SPECIES_ENDPOINT,
    PokemonPayload,
    SpeciesPayload,
    parse_pokemon_payload,
    parse_species_payload,
)

logger = logging.getLogger("pokedex-mcp.sources")


def pokemon_url(pokemon_id: int, base_url: str = POKEAPI_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{POKEMON_ENDPOINT}/{pokemon_id}"


def species_url(pokemon_id: int, base_url: str = POKEAPI_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{SPECIES_ENDPOINT}/{pokemon_id}"


async def _get_json(client: httpx.AsyncClient, url: str) -> Any:
    """GET a URL and decode its JSON body.

    Raises:
        httpx.HTTPError: On transport errors or non-success status.
        PayloadError: If the body is not valid JSON.
    """
    response = await client.get(url)
    response.raise_for_status()
    try:
        return response.json()
    except ValueError as e:
        raise PayloadError(f"Invalid JSON from {url}: {e}") from e


async def fetch_payloads(
    client: httpx.AsyncClient,
    pokemon_id: int,
    base_url: str = POKEAPI_BASE_URL,
) -> tuple[PokemonPayload, SpeciesPayload]:
    """
    Fetch and validate the pokemon and species payloads for one identifier.

    Args:
        client: Shared async HTTP client
        pokemon_id: National dex number
        base_url: PokeAPI base URL

    Returns:
        Tuple of (pokemon payload, species payload)

    Raises:
        LookupFailedError: If either request fails or either body is malformed
    """
    results = await asyncio.gather(
        _get_json(client, pokemon_url(pokemon_id, base_url)),
        _get_json(client, species_url(pokemon_id, base_url)),
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, BaseException) and not isinstance(
            result, (httpx.HTTPError, PayloadError)
        ):
            raise result

    for result in results:
        if isinstance(result, httpx.HTTPStatusError):
            raise LookupFailedError(
                pokemon_id, f"HTTP {result.response.status_code}"
            ) from result
        if isinstance(result, (httpx.HTTPError, PayloadError)):
            raise LookupFailedError(pokemon_id, str(result) or type(result).__name__) from result

    pokemon_data, species_data = results
    try:
        return parse_pokemon_payload(pokemon_data), parse_species_payload(species_data)
    except PayloadError as e:
        raise LookupFailedError(pokemon_id, str(e)) from e


async def lookup_pokemon(
    client: httpx.AsyncClient,
    pokemon_id: int,
    base_url: str = POKEAPI_BASE_URL,
    language: str = DEFAULT_LANGUAGE,
) -> PokemonEntry | None:
    """
    Fetch and normalize one Pokémon, isolating lookup failures.

    Returns:
        The normalized entry, or None if the lookup failed. Failures are
        logged and never retried.
    """
    try:
        pokemon, species = await fetch_payloads(client, pokemon_id, base_url)
    except LookupFailedError as e:
        logger.warning(str(e))
        return None

    return normalize(pokemon, species, language)
