"""
Pytest configuration and fixtures for pokedex-mcp tests.
"""

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Add src directory to Python path to allow importing pokedex_mcp
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from pokedex_mcp.models import PokemonEntry  # noqa: E402
from pokedex_mcp.sources.mapper import normalize  # noqa: E402


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


def build_pokemon_payload(
    pokemon_id: int,
    name: str | None = None,
    types: tuple[str, ...] = ("normal",),
    stats: dict[str, int] | None = None,
    abilities: tuple[str, ...] = ("run-away",),
    height: int = 10,
    weight: int = 100,
) -> dict[str, Any]:
    """Build a /pokemon/{id} payload in PokeAPI's nested shape."""
    if stats is None:
        stats = {
            "hp": 50,
            "attack": 50,
            "defense": 50,
            "special-attack": 50,
            "special-defense": 50,
            "speed": 50,
        }
    return {
        "id": pokemon_id,
        "name": name or f"mon-{pokemon_id}",
        "height": height,
        "weight": weight,
        "base_experience": 64,
        "types": [
            {"slot": i + 1, "type": {"name": t, "url": f"https://pokeapi.co/api/v2/type/{t}/"}}
            for i, t in enumerate(types)
        ],
        "abilities": [
            {"slot": i + 1, "is_hidden": False, "ability": {"name": a, "url": ""}}
            for i, a in enumerate(abilities)
        ],
        "stats": [
            {"base_stat": value, "effort": 0, "stat": {"name": stat, "url": ""}}
            for stat, value in stats.items()
        ],
        "sprites": {
            "front_default": f"https://img.example/{pokemon_id}.png",
            "front_shiny": None,
        },
    }


def build_species_payload(
    text: str | None = "A wild Pokémon.",
    language: str = "en",
) -> dict[str, Any]:
    """Build a /pokemon-species/{id} payload with one or two flavor texts."""
    entries = [
        {
            "flavor_text": "Un Pokémon sauvage.",
            "language": {"name": "fr", "url": ""},
            "version": {"name": "red", "url": ""},
        }
    ]
    if text is not None:
        entries.append(
            {
                "flavor_text": text,
                "language": {"name": language, "url": ""},
                "version": {"name": "red", "url": ""},
            }
        )
    return {"id": 1, "name": "species", "flavor_text_entries": entries}


@pytest.fixture
def pikachu_payload() -> dict[str, Any]:
    return build_pokemon_payload(
        25,
        name="pikachu",
        types=("electric",),
        stats={
            "hp": 35,
            "attack": 55,
            "defense": 40,
            "special-attack": 50,
            "special-defense": 50,
            "speed": 90,
        },
        abilities=("static", "lightning-rod"),
        height=4,
        weight=60,
    )


@pytest.fixture
def pikachu_species() -> dict[str, Any]:
    return build_species_payload(
        "When several of\nthese POKéMON\fgather, their\nelectricity could\nbuild and cause\nlightning storms."
    )


@pytest.fixture
def sample_pokedex() -> tuple[PokemonEntry, ...]:
    """A small sorted collection covering several types and totals."""
    specs = [
        (1, "bulbasaur", ("grass", "poison"), 45),
        (4, "charmander", ("fire",), 39),
        (7, "squirtle", ("water",), 44),
        (25, "pikachu", ("electric",), 35),
        (26, "raichu", ("electric",), 60),
        (81, "magnemite", ("electric", "steel"), 25),
        (122, "mr-mime", ("psychic", "fairy"), 40),
        (150, "mewtwo", ("psychic",), 106),
    ]
    entries = []
    for pokemon_id, name, types, hp in specs:
        payload = build_pokemon_payload(
            pokemon_id,
            name=name,
            types=types,
            stats={"hp": hp, "attack": 50, "defense": 50, "speed": 50},
        )
        entries.append(normalize(payload, build_species_payload()))
    return tuple(entries)


def make_pokeapi_transport(
    total: int,
    fail_ids: set[int] | None = None,
    error_ids: set[int] | None = None,
    species_fail_ids: set[int] | None = None,
    requests: list[str] | None = None,
) -> httpx.MockTransport:
    """Mock PokeAPI serving generated payloads for ids 1..total.

    Args:
        total: Highest id that exists.
        fail_ids: Ids whose /pokemon resource answers 500.
        error_ids: Ids whose /pokemon request raises a transport error.
        species_fail_ids: Ids whose /pokemon-species resource answers 404.
        requests: If given, every requested path is appended here.
    """
    fail_ids = fail_ids or set()
    error_ids = error_ids or set()
    species_fail_ids = species_fail_ids or set()

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if requests is not None:
            requests.append(path)

        resource, _, raw_id = path.rstrip("/").rpartition("/")
        pokemon_id = int(raw_id)
        if pokemon_id > total:
            return httpx.Response(404, json={"detail": "Not found."})

        if resource.endswith("/pokemon-species"):
            if pokemon_id in species_fail_ids:
                return httpx.Response(404, json={"detail": "Not found."})
            return httpx.Response(200, json=build_species_payload(f"Entry {pokemon_id}."))

        if pokemon_id in error_ids:
            raise httpx.ConnectError("connection refused", request=request)
        if pokemon_id in fail_ids:
            return httpx.Response(500, text="Internal Server Error")
        return httpx.Response(200, json=build_pokemon_payload(pokemon_id))

    return httpx.MockTransport(handler)


@pytest.fixture
def transport_factory() -> Callable[..., httpx.MockTransport]:
    return make_pokeapi_transport
