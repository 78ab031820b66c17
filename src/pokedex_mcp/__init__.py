"""
Pokédex MCP Server - browse the first-generation Pokédex from PokeAPI, built with FastMCP 2.8.0+.
"""

from .models import PokemonEntry
from .session import PokedexSession

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("pokedex-mcp")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = ["PokemonEntry", "PokedexSession"]
