"""
Pokédex MCP Server
Browse the first-generation Pokédex from PokeAPI through FastMCP tools.
"""

import logging
from typing import Annotated, Literal

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

from .config import PokedexConfig
from .query import ALL_TYPES, Dismiss, SelectRecord, find_pokemon
from .render import MarkdownRenderer, format_grid, format_type_options
from .session import PokedexSession, build_strategy
from .sources import AcquisitionError, PokedexError

logger = logging.getLogger("pokedex-mcp")

if not load_dotenv():
    logger.debug("No .env file found, using environment variables only")

config = PokedexConfig.from_env()

logging.basicConfig(
    level=config.log_level,
    )

logger.debug(f"🌐 PokeAPI: {config.api_base_url} (total={config.total}, strategy={config.strategy})")

renderer = MarkdownRenderer()
session = PokedexSession(config, renderer)

mcp = FastMCP(
    name="pokedex-mcp"
)

logger.debug("✅ Session initialized, registering tools")


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
async def load_pokedex(
    strategy: Annotated[Literal["concurrent", "sequential"] | None, Field(
        description="Fetch strategy: 'concurrent' (batches of parallel lookups) or 'sequential' (one at a time). Defaults to the configured strategy."
    )] = None,
) -> str:
    """Fetch the Pokédex from PokeAPI and show the full grid.

    Replaces any previously loaded Pokédex. Individual Pokémon that fail to
    load are skipped and listed in the summary.
    """
    session.strategy = build_strategy(config, strategy)
    try:
        result = await session.load()
    except AcquisitionError as e:
        logger.error(f"❌ Pokédex load failed: {e}")
        return f"❌ {renderer.error}"

    return f"📖 {result.summary()}\n\n{renderer.type_options}\n\n{renderer.grid}"


@mcp.tool
def search_pokedex(
    query: Annotated[str, Field(description="Text matched against name, dex number and base stat total")] = "",
    pokemon_type: Annotated[str, Field(description="Exact type name (e.g. 'electric'), or 'all'")] = ALL_TYPES,
) -> str:
    """Search the loaded Pokédex by text and type."""
    try:
        matches = session.search(query, pokemon_type.strip().lower() or ALL_TYPES)
    except PokedexError as e:
        return f"❌ {e}"
    return format_grid(matches)


@mcp.tool
def show_pokemon(
    pokemon: Annotated[str, Field(description="Dex number (25, #025) or name (pikachu)")],
) -> str:
    """Show the detail view for one Pokémon."""
    try:
        state = session.handle(Dismiss())
        entry = find_pokemon(state.pokemon, pokemon)
        if entry is None:
            return f"❌ Pokémon '{pokemon}' not found in the loaded Pokédex."
        session.handle(SelectRecord(entry.id))
    except PokedexError as e:
        return f"❌ {e}"
    return renderer.detail or ""


@mcp.tool
def close_detail() -> str:
    """Close the detail view and return to the current grid."""
    try:
        session.handle(Dismiss())
    except PokedexError as e:
        return f"❌ {e}"
    return renderer.grid


@mcp.tool
def list_types() -> str:
    """List the types present in the loaded Pokédex."""
    if session.state is None:
        return "❌ Pokédex is not loaded yet. Call load_pokedex first."
    return format_type_options(session.state.types)


@mcp.tool
def pokedex_status() -> str:
    """Report load progress, the active filters and the last load result."""
    lines = [f"**Strategy:** {session.strategy.name} (batch size {session.strategy.batch_size})"]
    if renderer.progress:
        lines.append(f"**Progress:** {renderer.progress}")
    if session.error:
        lines.append(f"**Error:** {renderer.error}")
    if session.result is not None:
        lines.append(f"**Last load:** {session.result.summary()}")
    if session.state is not None:
        state = session.state
        lines.append(f"**Query:** '{state.query}' | **Type:** {state.type_filter}")
        lines.append(f"**Showing:** {len(state.filtered)}/{len(state.pokemon)}")
        if state.selected is not None:
            lines.append(f"**Selected:** {state.selected.dex_number} {state.selected.display_name}")
    return "\n".join(lines)


def main() -> None:
    """Main entry point for the Pokédex MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
