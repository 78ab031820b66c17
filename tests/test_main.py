"""
Tests for the MCP tools in main.py.

Tools are called directly through their wrapped functions against a
session backed by a mocked PokeAPI.
"""

import httpx
import pytest
import pytest_asyncio

# Import main module once -- tools are accessed via _fn(m.<tool>)
from pokedex_mcp import main as m
from pokedex_mcp.config import PokedexConfig
from pokedex_mcp.render import LOAD_ERROR_MESSAGE, MarkdownRenderer
from pokedex_mcp.session import PokedexSession
from pokedex_mcp.sources import strategy as strategy_module

from conftest import make_pokeapi_transport


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fn(tool):
    """Return the plain function behind a registered tool."""
    return getattr(tool, "fn", tool)


def _install_transport(monkeypatch, transport: httpx.MockTransport) -> None:
    """Make acquisition open its HTTP client on the given transport."""
    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr(strategy_module.httpx, "AsyncClient", client_factory)


def _use_session(monkeypatch, renderer: MarkdownRenderer) -> PokedexSession:
    config = PokedexConfig(total=12, batch_size=5, batch_delay=0.0)
    session = PokedexSession(config, renderer)
    monkeypatch.setattr(m, "config", config)
    monkeypatch.setattr(m, "renderer", renderer)
    monkeypatch.setattr(m, "session", session)
    return session


@pytest.fixture
def server(monkeypatch):
    """Fresh session wired into main.py, served by a 12-entry mock PokeAPI."""
    _use_session(monkeypatch, MarkdownRenderer())
    _install_transport(monkeypatch, make_pokeapi_transport(12, fail_ids={4}))
    return m


@pytest_asyncio.fixture
async def loaded(server):
    await _fn(server.load_pokedex)()
    return server


# ---------------------------------------------------------------------------
# load_pokedex
# ---------------------------------------------------------------------------


class TestLoadPokedex:
    """Test the load tool's summary and failure branches."""

    @pytest.mark.asyncio
    async def test_load_returns_summary_types_and_grid(self, server):
        output = await _fn(server.load_pokedex)()

        assert output.startswith("📖 Loaded 11/12 Pokémon in 3 batches")
        assert "failed: 4" in output
        assert "**Types:** All Types, Normal" in output
        assert "**Pokédex (11 shown)**" in output
        assert "#004" not in output

    @pytest.mark.asyncio
    async def test_load_sequential(self, server):
        output = await _fn(server.load_pokedex)("sequential")

        assert "in 12 batches" in output
        assert server.session.strategy.name == "sequential"
        assert server.session.strategy.batch_size == 1

    @pytest.mark.asyncio
    async def test_load_catastrophic_failure(self, monkeypatch):
        """An aborted load returns only the static error message."""

        class BrokenRenderer(MarkdownRenderer):
            def show_progress(self, completed, total):
                raise RuntimeError("progress element missing")

        _use_session(monkeypatch, BrokenRenderer())
        _install_transport(monkeypatch, make_pokeapi_transport(12))

        output = await _fn(m.load_pokedex)()

        assert output == f"❌ {LOAD_ERROR_MESSAGE}"
        assert m.session.state is None
        assert "failed to load" in _fn(m.search_pokedex)("mon")


# ---------------------------------------------------------------------------
# search_pokedex / show_pokemon / close_detail
# ---------------------------------------------------------------------------


class TestQueryTools:
    """Test the tools that query a loaded Pokédex."""

    def test_search_before_load(self, server):
        assert _fn(server.search_pokedex)("mon") == "❌ Pokédex is not loaded yet. Call load_pokedex first."

    @pytest.mark.asyncio
    async def test_search_by_name(self, loaded):
        output = _fn(loaded.search_pokedex)("mon-1")

        assert output.startswith("**Pokédex (4 shown)**")
        assert "#001 Mon-1" in output
        assert "#012 Mon-12" in output

    @pytest.mark.asyncio
    async def test_search_type_is_normalized(self, loaded):
        """Type names are lower-cased and a blank type means all types."""
        assert "(11 shown)" in _fn(loaded.search_pokedex)("", "  NORMAL ")
        assert loaded.session.state.type_filter == "normal"

        assert "(11 shown)" in _fn(loaded.search_pokedex)("", "")
        assert loaded.session.state.type_filter == "all"

    @pytest.mark.asyncio
    async def test_search_without_matches(self, loaded):
        assert _fn(loaded.search_pokedex)("", "fire") == "No Pokémon match the current filters."

    @pytest.mark.asyncio
    async def test_show_pokemon_by_number_and_name(self, loaded):
        by_number = _fn(loaded.show_pokemon)("#007")
        assert by_number.startswith("**Mon-7** #007")

        by_name = _fn(loaded.show_pokemon)("Mon 9")
        assert by_name.startswith("**Mon-9** #009")
        assert loaded.session.state.selected_id == 9

    @pytest.mark.asyncio
    async def test_show_unknown_pokemon_dismisses_previous(self, loaded):
        _fn(loaded.show_pokemon)("7")

        output = _fn(loaded.show_pokemon)("missingno")

        assert output == "❌ Pokémon 'missingno' not found in the loaded Pokédex."
        assert loaded.session.state.selected is None
        assert loaded.renderer.detail is None

    @pytest.mark.asyncio
    async def test_show_failed_pokemon(self, loaded):
        """Identifiers whose lookup failed are absent from the collection."""
        assert "not found" in _fn(loaded.show_pokemon)("4")

    @pytest.mark.asyncio
    async def test_close_detail_returns_grid(self, loaded):
        _fn(loaded.search_pokedex)("mon-2")
        _fn(loaded.show_pokemon)("2")

        output = _fn(loaded.close_detail)()

        assert output.startswith("**Pokédex (1 shown)**")
        assert loaded.renderer.detail is None
        assert loaded.session.state.selected is None

    def test_close_detail_before_load(self, server):
        assert _fn(server.close_detail)().startswith("❌")


# ---------------------------------------------------------------------------
# list_types / pokedex_status
# ---------------------------------------------------------------------------


class TestStatusTools:
    """Test the informational tools before and after a load."""

    def test_list_types_before_load(self, server):
        assert _fn(server.list_types)() == "❌ Pokédex is not loaded yet. Call load_pokedex first."

    @pytest.mark.asyncio
    async def test_list_types_after_load(self, loaded):
        assert _fn(loaded.list_types)() == "**Types:** All Types, Normal"

    def test_status_before_load(self, server):
        assert _fn(server.pokedex_status)() == "**Strategy:** concurrent (batch size 5)"

    @pytest.mark.asyncio
    async def test_status_after_load(self, loaded):
        _fn(loaded.search_pokedex)("mon-1", "normal")
        _fn(loaded.show_pokemon)("10")

        status = _fn(loaded.pokedex_status)()

        assert "**Progress:** 12/12 (100%)" in status
        assert "**Last load:** Loaded 11/12 Pokémon" in status
        assert "**Query:** 'mon-1' | **Type:** normal" in status
        assert "**Showing:** 4/11" in status
        assert "**Selected:** #010 Mon-10" in status
