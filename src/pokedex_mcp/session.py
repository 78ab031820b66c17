"""
Pokédex session: acquisition, query state and rendering wired together.

A session owns the explicit PokedexState and pushes every change to a
RenderSurface. Loading is a one-shot operation; if it aborts, the session
enters a terminal error state and exposes no partial collection.
"""

from __future__ import annotations

import logging

import httpx

from .config import PokedexConfig
from .models import PokemonEntry
from .query import (
    Command,
    Dismiss,
    PokedexState,
    QueryDebouncer,
    SelectRecord,
    SetQuery,
    SetTagFilter,
    dispatch,
)
from .render import LOAD_ERROR_MESSAGE, RenderSurface
from .sources import (
    AcquisitionError,
    AcquisitionResult,
    AcquisitionStrategy,
    PokedexNotLoadedError,
    strategy_for,
)

logger = logging.getLogger("pokedex-mcp")


def build_strategy(config: PokedexConfig, name: str | None = None) -> AcquisitionStrategy:
    """Resolve a strategy preset and apply the configured endpoint and limits.

    The configured batch size and delay only apply to the concurrent preset;
    the sequential preset always fetches one identifier at a time.

    Raises:
        ValueError: If the strategy name is unknown
    """
    name = name or config.strategy
    overrides = {
        "total": config.total,
        "base_url": config.api_base_url,
        "language": config.language,
        "timeout": config.timeout,
    }
    if name.strip().lower() == "concurrent":
        overrides["batch_size"] = config.batch_size
        overrides["batch_delay"] = config.batch_delay
    return strategy_for(name, **overrides)


class PokedexSession:
    """Holds the loaded Pokédex and applies user commands to it."""

    def __init__(
        self,
        config: PokedexConfig,
        renderer: RenderSurface,
        strategy: AcquisitionStrategy | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.strategy = strategy or build_strategy(config)
        self.state: PokedexState | None = None
        self.result: AcquisitionResult | None = None
        self.error: str | None = None
        self._debouncer = QueryDebouncer(self._apply_query, delay=config.debounce_seconds)

    @property
    def is_loaded(self) -> bool:
        return self.state is not None

    async def load(self, client: httpx.AsyncClient | None = None) -> AcquisitionResult:
        """Acquire the Pokédex and render the initial grid.

        Args:
            client: Optional shared HTTP client.

        Returns:
            The acquisition result.

        Raises:
            AcquisitionError: If acquisition aborts. The session is left
                without a collection and the static error is rendered.
        """
        self.state = None
        self.result = None
        self.error = None
        self._debouncer.cancel()

        try:
            result = await self.strategy.acquire(
                client=client,
                on_progress=self.renderer.show_progress,
            )
        except AcquisitionError as e:
            self.error = str(e)
            self.renderer.show_error(LOAD_ERROR_MESSAGE)
            raise

        self.result = result
        self.state = PokedexState(pokemon=result.pokemon)
        self.renderer.show_type_options(self.state.types)
        self.renderer.show_grid(self.state.filtered)
        return result

    def _require_state(self) -> PokedexState:
        if self.state is None:
            if self.error:
                raise PokedexNotLoadedError(
                    f"Pokédex failed to load ({self.error}). Reload to try again."
                )
            raise PokedexNotLoadedError("Pokédex is not loaded yet. Call load_pokedex first.")
        return self.state

    def handle(self, command: Command) -> PokedexState:
        """Apply a command and render its effect.

        Raises:
            PokedexNotLoadedError: If called before a successful load
            UnknownPokemonError: If selecting an id not in the collection
        """
        state = dispatch(self._require_state(), command)
        self.state = state

        if isinstance(command, (SetQuery, SetTagFilter)):
            self.renderer.show_grid(state.filtered)
        elif isinstance(command, SelectRecord):
            self.renderer.show_detail(state.selected)
        elif isinstance(command, Dismiss):
            self.renderer.close_detail()

        return state

    def on_input(self, text: str) -> None:
        """Feed raw keystroke-level text; the query is applied once input settles."""
        self._require_state()
        self._debouncer.submit(text)

    def flush_input(self) -> None:
        self._debouncer.flush()

    def _apply_query(self, text: str) -> None:
        self.handle(SetQuery(text))

    def search(self, query: str, type_filter: str) -> list[PokemonEntry]:
        """Apply a settled query and type filter together."""
        self._debouncer.cancel()
        state = dispatch(self._require_state(), SetTagFilter(type_filter))
        state = dispatch(state, SetQuery(query))
        self.state = state

        filtered = state.filtered
        self.renderer.show_grid(filtered)
        return filtered
