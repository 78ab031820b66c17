"""
Rendering surface for the Pokédex.

The query layer hands the renderer progress updates, the filtered grid, a
single entry for the detail view, and the list of type options. The default
implementation produces markdown, which the MCP tools return verbatim.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import STAT_NAMES, PokemonEntry

STAT_BAR_WIDTH = 20

LOAD_ERROR_MESSAGE = "Error loading Pokédex. Please reload."


class RenderSurface(Protocol):
    """Protocol for anything that can display the Pokédex."""

    def show_progress(self, completed: int, total: int) -> None:
        ...

    def show_grid(self, pokemon: Sequence[PokemonEntry]) -> None:
        ...

    def show_detail(self, entry: PokemonEntry) -> None:
        ...

    def close_detail(self) -> None:
        ...

    def show_type_options(self, types: Sequence[str]) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_progress(completed: int, total: int) -> str:
    percentage = (completed / total * 100) if total else 100.0
    return f"{completed}/{total} ({percentage:.0f}%)"


def format_card(entry: PokemonEntry) -> str:
    """One grid line, e.g. ``#025 Pikachu · BST 320 · electric``."""
    parts = [f"{entry.dex_number} {entry.display_name}"]
    if entry.base_stat_total is not None:
        parts.append(f"BST {entry.base_stat_total}")
    parts.append("/".join(entry.types))
    return " · ".join(parts)


def format_grid(pokemon: Sequence[PokemonEntry]) -> str:
    if not pokemon:
        return "No Pokémon match the current filters."
    lines = [f"**Pokédex ({len(pokemon)} shown)**", ""]
    lines.extend(f"- {format_card(entry)}" for entry in pokemon)
    return "\n".join(lines)


def _stat_order(item: tuple[str, int]) -> int:
    name = item[0]
    return STAT_NAMES.index(name) if name in STAT_NAMES else len(STAT_NAMES)


def format_stat_bar(percent: float) -> str:
    filled = round(min(max(percent, 0.0), 100.0) / 100 * STAT_BAR_WIDTH)
    return "█" * filled + "░" * (STAT_BAR_WIDTH - filled)


def format_detail(entry: PokemonEntry) -> str:
    """Full detail view for a single entry."""
    lines = [f"**{entry.display_name}** {entry.dex_number}"]
    if entry.sprite:
        lines.append(f"![{entry.name}]({entry.sprite})")
    lines.append("")
    lines.append(f"**Types:** {', '.join(entry.types)}")
    lines.append(f"**Height:** {entry.height} m")
    lines.append(f"**Weight:** {entry.weight} kg")
    if entry.abilities:
        lines.append(f"**Abilities:** {', '.join(_capitalize(a) for a in entry.abilities)}")

    lines.append("")
    header = "**Base Stats**"
    if entry.base_stat_total is not None:
        header += f" (Total: {entry.base_stat_total})"
    lines.append(header)
    for stat, value in sorted(entry.stats.items(), key=_stat_order):
        label = stat.replace("-", " ", 1).upper()
        lines.append(f"`{label:<16}` {format_stat_bar(entry.stat_percent(stat))} {value}")

    lines.append("")
    lines.append(entry.description)
    return "\n".join(lines)


def format_type_options(types: Sequence[str]) -> str:
    options = ["All Types"] + [_capitalize(t) for t in types]
    return "**Types:** " + ", ".join(options)


class MarkdownRenderer:
    """RenderSurface that keeps the latest markdown for each view."""

    def __init__(self) -> None:
        self.progress: str = ""
        self.grid: str = ""
        self.detail: str | None = None
        self.type_options: str = ""
        self.error: str | None = None

    def show_progress(self, completed: int, total: int) -> None:
        self.progress = format_progress(completed, total)

    def show_grid(self, pokemon: Sequence[PokemonEntry]) -> None:
        self.grid = format_grid(pokemon)

    def show_detail(self, entry: PokemonEntry) -> None:
        self.detail = format_detail(entry)

    def close_detail(self) -> None:
        self.detail = None

    def show_type_options(self, types: Sequence[str]) -> None:
        self.type_options = format_type_options(types)

    def show_error(self, message: str) -> None:
        self.error = message
