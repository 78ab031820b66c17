"""
Batched acquisition of the Pokédex.

The identifier range ``[1, total]`` is split into contiguous batches. All
lookups inside a batch run concurrently; batches run strictly one after
another with a fixed pause in between. Results are only accumulated once a
batch has fully settled, so the accumulator has a single writer.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Callable

import httpx

from ..models import PokemonEntry
from .base import AcquisitionError, AcquisitionResult
from .fetcher import lookup_pokemon
from .schema import DEFAULT_LANGUAGE, POKEAPI_BASE_URL

logger = logging.getLogger("pokedex-mcp.sources")

ProgressCallback = Callable[[int, int], None]

GEN1_TOTAL = 151
DEFAULT_TIMEOUT = 10.0


def make_batches(total: int, batch_size: int) -> list[list[int]]:
    """
    Partition ``[1, total]`` into contiguous batches.

    Args:
        total: Highest identifier (inclusive)
        batch_size: Maximum identifiers per batch; the last batch may be shorter

    Returns:
        List of batches in ascending order

    Raises:
        ValueError: If batch_size < 1 or total < 0
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    if total < 0:
        raise ValueError(f"total must not be negative, got {total}")

    return [
        list(range(start, min(start + batch_size, total + 1)))
        for start in range(1, total + 1, batch_size)
    ]


@dataclass(frozen=True)
class AcquisitionStrategy:
    """How the Pokédex is fetched.

    Attributes:
        name: Label used in logs and tool output.
        total: Highest national dex number to fetch.
        batch_size: Identifiers looked up concurrently per batch.
        batch_delay: Seconds to pause between batches.
        base_url: PokeAPI base URL.
        language: Flavor text language code.
        timeout: HTTP timeout when the strategy opens its own client.
    """
    name: str = "concurrent"
    total: int = GEN1_TOTAL
    batch_size: int = 10
    batch_delay: float = 0.1
    base_url: str = POKEAPI_BASE_URL
    language: str = DEFAULT_LANGUAGE
    timeout: float = DEFAULT_TIMEOUT

    def batches(self) -> list[list[int]]:
        return make_batches(self.total, self.batch_size)

    async def acquire(
        self,
        client: httpx.AsyncClient | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AcquisitionResult:
        """
        Fetch every identifier in ``[1, total]`` and return the sorted entries.

        Per-identifier failures are dropped and reported in ``failed_ids``.
        Anything else aborts the run.

        Args:
            client: HTTP client to use. If None, one is opened for this run.
            on_progress: Called with (completed, total) after each identifier
                of a settled batch is accounted for.

        Returns:
            AcquisitionResult with entries sorted ascending by id

        Raises:
            AcquisitionError: If the run aborts; no partial result is returned
        """
        try:
            if client is None:
                async with httpx.AsyncClient(timeout=self.timeout) as own_client:
                    return await self._run(own_client, on_progress)
            return await self._run(client, on_progress)
        except AcquisitionError:
            raise
        except Exception as e:
            logger.error(f"Acquisition '{self.name}' aborted: {e}")
            raise AcquisitionError(f"Acquisition aborted: {e}") from e

    async def _run(
        self,
        client: httpx.AsyncClient,
        on_progress: ProgressCallback | None,
    ) -> AcquisitionResult:
        started = time.monotonic()
        batches = self.batches()
        collected: list[PokemonEntry] = []
        failed: list[int] = []
        completed = 0

        logger.info(
            f"Acquiring {self.total} Pokémon ({self.name}: "
            f"{len(batches)} batches of up to {self.batch_size})"
        )

        for index, batch in enumerate(batches):
            results = await asyncio.gather(
                *(
                    lookup_pokemon(client, pokemon_id, self.base_url, self.language)
                    for pokemon_id in batch
                )
            )

            for pokemon_id, entry in zip(batch, results):
                if entry is None:
                    failed.append(pokemon_id)
                else:
                    collected.append(entry)
                completed += 1
                if on_progress is not None:
                    on_progress(completed, self.total)

            logger.debug(f"Batch {index + 1}/{len(batches)} settled ({completed}/{self.total})")

            if self.batch_delay > 0 and index < len(batches) - 1:
                await asyncio.sleep(self.batch_delay)

        collected.sort(key=lambda entry: entry.id)

        result = AcquisitionResult(
            pokemon=tuple(collected),
            attempted=completed,
            failed_ids=tuple(sorted(failed)),
            batches=len(batches),
            elapsed_seconds=time.monotonic() - started,
        )
        logger.info(result.summary())
        return result


CONCURRENT = AcquisitionStrategy(name="concurrent", batch_size=10, batch_delay=0.1)
SEQUENTIAL = AcquisitionStrategy(name="sequential", batch_size=1, batch_delay=0.0)

STRATEGIES: dict[str, AcquisitionStrategy] = {
    CONCURRENT.name: CONCURRENT,
    SEQUENTIAL.name: SEQUENTIAL,
}


def strategy_for(name: str, **overrides) -> AcquisitionStrategy:
    """
    Resolve a named strategy preset, optionally overriding its fields.

    Raises:
        ValueError: If the name is not a known preset
    """
    key = name.strip().lower()
    if key not in STRATEGIES:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown acquisition strategy '{name}'. Expected one of: {known}")

    preset = STRATEGIES[key]
    if not overrides:
        return preset
    return replace(preset, **overrides)
