"""Shared in-memory cache of the latest adapter result per source key.

The poll loop writes into it and the dashboard reads from it. Each key holds
one immutable Snapshot that is swapped whole, so readers see either a complete
snapshot or none at all.

A refresh that has been superseded by a newer refresh of the same key is
dropped when it resolves (last write wins).
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

from perpdash.logging import get_logger

logger = get_logger(__name__)

VOLUMES = "volumes"
HL_YIELDS = "hlYields"
LIGHTER_YIELDS = "lighterYields"

SOURCE_KEYS = (VOLUMES, HL_YIELDS, LIGHTER_YIELDS)

Loader = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class Snapshot:
    """Latest known state of one source key."""

    value: Any = None
    error: str | None = None
    updated_at: float | None = None
    in_flight: bool = False


class SnapshotCache:
    """Key -> latest Snapshot store with generation-guarded refreshes."""

    def __init__(self) -> None:
        self._snapshots: dict[str, Snapshot] = {}
        self._generations: dict[str, int] = {}
        self._lock = asyncio.Lock()

    def get(self, key: str) -> Snapshot | None:
        """Return the current snapshot for a key, or None if never refreshed."""
        return self._snapshots.get(key)

    def snapshots(self) -> dict[str, Snapshot]:
        """Return a shallow copy of all snapshots."""
        return dict(self._snapshots)

    async def refresh(self, key: str, loader: Loader) -> Snapshot | None:
        """Run a loader and store its result under `key`.

        Loader exceptions are recorded as an error snapshot, not raised.

        Returns:
            The stored snapshot, or None if this refresh was superseded.
        """
        async with self._lock:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            previous = self._snapshots.get(key, Snapshot())
            self._snapshots[key] = replace(previous, in_flight=True)

        try:
            value = await loader()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("snapshot_refresh_failed", key=key, exc_info=True)
            result = Snapshot(error=str(e) or type(e).__name__, updated_at=time.time())
        else:
            result = Snapshot(value=value, updated_at=time.time())

        async with self._lock:
            if self._generations.get(key) != generation:
                logger.debug("snapshot_refresh_superseded", key=key, generation=generation)
                return None
            self._snapshots[key] = result
        return result

    async def refresh_all(self, loaders: dict[str, Loader]) -> None:
        """Refresh every key concurrently; keys do not depend on each other."""
        await asyncio.gather(
            *(self.refresh(key, loader) for key, loader in loaders.items())
        )
