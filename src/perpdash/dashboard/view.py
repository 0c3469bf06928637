"""Dashboard view model: period selection, row merge and cell formatting.

Everything here is synchronous and side-effect free. It is re-run on every
render against the latest snapshots in the SnapshotCache.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from perpdash.config import VenueConfig
from perpdash.market_data.snapshot_cache import SOURCE_KEYS, VOLUMES, Snapshot
from perpdash.models import DashboardRow, PeriodKey, VenueVolume, VenueYield

NOT_AVAILABLE = "n/a"

ViewStatus = Literal["loading", "error", "ready"]

_BILLION = Decimal("1000000000")
_MILLION = Decimal("1000000")


class PeriodSelection:
    """Ordered set of active look-back periods, bounded to `max_size`.

    Selecting a period while full evicts the oldest selected one (FIFO).
    """

    def __init__(self, periods: Iterable[PeriodKey] = (), max_size: int = 3) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._selected: list[PeriodKey] = []
        for period in periods:
            self.select(period)

    @classmethod
    def from_values(cls, values: Iterable[str], max_size: int = 3) -> PeriodSelection:
        """Build a selection from raw strings, ignoring unknown period names."""
        keys = [k for k in (PeriodKey.parse(v) for v in values) if k is not None]
        return cls(keys, max_size=max_size)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def selected(self) -> tuple[PeriodKey, ...]:
        """Active periods in selection order (oldest first)."""
        return tuple(self._selected)

    def columns(self) -> list[PeriodKey]:
        """Active periods in canonical display order."""
        return [key for key in PeriodKey if key in self._selected]

    def select(self, period: PeriodKey) -> None:
        if period in self._selected:
            return
        self._selected.append(period)
        if len(self._selected) > self._max_size:
            self._selected.pop(0)

    def toggle(self, period: PeriodKey) -> None:
        """Deselect an active period, or select an inactive one."""
        if period in self._selected:
            self._selected.remove(period)
        else:
            self.select(period)

    def __contains__(self, period: object) -> bool:
        return period in self._selected

    def __len__(self) -> int:
        return len(self._selected)


def build_rows(
    volumes: list[VenueVolume] | None,
    yields: Iterable[VenueYield | None],
    venues: tuple[VenueConfig, ...],
) -> list[DashboardRow]:
    """Join volumes and yields by venue name, one row per tracked venue.

    Venues missing from either input keep None in the corresponding fields.
    """
    volume_by_venue = {v.venue: v.volume for v in volumes or []}
    yield_by_venue = {y.venue: y for y in yields if y is not None}

    rows = []
    for venue in venues:
        yield_data = yield_by_venue.get(venue.name)
        rows.append(
            DashboardRow(
                venue=venue.name,
                volume=volume_by_venue.get(venue.name),
                yield_data=yield_data,
                invest_url=venue.vault_url,
                supported_asset=venue.supported_asset,
                cells={
                    key: yield_data.period(key) if yield_data is not None else None
                    for key in PeriodKey
                },
            )
        )
    return rows


@dataclass
class DashboardView:
    """Everything the table template needs for one render."""

    status: ViewStatus
    selection: PeriodSelection
    rows: list[DashboardRow] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)
    updated_at: float | None = None


def build_view(
    snapshots: dict[str, Snapshot],
    venues: tuple[VenueConfig, ...],
    selection: PeriodSelection,
) -> DashboardView:
    """Derive the view state from the latest snapshots.

    Loading wins over error, and any single failed source puts the whole
    view into the error state.
    """
    current = [snapshots.get(key) for key in SOURCE_KEYS]

    if any(snap is None or (snap.updated_at is None) for snap in current):
        return DashboardView(status="loading", selection=selection)

    failed = [key for key, snap in zip(SOURCE_KEYS, current) if snap.error is not None]
    if failed:
        return DashboardView(status="error", selection=selection, failed_sources=failed)

    volumes = snapshots[VOLUMES].value
    yields = [snap.value for key, snap in zip(SOURCE_KEYS, current) if key != VOLUMES]
    return DashboardView(
        status="ready",
        selection=selection,
        rows=build_rows(volumes, yields, venues),
        updated_at=min(snap.updated_at for snap in current),
    )


def format_volume(value: Decimal | None) -> str:
    """Render a USD volume in billions, e.g. "$10.5b"."""
    if value is None:
        return NOT_AVAILABLE
    return f"${value / _BILLION:.1f}b"


def format_tvl(value: Decimal | None) -> str:
    """Render a USD TVL in millions, e.g. "$350.0m"."""
    if value is None:
        return NOT_AVAILABLE
    return f"${value / _MILLION:.1f}m"


def format_yield(value: Decimal | None) -> str:
    """Render a percentage with two decimals."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.2f}"
