"""Tests for the dashboard view model: selection, merge, view state and formatting."""

import time
from decimal import Decimal

import pytest

from perpdash.config import VenueConfig
from perpdash.dashboard.view import (
    NOT_AVAILABLE,
    PeriodSelection,
    build_rows,
    build_view,
    format_tvl,
    format_volume,
    format_yield,
)
from perpdash.market_data.snapshot_cache import (
    HL_YIELDS,
    LIGHTER_YIELDS,
    VOLUMES,
    Snapshot,
)
from perpdash.models import PeriodKey, VenueVolume, VenueYield


def _yield(venue: str, value: str = "5") -> VenueYield:
    return VenueYield(
        venue=venue,
        current=Decimal(value),
        periods={key: Decimal(value) for key in PeriodKey},
        tvl=Decimal("1000000"),
    )


def _ready(value) -> Snapshot:
    return Snapshot(value=value, updated_at=time.time())


@pytest.fixture
def ready_snapshots() -> dict[str, Snapshot]:
    return {
        VOLUMES: _ready(
            [
                VenueVolume("Hyperliquid", Decimal("10500000000")),
                VenueVolume("Lighter", Decimal("6180000000")),
            ]
        ),
        HL_YIELDS: _ready(_yield("Hyperliquid", "7.29")),
        LIGHTER_YIELDS: _ready(_yield("Lighter", "10.2")),
    }


# ---------------------------------------------------------------------------
# PeriodSelection
# ---------------------------------------------------------------------------


class TestPeriodSelection:
    def test_fourth_selection_evicts_oldest(self) -> None:
        selection = PeriodSelection([PeriodKey.H24, PeriodKey.D7, PeriodKey.M1])
        selection.toggle(PeriodKey.Y1)

        assert selection.selected == (PeriodKey.D7, PeriodKey.M1, PeriodKey.Y1)
        assert len(selection) == 3

    def test_toggle_selected_removes_it(self) -> None:
        selection = PeriodSelection([PeriodKey.H24, PeriodKey.D7])
        selection.toggle(PeriodKey.H24)

        assert selection.selected == (PeriodKey.D7,)

    def test_reselect_after_removal_appends(self) -> None:
        selection = PeriodSelection([PeriodKey.H24, PeriodKey.D7, PeriodKey.M1])
        selection.toggle(PeriodKey.H24)
        selection.toggle(PeriodKey.H24)

        assert selection.selected == (PeriodKey.D7, PeriodKey.M1, PeriodKey.H24)

    def test_select_existing_is_noop(self) -> None:
        selection = PeriodSelection([PeriodKey.H24])
        selection.select(PeriodKey.H24)

        assert selection.selected == (PeriodKey.H24,)

    def test_initial_overflow_keeps_latest(self) -> None:
        selection = PeriodSelection(list(PeriodKey))
        assert selection.selected == (PeriodKey.M6, PeriodKey.Y1, PeriodKey.ALL_TIME)

    def test_from_values_ignores_unknown_and_duplicates(self) -> None:
        selection = PeriodSelection.from_values(["7d", "bogus", "7d", "24h"])
        assert selection.selected == (PeriodKey.D7, PeriodKey.H24)

    def test_columns_use_display_order(self) -> None:
        selection = PeriodSelection([PeriodKey.Y1, PeriodKey.H24])
        assert selection.columns() == [PeriodKey.H24, PeriodKey.Y1]

    def test_custom_max_size(self) -> None:
        selection = PeriodSelection([PeriodKey.H24, PeriodKey.D7], max_size=1)
        assert selection.selected == (PeriodKey.D7,)

    def test_invalid_max_size(self) -> None:
        with pytest.raises(ValueError):
            PeriodSelection(max_size=0)


# ---------------------------------------------------------------------------
# build_rows
# ---------------------------------------------------------------------------


class TestBuildRows:
    def test_joins_by_venue_name(self, venues: tuple[VenueConfig, ...]) -> None:
        volumes = [
            VenueVolume("Lighter", Decimal("2")),
            VenueVolume("Hyperliquid", Decimal("1")),
        ]
        rows = build_rows(volumes, [_yield("Lighter"), _yield("Hyperliquid")], venues)

        assert [r.venue for r in rows] == ["Hyperliquid", "Lighter"]
        assert rows[0].volume == Decimal("1")
        assert rows[1].volume == Decimal("2")
        assert rows[0].yield_data.venue == "Hyperliquid"
        assert rows[0].invest_url.startswith("https://app.hyperliquid.xyz/vaults/")
        assert rows[1].supported_asset == "USDC"

    def test_missing_data_is_none(self, venues: tuple[VenueConfig, ...]) -> None:
        rows = build_rows(None, [None, _yield("Lighter")], venues)

        assert rows[0].volume is None
        assert rows[0].yield_data is None
        assert all(v is None for v in rows[0].cells.values())
        assert rows[1].cells[PeriodKey.M3] == Decimal("5")

    def test_unmatched_venues_are_ignored(self, venues: tuple[VenueConfig, ...]) -> None:
        rows = build_rows([VenueVolume("Other", Decimal("9"))], [], venues)
        assert [r.volume for r in rows] == [None, None]


# ---------------------------------------------------------------------------
# build_view
# ---------------------------------------------------------------------------


class TestBuildView:
    def test_ready(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        view = build_view(ready_snapshots, venues, PeriodSelection())

        assert view.status == "ready"
        assert len(view.rows) == 2
        assert view.updated_at is not None

    def test_loading_when_any_source_missing(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        del ready_snapshots[LIGHTER_YIELDS]
        assert build_view(ready_snapshots, venues, PeriodSelection()).status == "loading"

    def test_loading_when_first_fetch_in_flight(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        ready_snapshots[VOLUMES] = Snapshot(in_flight=True)
        assert build_view(ready_snapshots, venues, PeriodSelection()).status == "loading"

    def test_background_refresh_stays_ready(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        snap = ready_snapshots[VOLUMES]
        ready_snapshots[VOLUMES] = Snapshot(
            value=snap.value, updated_at=snap.updated_at, in_flight=True
        )
        assert build_view(ready_snapshots, venues, PeriodSelection()).status == "ready"

    def test_single_failure_is_error(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        ready_snapshots[HL_YIELDS] = Snapshot(error="boom", updated_at=time.time())
        view = build_view(ready_snapshots, venues, PeriodSelection())

        assert view.status == "error"
        assert view.failed_sources == [HL_YIELDS]
        assert view.rows == []

    def test_loading_takes_precedence_over_error(
        self, ready_snapshots: dict[str, Snapshot], venues: tuple[VenueConfig, ...]
    ) -> None:
        ready_snapshots[HL_YIELDS] = Snapshot(error="boom", updated_at=time.time())
        del ready_snapshots[VOLUMES]
        assert build_view(ready_snapshots, venues, PeriodSelection()).status == "loading"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    def test_volume_in_billions(self) -> None:
        assert format_volume(Decimal("10500000000")) == "$10.5b"

    def test_tvl_in_millions(self) -> None:
        assert format_tvl(Decimal("350000000")) == "$350.0m"

    def test_yield_two_decimals(self) -> None:
        assert format_yield(Decimal("182.5")) == "182.50"

    def test_zero_yield_is_rendered(self) -> None:
        assert format_yield(Decimal("0")) == "0.00"

    @pytest.mark.parametrize("formatter", [format_volume, format_tvl, format_yield])
    def test_missing_values(self, formatter) -> None:
        assert formatter(None) == NOT_AVAILABLE
