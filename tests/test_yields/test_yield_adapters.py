"""Tests for HyperliquidYieldAdapter and LighterYieldAdapter.

All tests use a mocked exchange client to avoid real API calls.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from perpdash.config import HyperliquidSettings, LighterSettings
from perpdash.exceptions import UpstreamError, UpstreamPayloadError
from perpdash.models import PeriodKey
from perpdash.yields.annualize import prorate
from perpdash.yields.hyperliquid import HyperliquidYieldAdapter
from perpdash.yields.lighter import LighterYieldAdapter


@pytest.fixture
def hl_settings() -> HyperliquidSettings:
    return HyperliquidSettings(
        vault_address="0xvault",
        fallback_apr=Decimal("7.29"),
        fallback_tvl=Decimal("350000000"),
    )


@pytest.fixture
def mock_client(vault_details: dict) -> AsyncMock:
    client = AsyncMock()
    client.fetch_vault_details = AsyncMock(return_value=vault_details)
    return client


class TestHyperliquidYieldAdapter:
    @pytest.mark.asyncio
    async def test_live_yields(
        self, mock_client: AsyncMock, hl_settings: HyperliquidSettings
    ) -> None:
        adapter = HyperliquidYieldAdapter(mock_client, hl_settings)
        result = await adapter.fetch()

        assert result.venue == "Hyperliquid"
        assert result.is_fallback is False
        assert result.periods[PeriodKey.H24] == Decimal("182.5")
        assert result.tvl == Decimal("20000")

    @pytest.mark.asyncio
    async def test_queries_configured_vault_with_zero_address(
        self, mock_client: AsyncMock, hl_settings: HyperliquidSettings
    ) -> None:
        await HyperliquidYieldAdapter(mock_client, hl_settings).fetch()
        mock_client.fetch_vault_details.assert_awaited_once_with(
            "0xvault", "0x0000000000000000000000000000000000000000"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            UpstreamError("connection reset"),
            UpstreamPayloadError("null body"),
            ValueError("unexpected"),
        ],
    )
    async def test_fetch_failure_returns_fallback(
        self, hl_settings: HyperliquidSettings, error: Exception
    ) -> None:
        client = AsyncMock()
        client.fetch_vault_details = AsyncMock(side_effect=error)

        result = await HyperliquidYieldAdapter(client, hl_settings).fetch()

        assert result.is_fallback is True
        assert result.current == Decimal("7.29")
        assert result.tvl == Decimal("350000000")
        for key in PeriodKey:
            assert result.periods[key] == prorate(Decimal("7.29"), key.days)

    @pytest.mark.asyncio
    async def test_fallback_matches_static_record(
        self, hl_settings: HyperliquidSettings
    ) -> None:
        client = AsyncMock()
        client.fetch_vault_details = AsyncMock(side_effect=UpstreamError("down"))
        adapter = HyperliquidYieldAdapter(client, hl_settings)

        assert await adapter.fetch() == adapter.fallback()

    @pytest.mark.asyncio
    async def test_malformed_payload_still_well_formed(
        self, hl_settings: HyperliquidSettings
    ) -> None:
        client = AsyncMock()
        client.fetch_vault_details = AsyncMock(
            return_value={"apr": 0.02, "portfolio": [["day", "garbage"]]}
        )

        result = await HyperliquidYieldAdapter(client, hl_settings).fetch()

        assert result.is_fallback is False
        assert set(result.periods) == set(PeriodKey)
        assert result.current == Decimal("2")


class TestLighterYieldAdapter:
    @pytest.mark.asyncio
    async def test_mock_record(self) -> None:
        result = await LighterYieldAdapter(LighterSettings()).fetch()

        assert result.venue == "Lighter"
        assert result.current == Decimal("10.2")
        assert result.tvl == Decimal("5000000")
        assert result.periods[PeriodKey.H24] == Decimal("12.5")
        assert result.periods[PeriodKey.ALL_TIME] == Decimal("450.1")

    @pytest.mark.asyncio
    async def test_missing_mock_periods_are_prorated(self) -> None:
        settings = LighterSettings(
            mock_current=Decimal("10"), mock_periods={"24h": Decimal("1")}
        )
        result = await LighterYieldAdapter(settings).fetch()

        assert set(result.periods) == set(PeriodKey)
        assert result.periods[PeriodKey.H24] == Decimal("1")
        assert result.periods[PeriodKey.Y1] == Decimal("10")
