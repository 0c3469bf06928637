"""Shared test fixtures for the vault dashboard."""

from decimal import Decimal

import pytest

from perpdash.config import AppSettings, HyperliquidSettings, VenueConfig


def history(*values: str) -> list[list]:
    """Build a (timestamp, value) history in the Hyperliquid wire format."""
    return [[1700000000000 + i * 60_000, v] for i, v in enumerate(values)]


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(
        log_level="DEBUG",
        hyperliquid=HyperliquidSettings(
            fallback_apr=Decimal("7.29"),
            fallback_tvl=Decimal("350000000"),
        ),
    )


@pytest.fixture
def venues(mock_settings: AppSettings) -> tuple[VenueConfig, ...]:
    """Tracked venues in display order (Hyperliquid, Lighter)."""
    return mock_settings.venues()


@pytest.fixture
def vault_details() -> dict:
    """Vault-details payload in the Hyperliquid wire form (list of period pairs)."""
    return {
        "name": "Hyperliquidity Provider (HLP)",
        "apr": 0.0729,
        "portfolio": [
            ["day", {"pnlHistory": history("0", "50"), "accountValueHistory": history("9900", "10000")}],
            ["week", {"pnlHistory": history("70"), "accountValueHistory": history("10000")}],
            ["month", {"pnlHistory": history("0"), "accountValueHistory": history("10000")}],
            ["allTime", {"pnlHistory": history("1000"), "accountValueHistory": history("5", "20000")}],
        ],
    }
