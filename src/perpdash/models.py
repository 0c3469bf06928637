"""Shared data models for the vault dashboard.

Arithmetic uses Decimal throughout. Conversion to float happens only when a
model is serialized for the JSON API.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PeriodKey(str, Enum):
    """Standard look-back windows, in display order."""

    H24 = "24h"
    D7 = "7d"
    M1 = "1m"
    M3 = "3m"
    M6 = "6m"
    Y1 = "1y"
    ALL_TIME = "all-time"

    @property
    def days(self) -> int:
        """Window length in days. All-time is treated as one year."""
        return _PERIOD_DAYS[self]

    @property
    def portfolio_name(self) -> str:
        """Name of the matching period in a Hyperliquid vault portfolio."""
        return _PORTFOLIO_NAMES[self]

    @property
    def label(self) -> str:
        """Column label. Multi-day windows are labelled as moving averages."""
        if self is PeriodKey.H24:
            return "24h"
        return f"{self.value} ma"

    @classmethod
    def parse(cls, value: str) -> "PeriodKey | None":
        """Return the key for a raw string, or None if it is not a known period."""
        try:
            return cls(value)
        except ValueError:
            return None


_PERIOD_DAYS: dict[PeriodKey, int] = {
    PeriodKey.H24: 1,
    PeriodKey.D7: 7,
    PeriodKey.M1: 30,
    PeriodKey.M3: 90,
    PeriodKey.M6: 182,
    PeriodKey.Y1: 365,
    PeriodKey.ALL_TIME: 365,
}

_PORTFOLIO_NAMES: dict[PeriodKey, str] = {
    PeriodKey.H24: "day",
    PeriodKey.D7: "week",
    PeriodKey.M1: "month",
    PeriodKey.M3: "threeMonth",
    PeriodKey.M6: "sixMonth",
    PeriodKey.Y1: "year",
    PeriodKey.ALL_TIME: "allTime",
}


@dataclass(frozen=True)
class VenueVolume:
    """24h trading volume for one venue, in USD."""

    venue: str
    volume: Decimal
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return {"dex": self.venue, "volume": float(self.volume)}


@dataclass(frozen=True)
class VenueYield:
    """Headline APR, annualized per-period yields and TVL for one venue vault.

    `periods` always holds every PeriodKey once built by the yield adapters.
    """

    venue: str
    current: Decimal  # percent, annualized
    periods: dict[PeriodKey, Decimal]
    tvl: Decimal
    is_fallback: bool = False

    def period(self, key: PeriodKey) -> Decimal | None:
        return self.periods.get(key)

    def to_dict(self) -> dict:
        return {
            "dex": self.venue,
            "current": float(self.current),
            "periods": {key.value: float(value) for key, value in self.periods.items()},
            "tvl": float(self.tvl),
        }


@dataclass
class DashboardRow:
    """One table row: a venue's volume and yields joined with its static metadata."""

    venue: str
    volume: Decimal | None
    yield_data: VenueYield | None
    invest_url: str
    supported_asset: str
    cells: dict[PeriodKey, Decimal | None] = field(default_factory=dict)
