"""Lighter public-pool yields. Served from configured mock data."""

from decimal import Decimal

from perpdash.config import LighterSettings
from perpdash.models import PeriodKey, VenueYield
from perpdash.yields.annualize import prorate

VENUE_NAME = "Lighter"


class LighterYieldAdapter:
    """Returns the configured mock record for the Lighter pool.

    Periods missing from the configuration are filled with the prorated
    headline APR so the record always carries every PeriodKey.
    """

    def __init__(self, settings: LighterSettings) -> None:
        self._settings = settings

    async def fetch(self) -> VenueYield:
        current = self._settings.mock_current
        periods: dict[PeriodKey, Decimal] = {}
        for key in PeriodKey:
            value = self._settings.mock_periods.get(key.value)
            periods[key] = value if value is not None else prorate(current, key.days)
        return VenueYield(
            venue=VENUE_NAME,
            current=current,
            periods=periods,
            tvl=self._settings.mock_tvl,
        )
