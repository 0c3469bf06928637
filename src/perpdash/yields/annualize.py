"""Vault yield normalization and annualization.

Pure Decimal arithmetic over a raw vault-details payload. Only the most recent
entry of each history series is read; the "ma" column labels do not imply any
averaging.

Core formulas (per look-back window of `days`):
  raw_yield  = latest_pnl / latest_account_value * 100
  annualized = raw_yield * (365 / days)
  prorated   = current_apr * (days / 365)

A window with no history, a zero account value or a raw yield of exactly zero
is reported as the prorated APR rather than as a zero return. Prorated values
are not annualized.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from perpdash.models import PeriodKey, VenueYield

DAYS_PER_YEAR = Decimal("365")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


def prorate(current: Decimal, days: int) -> Decimal:
    """Scale an annual percentage down to a window of `days`."""
    return current * (Decimal(days) / DAYS_PER_YEAR)


def annualize(raw_yield: Decimal, days: int) -> Decimal:
    """Scale a window return up to annual terms. Identity for 365-day windows."""
    return raw_yield * (DAYS_PER_YEAR / Decimal(days))


def latest_value(history: Any) -> Decimal | None:
    """Return the value of the last (timestamp, value) entry, or None if unusable."""
    if not isinstance(history, (list, tuple)) or not history:
        return None
    entry = history[-1]
    try:
        value = Decimal(str(entry[1]))
    except (InvalidOperation, IndexError, TypeError, KeyError):
        return None
    if not value.is_finite():
        return None
    return value


def period_yield(
    pnl_history: Any,
    account_value_history: Any,
    current: Decimal,
    days: int,
) -> Decimal:
    """Annualized yield for one window, falling back to the prorated APR."""
    latest_pnl = latest_value(pnl_history)
    latest_account_value = latest_value(account_value_history)

    if latest_pnl is None or latest_account_value is None or latest_account_value == _ZERO:
        return prorate(current, days)

    raw_yield = latest_pnl / latest_account_value * _HUNDRED
    if raw_yield == _ZERO:
        return prorate(current, days)

    return annualize(raw_yield, days)


def normalize_portfolio(portfolio: Any) -> dict[str, dict]:
    """Map period name -> histories.

    Accepts a plain mapping or the Hyperliquid wire form, a list of
    [period_name, histories] pairs. Anything else yields an empty mapping.
    """
    if isinstance(portfolio, dict):
        return {k: v for k, v in portfolio.items() if isinstance(v, dict)}

    result: dict[str, dict] = {}
    if isinstance(portfolio, list):
        for entry in portfolio:
            if (
                isinstance(entry, (list, tuple))
                and len(entry) == 2
                and isinstance(entry[1], dict)
            ):
                result[str(entry[0])] = entry[1]
    return result


def current_apr(raw: dict) -> Decimal:
    """Headline APR in percent from the upstream `apr` fraction (0 if missing)."""
    apr = raw.get("apr")
    if apr is None:
        return _ZERO
    try:
        value = Decimal(str(apr))
    except InvalidOperation:
        return _ZERO
    return value * _HUNDRED if value.is_finite() else _ZERO


def compute_venue_yield(raw: dict, venue: str = "Hyperliquid") -> VenueYield:
    """Build a VenueYield from a raw vault-details payload.

    Args:
        raw: Vault-details body with `apr` (fraction) and `portfolio` histories.
        venue: Display name of the venue.

    Returns:
        VenueYield with all seven periods populated.
    """
    current = current_apr(raw)
    portfolio = normalize_portfolio(raw.get("portfolio"))

    periods: dict[PeriodKey, Decimal] = {}
    for key in PeriodKey:
        histories = portfolio.get(key.portfolio_name, {})
        periods[key] = period_yield(
            histories.get("pnlHistory", []),
            histories.get("accountValueHistory", []),
            current,
            key.days,
        )

    all_time = portfolio.get(PeriodKey.ALL_TIME.portfolio_name, {})
    tvl = latest_value(all_time.get("accountValueHistory", []))

    return VenueYield(
        venue=venue,
        current=current,
        periods=periods,
        tvl=tvl if tvl is not None else _ZERO,
    )


def fallback_yield(venue: str, apr: Decimal, tvl: Decimal) -> VenueYield:
    """Static record used when the upstream fetch fails: every period is the prorated APR."""
    return VenueYield(
        venue=venue,
        current=apr,
        periods={key: prorate(apr, key.days) for key in PeriodKey},
        tvl=tvl,
        is_fallback=True,
    )
