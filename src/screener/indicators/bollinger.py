"""Bollinger Bands: SMA envelope at +/- k population standard deviations.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from screener.indicators.models import BollingerBands

_ZERO = Decimal("0")


def bollinger_bands(
    closes: list[Decimal],
    period: int = 20,
    num_std: Decimal = Decimal("2"),
) -> BollingerBands | None:
    """Compute Bollinger Bands over the last ``period`` closes.

    Uses the population standard deviation (divide by N, not N-1), matching
    the conventional charting definition.

    Args:
        closes: Close prices ordered oldest-first.
        period: SMA / deviation window (default 20).
        num_std: Band width in standard deviations (default 2).

    Returns:
        BollingerBands with lower <= middle <= upper, or None if fewer than
        ``period`` closes exist.
    """
    if period < 1 or len(closes) < period:
        return None

    window = closes[-period:]
    divisor = Decimal(period)
    middle = sum(window, _ZERO) / divisor
    variance = sum(((c - middle) ** 2 for c in window), _ZERO) / divisor
    offset = variance.sqrt() * abs(num_std)

    return BollingerBands(upper=middle + offset, middle=middle, lower=middle - offset)
