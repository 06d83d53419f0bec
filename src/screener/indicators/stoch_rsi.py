"""Stochastic RSI: a stochastic oscillator applied to the RSI series.

raw %K = (RSI - min(RSI, n)) / (max(RSI, n) - min(RSI, n)) * 100, 0 on a flat window
%K     = SMA(k_smooth) of raw %K
%D     = SMA(d_smooth) of %K

Both %K and %D stay within [0, 100].

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from screener.indicators.models import StochRSIResult
from screener.indicators.moving_average import sma_series
from screener.indicators.rsi import rsi_series

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def stoch_rsi_series(
    closes: list[Decimal],
    rsi_period: int = 14,
    stoch_period: int = 14,
    k_smooth: int = 3,
    d_smooth: int = 3,
) -> list[StochRSIResult]:
    """Compute every Stochastic RSI point where %D is defined.

    Args:
        closes: Close prices ordered oldest-first.
        rsi_period: RSI period (default 14).
        stoch_period: Lookback for the RSI min/max window (default 14).
        k_smooth: SMA period applied to raw %K (default 3).
        d_smooth: SMA period applied to %K to get %D (default 3).

    Returns:
        Points ordered oldest-first, each with the previous %K/%D pair;
        empty when history is too short.
    """
    rsi_values = [v for v in rsi_series(closes, rsi_period) if v is not None]
    if stoch_period < 1 or len(rsi_values) < stoch_period:
        return []

    raw_k: list[Decimal] = []
    for i in range(stoch_period - 1, len(rsi_values)):
        window = rsi_values[i - stoch_period + 1 : i + 1]
        lowest = min(window)
        highest = max(window)
        if highest == lowest:
            raw_k.append(_ZERO)
        else:
            raw_k.append((rsi_values[i] - lowest) / (highest - lowest) * _HUNDRED)

    k_values = [v for v in sma_series(raw_k, k_smooth) if v is not None]
    d_values = sma_series(k_values, d_smooth)

    points: list[StochRSIResult] = []
    previous: StochRSIResult | None = None
    for k, d in zip(k_values, d_values):
        if d is None:
            continue
        point = StochRSIResult(
            k=k,
            d=d,
            prev_k=previous.k if previous else None,
            prev_d=previous.d if previous else None,
        )
        points.append(point)
        previous = point

    return points


def stoch_rsi(
    closes: list[Decimal],
    rsi_period: int = 14,
    stoch_period: int = 14,
    k_smooth: int = 3,
    d_smooth: int = 3,
) -> StochRSIResult | None:
    """Latest Stochastic RSI point, or None when history is too short."""
    points = stoch_rsi_series(closes, rsi_period, stoch_period, k_smooth, d_smooth)
    return points[-1] if points else None
