"""Simple and exponential moving averages over Decimal series.

Series variants return a list aligned with the input, holding None for the
first ``period - 1`` entries where the window is not yet full.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

_ZERO = Decimal("0")


def sma(values: list[Decimal], period: int) -> Decimal | None:
    """Arithmetic mean of the last ``period`` values.

    Args:
        values: Ordered values (oldest first).
        period: Window length.

    Returns:
        The mean, or None if fewer than ``period`` values exist.
    """
    if period < 1 or len(values) < period:
        return None
    return sum(values[-period:], _ZERO) / Decimal(period)


def sma_series(values: list[Decimal], period: int) -> list[Decimal | None]:
    """Rolling SMA aligned with ``values``."""
    result: list[Decimal | None] = [None] * len(values)
    if period < 1 or len(values) < period:
        return result

    divisor = Decimal(period)
    window_sum = sum(values[:period], _ZERO)
    result[period - 1] = window_sum / divisor
    for i in range(period, len(values)):
        window_sum += values[i] - values[i - period]
        result[i] = window_sum / divisor
    return result


def ema_series(values: list[Decimal], period: int) -> list[Decimal | None]:
    """Compute an Exponential Moving Average aligned with ``values``.

    Seeded with the SMA of the first ``period`` values, then the standard
    recursion:
        k = 2 / (period + 1)
        EMA_i = value_i * k + EMA_{i-1} * (1 - k)

    Args:
        values: Ordered values (oldest first).
        period: EMA period.

    Returns:
        List the same length as ``values``; None until the seed window fills.
    """
    result: list[Decimal | None] = [None] * len(values)
    if period < 1 or len(values) < period:
        return result

    k = Decimal("2") / (Decimal(period) + Decimal("1"))
    one_minus_k = Decimal("1") - k

    ema_value = sum(values[:period], _ZERO) / Decimal(period)
    result[period - 1] = ema_value
    for i in range(period, len(values)):
        ema_value = values[i] * k + ema_value * one_minus_k
        result[i] = ema_value
    return result


def ema(values: list[Decimal], period: int) -> Decimal | None:
    """Most recent EMA value, or None with fewer than ``period`` values."""
    series = ema_series(values, period)
    return series[-1] if series else None
