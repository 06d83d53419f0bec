"""Moving Average Convergence Divergence.

line      = EMA(fast) - EMA(slow)
signal    = EMA(signal) of the line series, seeded by its first SMA
histogram = line - signal

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from screener.indicators.models import MACDResult
from screener.indicators.moving_average import ema_series


def macd_series(
    closes: list[Decimal],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> list[MACDResult]:
    """Compute every MACD point where both line and signal are defined.

    Each point carries the previous point's line and signal values so a
    single result is enough to detect a cross.

    Args:
        closes: Close prices ordered oldest-first.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal EMA period (default 9).

    Returns:
        MACD points ordered oldest-first; empty when history is too short.
    """
    fast_ema = ema_series(closes, fast)
    slow_ema = ema_series(closes, slow)

    line = [
        f - s
        for f, s in zip(fast_ema, slow_ema)
        if f is not None and s is not None
    ]
    signal_values = ema_series(line, signal)

    points: list[MACDResult] = []
    previous: MACDResult | None = None
    for line_value, signal_value in zip(line, signal_values):
        if signal_value is None:
            continue
        point = MACDResult(
            line=line_value,
            signal=signal_value,
            histogram=line_value - signal_value,
            prev_line=previous.line if previous else None,
            prev_signal=previous.signal if previous else None,
        )
        points.append(point)
        previous = point

    return points


def macd(
    closes: list[Decimal],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult | None:
    """Latest MACD point, or None until ``slow + signal`` closes exist."""
    if len(closes) < slow + signal:
        return None
    points = macd_series(closes, fast, slow, signal)
    return points[-1] if points else None
