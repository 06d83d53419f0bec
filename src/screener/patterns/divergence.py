"""RSI versus price divergence over a fixed lookback window.

Swing lows/highs are interior points strictly below/above both neighbours.
The two most recent swings of each kind are compared:

- Bullish: price makes a lower low while RSI makes a higher low.
- Bearish: price makes a higher high while RSI makes a lower high.

CRITICAL: All comparisons use Decimal. Never use float.
"""

from decimal import Decimal

from screener.patterns.models import DivergenceResult


def _swing_indices(values: list[Decimal]) -> tuple[list[int], list[int]]:
    """Return (low_indices, high_indices) of interior local extrema."""
    lows: list[int] = []
    highs: list[int] = []
    for i in range(1, len(values) - 1):
        if values[i] < values[i - 1] and values[i] < values[i + 1]:
            lows.append(i)
        elif values[i] > values[i - 1] and values[i] > values[i + 1]:
            highs.append(i)
    return lows, highs


def detect_divergence(
    closes: list[Decimal],
    rsi_values: list[Decimal | None],
    lookback: int = 14,
) -> DivergenceResult:
    """Detect bullish/bearish RSI divergence over the last ``lookback`` points.

    Args:
        closes: Close prices ordered oldest-first.
        rsi_values: RSI series aligned with ``closes`` (as from rsi_series).
        lookback: Window size (default 14).

    Returns:
        DivergenceResult; both flags False when fewer than ``lookback``
        defined RSI values end the series or fewer than two swings exist.
    """
    if lookback < 3 or len(closes) < lookback or len(rsi_values) < lookback:
        return DivergenceResult()

    prices = closes[-lookback:]
    window_rsi = rsi_values[-lookback:]
    if any(v is None for v in window_rsi):
        return DivergenceResult()
    oscillator: list[Decimal] = [v for v in window_rsi if v is not None]

    lows, highs = _swing_indices(prices)

    bullish = False
    if len(lows) >= 2:
        prev_i, last_i = lows[-2], lows[-1]
        bullish = (
            prices[last_i] < prices[prev_i] and oscillator[last_i] > oscillator[prev_i]
        )

    bearish = False
    if len(highs) >= 2:
        prev_i, last_i = highs[-2], highs[-1]
        bearish = (
            prices[last_i] > prices[prev_i] and oscillator[last_i] < oscillator[prev_i]
        )

    return DivergenceResult(bullish=bullish, bearish=bearish)
