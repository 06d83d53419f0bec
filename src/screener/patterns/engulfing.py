"""Two-candle engulfing reversal patterns.

Bullish: a bearish candle followed by a bullish candle whose body covers it
    (open_t <= close_{t-1} and close_t >= open_{t-1}).
Bearish: a bullish candle followed by a bearish candle whose body covers it
    (open_t >= close_{t-1} and close_t <= open_{t-1}).
"""

from collections.abc import Sequence

from screener.patterns.models import EngulfingResult
from screener.series.models import PricePoint


def detect_engulfing(candles: Sequence[PricePoint]) -> EngulfingResult:
    """Detect an engulfing pattern on the two most recent samples.

    Args:
        candles: Samples ordered oldest-first. Only the last two are read,
            and both must carry an open price.

    Returns:
        EngulfingResult; both flags False with fewer than two samples or
        when either of the last two is close-only.
    """
    if len(candles) < 2:
        return EngulfingResult()

    prev, curr = candles[-2], candles[-1]
    if prev.open is None or curr.open is None:
        return EngulfingResult()

    prev_bearish = prev.close < prev.open
    prev_bullish = prev.close > prev.open
    curr_bullish = curr.close > curr.open
    curr_bearish = curr.close < curr.open

    bullish = (
        prev_bearish
        and curr_bullish
        and curr.open <= prev.close
        and curr.close >= prev.open
    )
    bearish = (
        prev_bullish
        and curr_bearish
        and curr.open >= prev.close
        and curr.close <= prev.open
    )
    return EngulfingResult(bullish=bullish, bearish=bearish)
