"""Indicator result models.

None is the only absence marker: an indicator that lacks history is None,
never zero. A neutral RSI of exactly 50 is a real value.

CRITICAL: All indicator values use Decimal. Never use float.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BollingerBands:
    """Moving-average envelope at +/- k population standard deviations."""

    upper: Decimal
    middle: Decimal
    lower: Decimal


@dataclass(frozen=True)
class MACDResult:
    """MACD point with the preceding line/signal pair for cross detection."""

    line: Decimal  # EMA(fast) - EMA(slow)
    signal: Decimal  # EMA(signal) of the line series
    histogram: Decimal  # line - signal
    prev_line: Decimal | None = None
    prev_signal: Decimal | None = None

    @property
    def prev_histogram(self) -> Decimal | None:
        if self.prev_line is None or self.prev_signal is None:
            return None
        return self.prev_line - self.prev_signal


@dataclass(frozen=True)
class StochRSIResult:
    """Smoothed Stochastic RSI %K/%D in [0, 100] with the preceding pair."""

    k: Decimal
    d: Decimal
    prev_k: Decimal | None = None
    prev_d: Decimal | None = None


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest indicator values and auxiliary ratios for one asset.

    Carries no reference to the SeriesBuffer it was computed from.
    """

    price: Decimal | None
    rsi14: Decimal | None
    sma50: Decimal | None
    bollinger: BollingerBands | None
    macd: MACDResult | None
    stoch_rsi: StochRSIResult | None
    volume_ratio: Decimal | None = None  # Current volume / trailing average
    funding_rate: Decimal | None = None
    distance_from_ath: Decimal | None = None  # Fraction below ATH
    distance_from_atl: Decimal | None = None  # Fraction above ATL
    volume_to_mcap: Decimal | None = None
    market_cap: Decimal | None = None
    volume_24h: Decimal | None = None
