"""Signal map, composite score and per-asset analysis models.

The signal vocabulary is closed: SignalMap has exactly one boolean field per
SignalName, so an unknown signal cannot be set or read by accident.

CRITICAL: All score terms use Decimal. Never use float for signal computations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from screener.indicators.models import IndicatorSnapshot


class SignalName(str, Enum):
    """Closed set of boolean signals. Values are the consumer-facing keys."""

    ABOVE_SMA50 = "aboveSMA50"
    BELOW_SMA50 = "belowSMA50"
    ABOVE_BB = "aboveBB"
    BELOW_BB = "belowBB"
    HAS_FUNDING = "hasFunding"
    POSITIVE_FUNDING = "positiveFunding"
    NEGATIVE_FUNDING = "negativeFunding"
    BULLISH_DIVERGENCE = "bullishDivergence"
    BEARISH_DIVERGENCE = "bearishDivergence"
    BULLISH_ENGULFING = "bullishEngulfing"
    BEARISH_ENGULFING = "bearishEngulfing"
    NEAR_ATH = "nearATH"
    NEAR_ATL = "nearATL"
    VOLUME_SPIKE = "volumeSpike"
    HIGH_VOL_MCAP = "highVolMcap"
    MACD_BULLISH_CROSS = "macdBullishCross"
    MACD_BEARISH_CROSS = "macdBearishCross"
    STOCH_OVERSOLD = "stochOversold"
    STOCH_OVERBOUGHT = "stochOverbought"
    STOCH_BULLISH_CROSS = "stochBullishCross"
    STOCH_BEARISH_CROSS = "stochBearishCross"

    @property
    def field_name(self) -> str:
        """Attribute name of this signal on SignalMap."""
        return self.name.lower()


@dataclass(frozen=True)
class SignalMap:
    """Boolean signals for one asset and one refresh.

    Every field defaults to False: a missing prerequisite never activates a
    signal.
    """

    above_sma50: bool = False
    below_sma50: bool = False
    above_bb: bool = False
    below_bb: bool = False
    has_funding: bool = False
    positive_funding: bool = False
    negative_funding: bool = False
    bullish_divergence: bool = False
    bearish_divergence: bool = False
    bullish_engulfing: bool = False
    bearish_engulfing: bool = False
    near_ath: bool = False
    near_atl: bool = False
    volume_spike: bool = False
    high_vol_mcap: bool = False
    macd_bullish_cross: bool = False
    macd_bearish_cross: bool = False
    stoch_oversold: bool = False
    stoch_overbought: bool = False
    stoch_bullish_cross: bool = False
    stoch_bearish_cross: bool = False

    def get(self, name: SignalName) -> bool:
        return getattr(self, name.field_name)

    def active(self) -> list[SignalName]:
        """Signals currently True, in declaration order."""
        return [name for name in SignalName if self.get(name)]

    def as_dict(self) -> dict[str, bool]:
        """Consumer-facing mapping keyed by the camelCase signal names."""
        return {name.value: self.get(name) for name in SignalName}


class ScoreLabel(str, Enum):
    """Qualitative reading of the composite score."""

    STRONG_SELL = "STRONG_SELL"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"
    BUY = "BUY"
    STRONG_BUY = "STRONG_BUY"


class ReliabilityTier(str, Enum):
    """How far technical signals can be trusted, by market capitalization."""

    HIGHLY_RELIABLE = "HIGHLY_RELIABLE"
    RELIABLE = "RELIABLE"
    MODERATELY_RELIABLE = "MODERATELY_RELIABLE"
    UNRELIABLE = "UNRELIABLE"
    HIGHLY_UNRELIABLE = "HIGHLY_UNRELIABLE"


@dataclass(frozen=True)
class CompositeScore:
    """Integer score in [-100, 100] with its label and breakdown.

    ``contributions`` lists the signed points of every active weighted
    signal; ``rsi_component`` is the continuous RSI term.
    """

    score: int
    label: ScoreLabel
    rsi_component: Decimal = Decimal("0")
    contributions: dict[SignalName, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class AssetAnalysis:
    """Everything the engine publishes for one asset in one refresh."""

    asset_id: str
    snapshot: IndicatorSnapshot
    signals: SignalMap
    score: CompositeScore
    reliability: ReliabilityTier | None = None
    confidence: str | None = None  # HIGH .. VERY_LOW, follows reliability
