"""Composite directional score from the boolean signal map.

Each bullish signal has a bearish mirror carrying the same weight with the
opposite sign, and RSI adds a continuous term:

    score = sum(weight(s) for active s) + (50 - rsi) * weight_rsi

The sum is rounded half away from zero and clamped to [-100, 100]. With the
default ScoreSettings the discrete weights total 80 per side and the RSI
term spans +/-20, so the scale is symmetric.

CRITICAL: All computations use Decimal. Never use float for signal scores.
"""

from decimal import ROUND_HALF_UP, Decimal

from screener.config import ScoreSettings
from screener.signals.models import CompositeScore, ScoreLabel, SignalMap, SignalName

_SCORE_MIN = -100
_SCORE_MAX = 100
_RSI_NEUTRAL = Decimal("50")

#: (bullish signal, bearish mirror, ScoreSettings weight attribute)
SIGNAL_PAIRS: tuple[tuple[SignalName, SignalName, str], ...] = (
    (SignalName.ABOVE_SMA50, SignalName.BELOW_SMA50, "weight_sma_trend"),
    (SignalName.BELOW_BB, SignalName.ABOVE_BB, "weight_bollinger"),
    (SignalName.NEGATIVE_FUNDING, SignalName.POSITIVE_FUNDING, "weight_funding"),
    (SignalName.BULLISH_DIVERGENCE, SignalName.BEARISH_DIVERGENCE, "weight_divergence"),
    (SignalName.MACD_BULLISH_CROSS, SignalName.MACD_BEARISH_CROSS, "weight_macd_cross"),
    (SignalName.BULLISH_ENGULFING, SignalName.BEARISH_ENGULFING, "weight_engulfing"),
    (SignalName.NEAR_ATL, SignalName.NEAR_ATH, "weight_extremes"),
    (SignalName.VOLUME_SPIKE, SignalName.HIGH_VOL_MCAP, "weight_volume"),
    (SignalName.STOCH_OVERSOLD, SignalName.STOCH_OVERBOUGHT, "weight_stoch_zone"),
    (SignalName.STOCH_BULLISH_CROSS, SignalName.STOCH_BEARISH_CROSS, "weight_stoch_cross"),
)


def build_weights(settings: ScoreSettings) -> dict[SignalName, Decimal]:
    """Signed weight per scored signal (bullish positive, bearish negative).

    hasFunding is informational only and carries no weight.
    """
    weights: dict[SignalName, Decimal] = {}
    for bullish, bearish, attr in SIGNAL_PAIRS:
        weight = abs(getattr(settings, attr))
        weights[bullish] = weight
        weights[bearish] = -weight
    return weights


def score_label(
    score: int, strong_threshold: int = 50, moderate_threshold: int = 25
) -> ScoreLabel:
    """Map an integer score to its label.

    >= strong -> STRONG_BUY, >= moderate -> BUY, <= -strong -> STRONG_SELL,
    <= -moderate -> SELL, anything in between -> NEUTRAL.
    """
    if score >= strong_threshold:
        return ScoreLabel.STRONG_BUY
    if score >= moderate_threshold:
        return ScoreLabel.BUY
    if score <= -strong_threshold:
        return ScoreLabel.STRONG_SELL
    if score <= -moderate_threshold:
        return ScoreLabel.SELL
    return ScoreLabel.NEUTRAL


def compute_composite_score(
    signals: SignalMap,
    rsi: Decimal | None,
    settings: ScoreSettings,
) -> CompositeScore:
    """Reduce a signal map and the latest RSI to one composite score.

    Args:
        signals: Boolean signals for the asset.
        rsi: Latest RSI, or None when undefined (contributes nothing).
        settings: Weights and label thresholds.

    Returns:
        CompositeScore with the clamped integer score, its label, and the
        per-signal breakdown.
    """
    weights = build_weights(settings)
    contributions = {name: weights[name] for name in signals.active() if name in weights}

    rsi_component = Decimal("0")
    if rsi is not None:
        rsi_component = (_RSI_NEUTRAL - rsi) * settings.weight_rsi

    total = sum(contributions.values(), Decimal("0")) + rsi_component
    rounded = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    score = max(_SCORE_MIN, min(_SCORE_MAX, rounded))

    return CompositeScore(
        score=score,
        label=score_label(score, settings.strong_threshold, settings.moderate_threshold),
        rsi_component=rsi_component,
        contributions=contributions,
    )
