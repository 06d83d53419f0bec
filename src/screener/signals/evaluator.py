"""Signal evaluation: indicator snapshot and boolean signal map per asset.

build_snapshot runs the indicator library over one SeriesBuffer and folds in
the auxiliary ratios (volume, ATH/ATL distance, volume/market cap).
evaluate_signals turns a snapshot plus pattern results into a SignalMap.

Every predicate is total: a None indicator or missing auxiliary input
yields False, never an error, so a thinly-traded asset degrades instead of
disappearing from the screen.

CRITICAL: All comparisons use Decimal. Never use float for signal thresholds.
"""

from __future__ import annotations

from decimal import Decimal

from screener.config import IndicatorSettings, SignalSettings
from screener.indicators import (
    IndicatorSnapshot,
    bollinger_bands,
    macd,
    rsi_series,
    sma,
    stoch_rsi,
    volume_ratio,
)
from screener.patterns.models import DivergenceResult, EngulfingResult
from screener.series.models import AssetContext, SeriesBuffer
from screener.signals.models import SignalMap

_ZERO = Decimal("0")


def build_snapshot(
    series: SeriesBuffer,
    context: AssetContext | None,
    settings: IndicatorSettings,
    rsi_values: list[Decimal | None] | None = None,
) -> IndicatorSnapshot:
    """Compute the latest indicator values for one asset.

    Args:
        series: Validated price history.
        context: Auxiliary inputs; None is treated as "nothing known".
        settings: Indicator window lengths.
        rsi_values: Precomputed RSI series aligned with the closes, to avoid
            computing it twice when the caller also needs it for divergence.

    Returns:
        IndicatorSnapshot with None for every indicator lacking history.
    """
    context = context or AssetContext()
    closes = series.closes()
    price = series.last_close

    if rsi_values is None:
        rsi_values = rsi_series(closes, settings.rsi_period)

    # The reported 24h figure wins over the series-derived ratio
    ratio = context.reported_volume_ratio
    if ratio is None:
        ratio = volume_ratio(series.volumes(), settings.volume_average_period)

    return IndicatorSnapshot(
        price=price,
        rsi14=rsi_values[-1] if rsi_values else None,
        sma50=sma(closes, settings.sma_period),
        bollinger=bollinger_bands(
            closes, settings.bollinger_period, settings.bollinger_std
        ),
        macd=macd(closes, settings.macd_fast, settings.macd_slow, settings.macd_signal),
        stoch_rsi=stoch_rsi(
            closes,
            settings.rsi_period,
            settings.stoch_period,
            settings.stoch_k_smooth,
            settings.stoch_d_smooth,
        ),
        volume_ratio=ratio,
        funding_rate=context.funding_rate,
        distance_from_ath=context.distance_from_ath(price),
        distance_from_atl=context.distance_from_atl(price),
        volume_to_mcap=context.volume_to_mcap,
        market_cap=context.market_cap,
        volume_24h=context.volume_24h,
    )


def _crossed_above(prev_diff: Decimal | None, diff: Decimal) -> bool:
    """True when a difference moves from <= 0 to > 0 between two samples."""
    return prev_diff is not None and prev_diff <= _ZERO < diff


def _crossed_below(prev_diff: Decimal | None, diff: Decimal) -> bool:
    """True when a difference moves from >= 0 to < 0 between two samples."""
    return prev_diff is not None and prev_diff >= _ZERO > diff


def evaluate_signals(
    snapshot: IndicatorSnapshot,
    engulfing: EngulfingResult,
    divergence: DivergenceResult,
    settings: SignalSettings,
) -> SignalMap:
    """Derive the closed set of boolean signals from one snapshot.

    Args:
        snapshot: Latest indicator values and auxiliary ratios.
        engulfing: Engulfing pattern on the last two samples.
        divergence: RSI/price divergence over the lookback window.
        settings: Signal thresholds.

    Returns:
        SignalMap; any signal whose inputs are missing is False.
    """
    price = snapshot.price

    above_sma50 = below_sma50 = False
    if price is not None and snapshot.sma50 is not None:
        above_sma50 = price > snapshot.sma50
        below_sma50 = price < snapshot.sma50

    above_bb = below_bb = False
    if price is not None and snapshot.bollinger is not None:
        above_bb = price > snapshot.bollinger.upper
        below_bb = price < snapshot.bollinger.lower

    funding = snapshot.funding_rate
    has_funding = funding is not None
    positive_funding = funding is not None and funding > _ZERO
    negative_funding = funding is not None and funding < _ZERO

    near_ath = (
        snapshot.distance_from_ath is not None
        and snapshot.distance_from_ath <= settings.near_ath_pct
    )
    near_atl = (
        snapshot.distance_from_atl is not None
        and snapshot.distance_from_atl <= settings.near_atl_pct
    )

    volume_spike = (
        snapshot.volume_ratio is not None
        and snapshot.volume_ratio > settings.volume_spike_ratio
    )
    high_vol_mcap = (
        snapshot.volume_to_mcap is not None
        and snapshot.volume_to_mcap > settings.high_vol_mcap_ratio
    )

    macd_bullish_cross = macd_bearish_cross = False
    if snapshot.macd is not None:
        prev_hist = snapshot.macd.prev_histogram
        macd_bullish_cross = _crossed_above(prev_hist, snapshot.macd.histogram)
        macd_bearish_cross = _crossed_below(prev_hist, snapshot.macd.histogram)

    stoch_oversold = stoch_overbought = False
    stoch_bullish_cross = stoch_bearish_cross = False
    stoch = snapshot.stoch_rsi
    if stoch is not None:
        stoch_oversold = stoch.k < settings.stoch_oversold
        stoch_overbought = stoch.k > settings.stoch_overbought
        prev_diff = None
        if stoch.prev_k is not None and stoch.prev_d is not None:
            prev_diff = stoch.prev_k - stoch.prev_d
        stoch_bullish_cross = _crossed_above(prev_diff, stoch.k - stoch.d)
        stoch_bearish_cross = _crossed_below(prev_diff, stoch.k - stoch.d)

    return SignalMap(
        above_sma50=above_sma50,
        below_sma50=below_sma50,
        above_bb=above_bb,
        below_bb=below_bb,
        has_funding=has_funding,
        positive_funding=positive_funding,
        negative_funding=negative_funding,
        bullish_divergence=divergence.bullish,
        bearish_divergence=divergence.bearish,
        bullish_engulfing=engulfing.bullish,
        bearish_engulfing=engulfing.bearish,
        near_ath=near_ath,
        near_atl=near_atl,
        volume_spike=volume_spike,
        high_vol_mcap=high_vol_mcap,
        macd_bullish_cross=macd_bullish_cross,
        macd_bearish_cross=macd_bearish_cross,
        stoch_oversold=stoch_oversold,
        stoch_overbought=stoch_overbought,
        stoch_bullish_cross=stoch_bullish_cross,
        stoch_bearish_cross=stoch_bearish_cross,
    )
