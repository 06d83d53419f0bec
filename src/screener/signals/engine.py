"""Signal engine orchestrating the per-asset pipeline into composite scores.

For each asset the stages run strictly in order:
1. Indicators (RSI series, SMA, Bollinger, MACD, Stochastic RSI, volume)
2. Patterns (engulfing candles, RSI/price divergence)
3. Signals (closed boolean SignalMap)
4. Score (composite integer + label)

Assets are independent, so a batch can fan out across worker threads with
no locking; inputs are immutable and every output is a fresh frozen record.
A batch either completes for every asset or raises; partial results are
never returned.

CRITICAL: All computations use Decimal. Never use float for signal scores.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Iterable
from uuid import uuid4

from screener.config import AppSettings, IndicatorSettings, ScoreSettings, SignalSettings
from screener.exceptions import DuplicateAssetError
from screener.indicators import rsi_series
from screener.logging import bind_refresh_context, clear_refresh_context, get_logger
from screener.patterns import detect_divergence, detect_engulfing
from screener.series.models import AssetContext, SeriesBuffer
from screener.signals.composite import compute_composite_score
from screener.signals.evaluator import build_snapshot, evaluate_signals
from screener.signals.models import AssetAnalysis
from screener.signals.reliability import TIER_CONFIDENCE, classify_market_cap

logger = get_logger(__name__)

#: One batch entry: the asset's price history and optional auxiliary inputs.
AssetInput = tuple[SeriesBuffer, AssetContext | None]


class SignalEngine:
    """Runs indicator -> pattern -> signal -> score for each asset.

    Args:
        indicator_settings: Indicator window lengths.
        signal_settings: Thresholds for boolean signals.
        score_settings: Composite weights and label thresholds.
    """

    def __init__(
        self,
        indicator_settings: IndicatorSettings,
        signal_settings: SignalSettings,
        score_settings: ScoreSettings,
    ) -> None:
        self._indicator_settings = indicator_settings
        self._signal_settings = signal_settings
        self._score_settings = score_settings

    @classmethod
    def from_settings(cls, settings: AppSettings) -> SignalEngine:
        """Build an engine from the root application settings."""
        return cls(
            indicator_settings=settings.indicators,
            signal_settings=settings.signals,
            score_settings=settings.score,
        )

    def analyze(
        self, series: SeriesBuffer, context: AssetContext | None = None
    ) -> AssetAnalysis:
        """Analyze a single asset.

        Never raises for short history or missing auxiliary data: affected
        indicators are None and dependent signals False.

        Args:
            series: Validated price history for the asset.
            context: Funding rate, ATH/ATL, volume and market cap, if known.

        Returns:
            AssetAnalysis with snapshot, signal map, composite score and
            market-cap reliability tier.
        """
        settings = self._indicator_settings
        closes = series.closes()

        # --- Indicators ---
        rsi_values = rsi_series(closes, settings.rsi_period)
        snapshot = build_snapshot(series, context, settings, rsi_values=rsi_values)

        missing = [
            name
            for name, value in (
                ("rsi", snapshot.rsi14),
                ("sma", snapshot.sma50),
                ("bollinger", snapshot.bollinger),
                ("macd", snapshot.macd),
                ("stoch_rsi", snapshot.stoch_rsi),
            )
            if value is None
        ]
        if missing:
            logger.debug(
                "insufficient_history",
                asset=series.asset_id,
                samples=len(series),
                missing=missing,
            )

        # --- Patterns ---
        engulfing = detect_engulfing(series.points)
        divergence = detect_divergence(
            closes, rsi_values, lookback=settings.divergence_lookback
        )

        # --- Signals and score ---
        signals = evaluate_signals(snapshot, engulfing, divergence, self._signal_settings)
        score = compute_composite_score(signals, snapshot.rsi14, self._score_settings)

        reliability = classify_market_cap(snapshot.market_cap)
        analysis = AssetAnalysis(
            asset_id=series.asset_id,
            snapshot=snapshot,
            signals=signals,
            score=score,
            reliability=reliability,
            confidence=TIER_CONFIDENCE[reliability] if reliability is not None else None,
        )

        logger.info(
            "composite_score",
            asset=series.asset_id,
            score=score.score,
            label=score.label.value,
            rsi=snapshot.rsi14,
            rsi_component=score.rsi_component,
            active=[name.value for name in signals.active()],
        )
        return analysis

    def analyze_batch(
        self, batch: Iterable[AssetInput], refresh_id: str | None = None
    ) -> dict[str, AssetAnalysis]:
        """Analyze every asset of one refresh sequentially.

        Every log line emitted during the batch carries ``refresh_id``.

        Args:
            batch: (series, context) pairs; asset ids must be unique.
            refresh_id: Identifier for this refresh (generated if omitted).

        Returns:
            Dict mapping asset id -> AssetAnalysis.

        Raises:
            DuplicateAssetError: If two entries share an asset id.
        """
        items = _unique_inputs(batch)
        bind_refresh_context(refresh_id or uuid4().hex[:12])
        try:
            results = {
                series.asset_id: self.analyze(series, context) for series, context in items
            }
            _log_refresh(results)
        finally:
            clear_refresh_context()
        return results

    async def analyze_batch_async(
        self, batch: Iterable[AssetInput], refresh_id: str | None = None
    ) -> dict[str, AssetAnalysis]:
        """Analyze one refresh with each asset on a worker thread.

        Same result as analyze_batch. Worker threads inherit the bound
        ``refresh_id``. If any asset fails the exception propagates and the
        whole batch is discarded.
        """
        items = _unique_inputs(batch)
        bind_refresh_context(refresh_id or uuid4().hex[:12])
        try:
            analyses = await asyncio.gather(
                *(
                    asyncio.to_thread(self.analyze, series, context)
                    for series, context in items
                )
            )
            results = {analysis.asset_id: analysis for analysis in analyses}
            _log_refresh(results)
        finally:
            clear_refresh_context()
        return results


def _unique_inputs(batch: Iterable[AssetInput]) -> list[AssetInput]:
    items = list(batch)
    seen: set[str] = set()
    for series, _context in items:
        if series.asset_id in seen:
            raise DuplicateAssetError(f"asset {series.asset_id!r} appears twice in batch")
        seen.add(series.asset_id)
    return items


def _log_refresh(results: dict[str, AssetAnalysis]) -> None:
    labels = Counter(analysis.score.label.value for analysis in results.values())
    logger.info(
        "screener_refresh_complete",
        assets=len(results),
        labels=dict(labels),
    )
