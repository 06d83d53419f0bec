"""Tests for the SignalEngine orchestrator.

Tests verify:
- Short or empty history degrades to None indicators instead of raising
- Score and signals are consistent with the composite scorer
- Batches reject duplicate asset ids
- The async batch returns the same analyses as the sequential one
- Each analysis emits a composite_score log event
- Batches bind a refresh_id for their duration, worker threads included
- Only the two most recent samples can produce an engulfing signal
"""

import dataclasses
from decimal import Decimal

import pytest
import structlog
from structlog.testing import capture_logs

from screener.config import AppSettings, ScoreSettings
from screener.exceptions import DuplicateAssetError
from screener.series.models import AssetContext, SeriesBuffer
from screener.signals.composite import compute_composite_score
from screener.signals.engine import SignalEngine
from screener.signals.models import AssetAnalysis, ReliabilityTier, ScoreLabel, SignalName


def _series(asset_id: str, closes: list[int], volume: int | None = None) -> SeriesBuffer:
    records = []
    for i, close in enumerate(closes):
        record = {"timestamp_ms": 1_700_000_000_000 + i * 3_600_000, "close": close}
        if volume is not None:
            record["volume"] = volume
        records.append(record)
    return SeriesBuffer.from_records(asset_id, records)


class TestAnalyze:
    def test_empty_series(self, engine: SignalEngine) -> None:
        analysis = engine.analyze(SeriesBuffer("ghost"))
        assert analysis.asset_id == "ghost"
        assert analysis.snapshot.price is None
        assert analysis.snapshot.rsi14 is None
        assert analysis.signals.active() == []
        assert analysis.score.score == 0
        assert analysis.score.label == ScoreLabel.NEUTRAL
        assert analysis.reliability is None
        assert analysis.confidence is None

    def test_short_rising_series(self, engine: SignalEngine) -> None:
        """RSI 100 alone gives (50 - 100) * 0.4 = -20."""
        analysis = engine.analyze(_series("btc", list(range(100, 115))))
        assert analysis.snapshot.rsi14 == Decimal("100")
        assert analysis.snapshot.sma50 is None
        assert analysis.signals.above_sma50 is False
        assert analysis.snapshot.macd is None
        assert analysis.score.score == -20
        assert analysis.score.label == ScoreLabel.NEUTRAL

    def test_falling_series_with_context(
        self, engine: SignalEngine, score_settings: ScoreSettings
    ) -> None:
        closes = list(range(200, 140, -1))
        context = AssetContext(
            funding_rate=Decimal("-0.0005"),
            atl=Decimal("120"),
            market_cap=Decimal("5000000000"),
        )
        analysis = engine.analyze(_series("eth", closes, volume=1000), context)

        assert analysis.snapshot.rsi14 == Decimal("0")
        assert analysis.signals.below_sma50 is True
        assert analysis.signals.negative_funding is True
        assert analysis.signals.near_atl is True
        assert analysis.signals.stoch_oversold is True
        assert analysis.reliability == ReliabilityTier.RELIABLE
        assert analysis.confidence == "GOOD"

        expected = compute_composite_score(
            analysis.signals, analysis.snapshot.rsi14, score_settings
        )
        assert analysis.score == expected

    def test_stale_engulfing_not_scored(self, engine: SignalEngine) -> None:
        series = SeriesBuffer.from_records(
            "sol",
            [
                {"timestamp_ms": 1, "open": 10, "close": 8},
                {"timestamp_ms": 2, "open": 7, "close": 11},
                {"timestamp_ms": 3, "close": 11.5},
                {"timestamp_ms": 4, "close": 12},
            ],
        )
        analysis = engine.analyze(series)
        assert analysis.signals.bullish_engulfing is False
        assert SignalName.BULLISH_ENGULFING not in analysis.score.contributions

    def test_current_engulfing_scored(self, engine: SignalEngine) -> None:
        series = SeriesBuffer.from_records(
            "sol",
            [
                {"timestamp_ms": 1, "open": 10, "close": 8},
                {"timestamp_ms": 2, "open": 7, "close": 11},
            ],
        )
        analysis = engine.analyze(series)
        assert analysis.signals.bullish_engulfing is True
        assert analysis.score.contributions[SignalName.BULLISH_ENGULFING] == Decimal("5")

    def test_analysis_is_frozen(self, engine: SignalEngine) -> None:
        analysis = engine.analyze(_series("btc", [1, 2, 3]))
        with pytest.raises(dataclasses.FrozenInstanceError):
            analysis.asset_id = "eth"  # type: ignore[misc]

    def test_logs_composite_score(self, engine: SignalEngine) -> None:
        with capture_logs() as logs:
            engine.analyze(_series("btc", list(range(100, 115))))
        events = [log for log in logs if log["event"] == "composite_score"]
        assert len(events) == 1
        assert events[0]["asset"] == "btc"
        assert events[0]["score"] == -20

    def test_logs_insufficient_history(self, engine: SignalEngine) -> None:
        with capture_logs() as logs:
            engine.analyze(_series("btc", [1, 2, 3]))
        events = [log for log in logs if log["event"] == "insufficient_history"]
        assert events[0]["missing"] == ["rsi", "sma", "bollinger", "macd", "stoch_rsi"]

    def test_from_settings(self, mock_settings: AppSettings) -> None:
        engine = SignalEngine.from_settings(mock_settings)
        analysis = engine.analyze(_series("btc", list(range(100, 115))))
        assert analysis.score.score == -20


class TestBatch:
    def _batch(self) -> list[tuple[SeriesBuffer, AssetContext | None]]:
        return [
            (_series("btc", list(range(100, 115))), None),
            (
                _series("eth", list(range(200, 140, -1)), volume=10),
                AssetContext(funding_rate=Decimal("0.01")),
            ),
            (SeriesBuffer("new"), None),
        ]

    def test_keyed_by_asset(self, engine: SignalEngine) -> None:
        results = engine.analyze_batch(self._batch())
        assert set(results) == {"btc", "eth", "new"}
        assert results["btc"].score.score == -20

    def test_duplicate_asset_rejected(self, engine: SignalEngine) -> None:
        series = _series("btc", [1, 2, 3])
        with pytest.raises(DuplicateAssetError):
            engine.analyze_batch([(series, None), (series, None)])

    def test_refresh_log(self, engine: SignalEngine) -> None:
        with capture_logs() as logs:
            engine.analyze_batch(self._batch())
        summary = [log for log in logs if log["event"] == "screener_refresh_complete"]
        assert summary[0]["assets"] == 3

    @pytest.fixture
    def seen_refresh_ids(
        self, engine: SignalEngine, monkeypatch: pytest.MonkeyPatch
    ) -> list[object]:
        """Record the bound refresh_id each time the engine analyzes an asset."""
        seen: list[object] = []
        analyze = engine.analyze

        def recording_analyze(
            series: SeriesBuffer, context: AssetContext | None = None
        ) -> AssetAnalysis:
            seen.append(structlog.contextvars.get_contextvars().get("refresh_id"))
            return analyze(series, context)

        monkeypatch.setattr(engine, "analyze", recording_analyze)
        return seen

    def test_refresh_id_bound_during_batch(
        self, engine: SignalEngine, seen_refresh_ids: list[object]
    ) -> None:
        engine.analyze_batch(self._batch(), refresh_id="refresh-7")
        assert seen_refresh_ids == ["refresh-7"] * 3
        assert "refresh_id" not in structlog.contextvars.get_contextvars()

    def test_refresh_id_generated(
        self, engine: SignalEngine, seen_refresh_ids: list[object]
    ) -> None:
        engine.analyze_batch(self._batch())
        assert len(set(seen_refresh_ids)) == 1
        assert isinstance(seen_refresh_ids[0], str)
        assert seen_refresh_ids[0]

    def test_refresh_context_cleared_on_failure(
        self, engine: SignalEngine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_analyze(
            series: SeriesBuffer, context: AssetContext | None = None
        ) -> AssetAnalysis:
            raise ArithmeticError("boom")

        monkeypatch.setattr(engine, "analyze", failing_analyze)
        with pytest.raises(ArithmeticError):
            engine.analyze_batch(self._batch(), refresh_id="refresh-8")
        assert "refresh_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_async_worker_threads_see_refresh_id(
        self, engine: SignalEngine, seen_refresh_ids: list[object]
    ) -> None:
        await engine.analyze_batch_async(self._batch(), refresh_id="refresh-9")
        assert seen_refresh_ids == ["refresh-9"] * 3
        assert "refresh_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, engine: SignalEngine) -> None:
        sequential = engine.analyze_batch(self._batch())
        concurrent = await engine.analyze_batch_async(self._batch())
        assert concurrent == sequential

    @pytest.mark.asyncio
    async def test_async_duplicate_rejected(self, engine: SignalEngine) -> None:
        series = _series("btc", [1, 2, 3])
        with pytest.raises(DuplicateAssetError):
            await engine.analyze_batch_async([(series, None), (series, None)])
