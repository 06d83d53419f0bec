"""Signal evaluation and composite scoring.

Turns indicator snapshots into the closed boolean signal map, reduces it to
a composite score in [-100, 100], and provides the SignalEngine that runs
the whole per-asset pipeline for a refresh batch.
"""

from screener.signals.composite import build_weights, compute_composite_score, score_label
from screener.signals.engine import SignalEngine
from screener.signals.evaluator import build_snapshot, evaluate_signals
from screener.signals.models import (
    AssetAnalysis,
    CompositeScore,
    ReliabilityTier,
    ScoreLabel,
    SignalMap,
    SignalName,
)
from screener.signals.reliability import classify_market_cap

__all__ = [
    "AssetAnalysis",
    "CompositeScore",
    "ReliabilityTier",
    "ScoreLabel",
    "SignalEngine",
    "SignalMap",
    "SignalName",
    "build_snapshot",
    "build_weights",
    "classify_market_cap",
    "compute_composite_score",
    "evaluate_signals",
    "score_label",
]
