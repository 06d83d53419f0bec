"""Candlestick and oscillator pattern detectors built on indicator output."""

from screener.patterns.divergence import detect_divergence
from screener.patterns.engulfing import detect_engulfing
from screener.patterns.models import DivergenceResult, EngulfingResult

__all__ = [
    "DivergenceResult",
    "EngulfingResult",
    "detect_divergence",
    "detect_engulfing",
]
