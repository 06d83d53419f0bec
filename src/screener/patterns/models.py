"""Pattern detection results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngulfingResult:
    bullish: bool = False
    bearish: bool = False


@dataclass(frozen=True)
class DivergenceResult:
    bullish: bool = False
    bearish: bool = False
