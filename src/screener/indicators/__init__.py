"""Stateless technical indicators over Decimal price series.

Every function returns None (or an empty series) when the input is shorter
than the indicator's minimum window; nothing here raises for short history.
"""

from screener.indicators.bollinger import bollinger_bands
from screener.indicators.macd import macd, macd_series
from screener.indicators.models import (
    BollingerBands,
    IndicatorSnapshot,
    MACDResult,
    StochRSIResult,
)
from screener.indicators.moving_average import ema, ema_series, sma, sma_series
from screener.indicators.rsi import rsi, rsi_series
from screener.indicators.stoch_rsi import stoch_rsi, stoch_rsi_series
from screener.indicators.volume import volume_ratio

__all__ = [
    "BollingerBands",
    "IndicatorSnapshot",
    "MACDResult",
    "StochRSIResult",
    "bollinger_bands",
    "ema",
    "ema_series",
    "macd",
    "macd_series",
    "rsi",
    "rsi_series",
    "sma",
    "sma_series",
    "stoch_rsi",
    "stoch_rsi_series",
    "volume_ratio",
]
