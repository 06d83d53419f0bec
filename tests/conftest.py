"""Shared test fixtures for the oversold screener engine."""

import pytest

from screener.config import (
    AppSettings,
    IndicatorSettings,
    ScoreSettings,
    ScreenerSettings,
    SignalSettings,
)
from screener.signals.engine import SignalEngine


@pytest.fixture
def indicator_settings() -> IndicatorSettings:
    return IndicatorSettings()


@pytest.fixture
def signal_settings() -> SignalSettings:
    return SignalSettings()


@pytest.fixture
def score_settings() -> ScoreSettings:
    return ScoreSettings()


@pytest.fixture
def screener_settings() -> ScreenerSettings:
    return ScreenerSettings()


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (debug logging, default thresholds)."""
    return AppSettings(log_level="DEBUG")


@pytest.fixture
def engine(
    indicator_settings: IndicatorSettings,
    signal_settings: SignalSettings,
    score_settings: ScoreSettings,
) -> SignalEngine:
    return SignalEngine(
        indicator_settings=indicator_settings,
        signal_settings=signal_settings,
        score_settings=score_settings,
    )
