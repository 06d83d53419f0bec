"""Tests for pydantic-settings configuration groups."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from screener.config import AppSettings, IndicatorSettings, ScoreSettings, SignalSettings


class TestDefaults:
    def test_indicator_defaults(self) -> None:
        settings = IndicatorSettings()
        assert settings.rsi_period == 14
        assert settings.sma_period == 50
        assert settings.bollinger_std == Decimal("2")
        assert (settings.macd_fast, settings.macd_slow, settings.macd_signal) == (12, 26, 9)

    def test_score_defaults(self) -> None:
        settings = ScoreSettings()
        assert settings.weight_rsi == Decimal("0.4")
        assert settings.strong_threshold == 50
        assert settings.moderate_threshold == 25

    def test_app_settings_compose_groups(self, mock_settings: AppSettings) -> None:
        assert mock_settings.log_level == "DEBUG"
        assert mock_settings.signals.near_atl_pct == Decimal("0.50")
        assert mock_settings.screener.rows_per_page == 50


class TestEnvironment:
    def test_prefixed_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIGNAL_VOLUME_SPIKE_RATIO", "2.5")
        assert SignalSettings().volume_spike_ratio == Decimal("2.5")

    def test_indicator_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INDICATOR_RSI_PERIOD", "21")
        assert IndicatorSettings().rsi_period == 21


class TestScoreValidation:
    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-negative"):
            ScoreSettings(weight_bollinger=Decimal("-1"))

    def test_inverted_thresholds_rejected(self) -> None:
        with pytest.raises(ValidationError, match="moderate < strong"):
            ScoreSettings(strong_threshold=20, moderate_threshold=40)

    def test_threshold_above_100_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScoreSettings(strong_threshold=120)
