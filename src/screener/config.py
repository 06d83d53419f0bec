"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndicatorSettings(BaseSettings):
    """Indicator window lengths.

    All fields configurable via INDICATOR_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    rsi_period: int = 14
    sma_period: int = 50
    bollinger_period: int = 20
    bollinger_std: Decimal = Decimal("2")
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    stoch_period: int = 14
    stoch_k_smooth: int = 3
    stoch_d_smooth: int = 3
    divergence_lookback: int = 14  # Closes/RSI points scanned for swings
    volume_average_period: int = 20  # Trailing volumes behind the current one


class SignalSettings(BaseSettings):
    """Thresholds turning indicator values into boolean signals.

    Ratios are fractions, not percentages (0.10 means 10%).
    All fields configurable via SIGNAL_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SIGNAL_")

    near_ath_pct: Decimal = Decimal("0.10")  # Within 10% below ATH
    near_atl_pct: Decimal = Decimal("0.50")  # Within 50% above ATL
    volume_spike_ratio: Decimal = Decimal("1.5")  # Current / trailing average
    high_vol_mcap_ratio: Decimal = Decimal("0.10")  # 24h volume / market cap
    stoch_oversold: Decimal = Decimal("20")
    stoch_overbought: Decimal = Decimal("80")


class ScoreSettings(BaseSettings):
    """Composite score weights and label thresholds.

    Each weight is shared by a bullish signal and its bearish mirror, so the
    positive and negative halves of the scale always have equal magnitude.
    With the defaults the discrete weights sum to 80 and the RSI term spans
    +/-20 (0.4 * 50), giving a full range of +/-100.
    All fields configurable via SCORE_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SCORE_")

    weight_sma_trend: Decimal = Decimal("15")  # aboveSMA50 / belowSMA50
    weight_bollinger: Decimal = Decimal("10")  # belowBB / aboveBB
    weight_funding: Decimal = Decimal("10")  # negativeFunding / positiveFunding
    weight_divergence: Decimal = Decimal("10")
    weight_macd_cross: Decimal = Decimal("10")
    weight_engulfing: Decimal = Decimal("5")
    weight_extremes: Decimal = Decimal("5")  # nearATL / nearATH
    weight_volume: Decimal = Decimal("5")  # volumeSpike / highVolMcap
    weight_stoch_zone: Decimal = Decimal("5")  # stochOversold / stochOverbought
    weight_stoch_cross: Decimal = Decimal("5")
    weight_rsi: Decimal = Decimal("0.4")  # Points per RSI unit away from 50

    strong_threshold: int = 50  # |score| >= 50 -> STRONG_BUY / STRONG_SELL
    moderate_threshold: int = 25  # |score| >= 25 -> BUY / SELL

    @model_validator(mode="after")
    def check_scale(self) -> "ScoreSettings":
        weights = [
            getattr(self, name)
            for name in type(self).model_fields
            if name.startswith("weight_")
        ]
        if any(w < 0 for w in weights):
            raise ValueError("score weights must be non-negative")
        if not 0 < self.moderate_threshold < self.strong_threshold <= 100:
            raise ValueError(
                "label thresholds must satisfy 0 < moderate < strong <= 100"
            )
        return self


class ScreenerSettings(BaseSettings):
    """Consumer-side screening defaults (filtering and pagination)."""

    model_config = SettingsConfigDict(env_prefix="SCREENER_")

    rows_per_page: int = 50
    min_volume_24h: Decimal = Decimal("200000")  # Hide illiquid assets by default


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    indicators: IndicatorSettings = IndicatorSettings()
    signals: SignalSettings = SignalSettings()
    score: ScoreSettings = ScoreSettings()
    screener: ScreenerSettings = ScreenerSettings()
