"""Tests for market-cap reliability tiers."""

from decimal import Decimal

import pytest

from screener.signals.models import ReliabilityTier
from screener.signals.reliability import TIER_CONFIDENCE, classify_market_cap


class TestClassifyMarketCap:
    @pytest.mark.parametrize(
        ("market_cap", "tier"),
        [
            (Decimal("20000000000"), ReliabilityTier.HIGHLY_RELIABLE),
            (Decimal("10000000000"), ReliabilityTier.RELIABLE),
            (Decimal("5000000000"), ReliabilityTier.RELIABLE),
            (Decimal("500000000"), ReliabilityTier.MODERATELY_RELIABLE),
            (Decimal("100000000"), ReliabilityTier.UNRELIABLE),
            (Decimal("50000000"), ReliabilityTier.HIGHLY_UNRELIABLE),
            (Decimal("1000"), ReliabilityTier.HIGHLY_UNRELIABLE),
        ],
    )
    def test_tiers(self, market_cap: Decimal, tier: ReliabilityTier) -> None:
        assert classify_market_cap(market_cap) == tier

    def test_unknown_market_cap(self) -> None:
        assert classify_market_cap(None) is None

    def test_non_positive_market_cap(self) -> None:
        assert classify_market_cap(Decimal("0")) is None

    def test_every_tier_has_confidence(self) -> None:
        assert set(TIER_CONFIDENCE) == set(ReliabilityTier)
