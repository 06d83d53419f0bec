"""Market-cap reliability tiers for technical signals.

Thin, easily moved order books make oscillator readings on small caps far
noisier than on large caps. The tier travels with each analysis so the
consumer can discount or hide signals on micro caps.
"""

from decimal import Decimal

from screener.signals.models import ReliabilityTier

#: Lower market-cap bound (exclusive, USD) for each tier, largest first.
_TIER_FLOORS: tuple[tuple[Decimal, ReliabilityTier], ...] = (
    (Decimal("10000000000"), ReliabilityTier.HIGHLY_RELIABLE),  # > $10B
    (Decimal("1000000000"), ReliabilityTier.RELIABLE),  # $1B - $10B
    (Decimal("200000000"), ReliabilityTier.MODERATELY_RELIABLE),  # $200M - $1B
    (Decimal("50000000"), ReliabilityTier.UNRELIABLE),  # $50M - $200M
)

#: Human-readable confidence per tier.
TIER_CONFIDENCE: dict[ReliabilityTier, str] = {
    ReliabilityTier.HIGHLY_RELIABLE: "HIGH",
    ReliabilityTier.RELIABLE: "GOOD",
    ReliabilityTier.MODERATELY_RELIABLE: "MODERATE",
    ReliabilityTier.UNRELIABLE: "LOW",
    ReliabilityTier.HIGHLY_UNRELIABLE: "VERY_LOW",
}


def classify_market_cap(market_cap: Decimal | None) -> ReliabilityTier | None:
    """Map a market capitalization to its reliability tier.

    Args:
        market_cap: Market capitalization in USD.

    Returns:
        The tier, or None when the market cap is unknown or non-positive.
    """
    if market_cap is None or market_cap <= Decimal("0"):
        return None

    for floor, tier in _TIER_FLOORS:
        if market_cap > floor:
            return tier
    return ReliabilityTier.HIGHLY_UNRELIABLE
