"""Volume ratio: the latest volume against its trailing average.

CRITICAL: All values use Decimal. Never use float for volumes.
"""

from decimal import Decimal

from screener.indicators.moving_average import sma


def volume_ratio(volumes: list[Decimal], period: int = 20) -> Decimal | None:
    """Compare the most recent volume with the average of the ``period`` before it.

    The current volume is excluded from its own baseline so a spike cannot
    dampen itself.

    Args:
        volumes: Volumes ordered oldest-first.
        period: Number of trailing volumes in the baseline (default 20).

    Returns:
        current / average, or None with fewer than ``period + 1`` volumes or
        a zero baseline.
    """
    if period < 1 or len(volumes) < period + 1:
        return None

    average = sma(volumes[:-1], period)
    if average is None or average == Decimal("0"):
        return None
    return volumes[-1] / average
