"""Consumer-side screening over engine output.

Filters, sorts and paginates AssetAnalysis records the way the dashboard
screens them. Nothing here recomputes an indicator; every predicate reads
the published snapshot, signal map and score.

Filter order mirrors the screen: liquidity, RSI zone, required signals,
then sort and paginate.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from screener.config import ScreenerSettings
from screener.exceptions import InvalidPageError, UnknownSignalError
from screener.signals.models import AssetAnalysis, ScoreLabel, SignalName

T = TypeVar("T")


class RsiZone(str, Enum):
    """RSI bands used for screening; boundaries are [low, high)."""

    EXTREME = "extreme"  # < 20
    OVERSOLD = "oversold"  # 20 - 30
    NEUTRAL = "neutral"  # 30 - 70
    OVERBOUGHT = "overbought"  # >= 70


_ZONE_BOUNDS: dict[RsiZone, tuple[Decimal | None, Decimal | None]] = {
    RsiZone.EXTREME: (None, Decimal("20")),
    RsiZone.OVERSOLD: (Decimal("20"), Decimal("30")),
    RsiZone.NEUTRAL: (Decimal("30"), Decimal("70")),
    RsiZone.OVERBOUGHT: (Decimal("70"), None),
}


class SortKey(str, Enum):
    RSI = "rsi"
    SCORE = "score"
    VOLUME_RATIO = "volume_ratio"
    PRICE = "price"


_SORT_VALUES: dict[SortKey, Callable[[AssetAnalysis], Decimal | int | None]] = {
    SortKey.RSI: lambda a: a.snapshot.rsi14,
    SortKey.SCORE: lambda a: a.score.score,
    SortKey.VOLUME_RATIO: lambda a: a.snapshot.volume_ratio,
    SortKey.PRICE: lambda a: a.snapshot.price,
}


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the totals needed to render a pager."""

    items: list[T]
    page: int
    per_page: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class MarketSummary:
    """Market-wide RSI distribution and label counts for a refresh."""

    extreme: int
    oversold: int
    neutral: int
    overbought: int
    with_rsi: int
    average_rsi: Decimal
    labels: dict[ScoreLabel, int]


def rsi_zone(rsi: Decimal | None) -> RsiZone | None:
    """Zone containing ``rsi``, or None when RSI is undefined."""
    if rsi is None:
        return None
    for zone, (low, high) in _ZONE_BOUNDS.items():
        if (low is None or rsi >= low) and (high is None or rsi < high):
            return zone
    return None


def parse_signal_names(names: Iterable[str]) -> list[SignalName]:
    """Map consumer-facing keys (e.g. "belowBB") to SignalName members.

    Raises:
        UnknownSignalError: If a key is outside the closed signal set.
    """
    parsed: list[SignalName] = []
    for raw in names:
        try:
            parsed.append(SignalName(raw))
        except ValueError as e:
            raise UnknownSignalError(f"unknown signal {raw!r}") from e
    return parsed


def filter_by_signals(
    analyses: Iterable[AssetAnalysis], required: Iterable[SignalName]
) -> list[AssetAnalysis]:
    """Keep analyses where every required signal is True (AND semantics)."""
    required = list(required)
    return [a for a in analyses if all(a.signals.get(name) for name in required)]


def filter_by_rsi_zone(
    analyses: Iterable[AssetAnalysis], zone: RsiZone
) -> list[AssetAnalysis]:
    """Keep analyses whose RSI falls in ``zone``; undefined RSI never matches."""
    return [a for a in analyses if rsi_zone(a.snapshot.rsi14) is zone]


def filter_by_min_volume(
    analyses: Iterable[AssetAnalysis], min_volume_24h: Decimal
) -> list[AssetAnalysis]:
    """Drop illiquid assets. Assets with unknown volume are dropped too."""
    return [
        a
        for a in analyses
        if a.snapshot.volume_24h is not None and a.snapshot.volume_24h >= min_volume_24h
    ]


def sort_analyses(
    analyses: Iterable[AssetAnalysis],
    key: SortKey = SortKey.RSI,
    descending: bool = False,
) -> list[AssetAnalysis]:
    """Sort by one published field; None values always sort last.

    The sort is stable, so equal values keep their input order.
    """
    getter = _SORT_VALUES[key]
    items = list(analyses)
    present = [a for a in items if getter(a) is not None]
    absent = [a for a in items if getter(a) is None]
    present.sort(key=getter, reverse=descending)  # type: ignore[arg-type]
    return present + absent


def paginate(items: Sequence[T], page: int = 1, per_page: int = 50) -> Page[T]:
    """Slice one page out of ``items`` (pages are 1-based).

    A page past the end is returned empty rather than raising, so a stale
    page number after a refresh simply shows nothing.

    Raises:
        InvalidPageError: If ``page`` or ``per_page`` is below 1.
    """
    if page < 1:
        raise InvalidPageError(f"page must be >= 1, got {page}")
    if per_page < 1:
        raise InvalidPageError(f"per_page must be >= 1, got {per_page}")

    start = (page - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        per_page=per_page,
        total=len(items),
        total_pages=math.ceil(len(items) / per_page),
    )


def summarize_market(analyses: Iterable[AssetAnalysis]) -> MarketSummary:
    """Count assets per RSI zone and per score label.

    Average RSI falls back to 50 when no asset has a defined RSI.
    """
    items = list(analyses)
    zones = Counter(rsi_zone(a.snapshot.rsi14) for a in items)
    rsi_values = [a.snapshot.rsi14 for a in items if a.snapshot.rsi14 is not None]
    average = (
        sum(rsi_values, Decimal("0")) / Decimal(len(rsi_values))
        if rsi_values
        else Decimal("50")
    )
    return MarketSummary(
        extreme=zones[RsiZone.EXTREME],
        oversold=zones[RsiZone.OVERSOLD],
        neutral=zones[RsiZone.NEUTRAL],
        overbought=zones[RsiZone.OVERBOUGHT],
        with_rsi=len(rsi_values),
        average_rsi=average,
        labels=dict(Counter(a.score.label for a in items)),
    )


def screen(
    analyses: Iterable[AssetAnalysis],
    settings: ScreenerSettings,
    signals: Iterable[SignalName] = (),
    zone: RsiZone | None = None,
    sort_key: SortKey = SortKey.RSI,
    descending: bool = False,
    page: int = 1,
    include_low_volume: bool = False,
) -> Page[AssetAnalysis]:
    """Apply the full screen: liquidity, RSI zone, signals, sort, paginate.

    Args:
        analyses: Engine output for one refresh.
        settings: Liquidity floor and page size.
        signals: Signals that must all be active.
        zone: Optional RSI zone restriction.
        sort_key: Field to sort by (default RSI ascending, most oversold first).
        descending: Reverse the sort order.
        page: 1-based page number.
        include_low_volume: Skip the min_volume_24h floor.

    Returns:
        The requested page of matching analyses.
    """
    selected = list(analyses)
    if not include_low_volume:
        selected = filter_by_min_volume(selected, settings.min_volume_24h)
    if zone is not None:
        selected = filter_by_rsi_zone(selected, zone)
    selected = filter_by_signals(selected, signals)
    ordered = sort_analyses(selected, sort_key, descending)
    return paginate(ordered, page=page, per_page=settings.rows_per_page)
