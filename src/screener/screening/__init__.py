"""Filtering, sorting and pagination over published engine output."""

from screener.screening.filters import (
    MarketSummary,
    Page,
    RsiZone,
    SortKey,
    filter_by_min_volume,
    filter_by_rsi_zone,
    filter_by_signals,
    paginate,
    parse_signal_names,
    rsi_zone,
    screen,
    sort_analyses,
    summarize_market,
)

__all__ = [
    "MarketSummary",
    "Page",
    "RsiZone",
    "SortKey",
    "filter_by_min_volume",
    "filter_by_rsi_zone",
    "filter_by_signals",
    "paginate",
    "parse_signal_names",
    "rsi_zone",
    "screen",
    "sort_analyses",
    "summarize_market",
]
