"""Tests for MACD line, signal and histogram.

Tests verify:
- MACD is undefined until slow + signal closes exist
- Every published point satisfies histogram == line - signal
- Each point carries the preceding line/signal pair
"""

from decimal import Decimal

from screener.indicators import macd, macd_series


def _trending(n: int) -> list[Decimal]:
    """Rising closes with a small oscillation so line and signal differ."""
    return [Decimal(100 + i) + (Decimal("0.5") if i % 2 else Decimal("0")) for i in range(n)]


class TestMACD:
    def test_none_below_slow_plus_signal(self) -> None:
        assert macd(_trending(34)) is None

    def test_defined_at_slow_plus_signal(self) -> None:
        result = macd(_trending(35))
        assert result is not None
        assert result.prev_line is not None
        assert result.prev_signal is not None

    def test_histogram_identity(self) -> None:
        for point in macd_series(_trending(60)):
            assert point.histogram == point.line - point.signal

    def test_series_length(self) -> None:
        """40 closes -> 15 line values -> 7 points with a defined signal."""
        assert len(macd_series(_trending(40))) == 7

    def test_prev_links_previous_point(self) -> None:
        points = macd_series(_trending(45))
        assert points[0].prev_line is None
        assert points[0].prev_histogram is None
        for earlier, later in zip(points, points[1:]):
            assert later.prev_line == earlier.line
            assert later.prev_signal == earlier.signal
            assert later.prev_histogram == earlier.histogram

    def test_uptrend_line_positive(self) -> None:
        result = macd(_trending(60))
        assert result is not None
        assert result.line > Decimal("0")

    def test_flat_history_is_near_zero(self) -> None:
        result = macd([Decimal("10")] * 40)
        assert result is not None
        assert abs(result.line) < Decimal("1e-20")
        assert abs(result.histogram) < Decimal("1e-20")
