"""Price series and auxiliary market data models.

The SeriesBuffer is the only entry point for market data into the engine.
Validation happens once, at construction; every later stage can assume an
ordered, finite, positive price history.

CRITICAL: All prices and volumes use Decimal. Never use float for market values.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from screener.exceptions import MalformedSeriesError


def to_decimal(value: Any, field_name: str = "value") -> Decimal | None:
    """Convert a raw numeric value to Decimal, keeping None as None.

    Floats go through ``str`` first so 0.1 becomes Decimal("0.1") rather
    than its binary expansion.

    Raises:
        MalformedSeriesError: If the value cannot be parsed as a number.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise MalformedSeriesError(f"{field_name} must be numeric, got bool")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise MalformedSeriesError(f"{field_name} is not a number: {value!r}") from e


@dataclass(frozen=True)
class PricePoint:
    """A single time-indexed sample. Only close is mandatory."""

    timestamp_ms: int
    close: Decimal
    open: Decimal | None = None
    high: Decimal | None = None
    low: Decimal | None = None
    volume: Decimal | None = None


@dataclass(frozen=True)
class SeriesBuffer:
    """Ordered, immutable price history for one asset.

    Replaced wholesale on every refresh; never mutated in place.

    Raises:
        MalformedSeriesError: On duplicate or descending timestamps, NaN or
            infinite values, non-positive closes, or negative volumes.
    """

    asset_id: str
    points: tuple[PricePoint, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        self._validate()

    def _validate(self) -> None:
        previous_ts: int | None = None
        for index, point in enumerate(self.points):
            where = f"{self.asset_id}[{index}]"
            if previous_ts is not None and point.timestamp_ms <= previous_ts:
                raise MalformedSeriesError(
                    f"{where}: timestamp {point.timestamp_ms} is not after "
                    f"{previous_ts} (series must be strictly ascending)"
                )
            previous_ts = point.timestamp_ms

            for name in ("close", "open", "high", "low", "volume"):
                value = getattr(point, name)
                if value is None:
                    continue
                if not isinstance(value, Decimal):
                    raise MalformedSeriesError(
                        f"{where}: {name} must be Decimal, got {type(value).__name__}"
                    )
                if not value.is_finite():
                    raise MalformedSeriesError(f"{where}: {name} is {value}")

            if point.close <= 0:
                raise MalformedSeriesError(
                    f"{where}: close must be positive, got {point.close}"
                )
            if point.volume is not None and point.volume < 0:
                raise MalformedSeriesError(
                    f"{where}: volume must be non-negative, got {point.volume}"
                )

    @classmethod
    def from_records(
        cls, asset_id: str, records: Iterable[Mapping[str, Any]]
    ) -> SeriesBuffer:
        """Build a buffer from loosely-typed mappings.

        Each record needs ``timestamp_ms`` (or ``timestamp``) and ``close``;
        ``open``, ``high``, ``low`` and ``volume`` are optional. Numbers are
        converted to Decimal.

        Args:
            asset_id: Asset identifier (e.g., "bitcoin").
            records: Samples ordered oldest-first.

        Returns:
            A validated SeriesBuffer.
        """
        points: list[PricePoint] = []
        for index, record in enumerate(records):
            ts = record.get("timestamp_ms", record.get("timestamp"))
            if ts is None:
                raise MalformedSeriesError(f"{asset_id}[{index}]: missing timestamp")
            try:
                timestamp_ms = int(ts)
            except (TypeError, ValueError, OverflowError) as e:
                raise MalformedSeriesError(
                    f"{asset_id}[{index}]: timestamp is not an integer: {ts!r}"
                ) from e
            close = to_decimal(record.get("close"), "close")
            if close is None:
                raise MalformedSeriesError(f"{asset_id}[{index}]: missing close")
            points.append(
                PricePoint(
                    timestamp_ms=timestamp_ms,
                    close=close,
                    open=to_decimal(record.get("open"), "open"),
                    high=to_decimal(record.get("high"), "high"),
                    low=to_decimal(record.get("low"), "low"),
                    volume=to_decimal(record.get("volume"), "volume"),
                )
            )
        return cls(asset_id=asset_id, points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    @property
    def last_close(self) -> Decimal | None:
        """Most recent close, or None for an empty buffer."""
        return self.points[-1].close if self.points else None

    def closes(self) -> list[Decimal]:
        return [p.close for p in self.points]

    def volumes(self) -> list[Decimal]:
        """Present volumes in time order (samples without volume are skipped)."""
        return [p.volume for p in self.points if p.volume is not None]


@dataclass(frozen=True)
class AssetContext:
    """Auxiliary per-asset inputs supplied alongside the price series.

    Every field is optional; a missing field only disables the signals that
    depend on it.
    """

    funding_rate: Decimal | None = None  # Per-period rate, sign = crowd bias
    ath: Decimal | None = None
    atl: Decimal | None = None
    volume_24h: Decimal | None = None
    average_volume: Decimal | None = None  # Trailing average daily volume
    market_cap: Decimal | None = None

    def __post_init__(self) -> None:
        for name in (
            "funding_rate",
            "ath",
            "atl",
            "volume_24h",
            "average_volume",
            "market_cap",
        ):
            value = to_decimal(getattr(self, name), name)
            # Non-finite auxiliary values count as missing data
            if value is not None and not value.is_finite():
                value = None
            object.__setattr__(self, name, value)

    def distance_from_ath(self, price: Decimal | None) -> Decimal | None:
        """Fraction the price sits below the all-time high (0 at the ATH)."""
        if price is None or self.ath is None or self.ath <= 0:
            return None
        return (self.ath - price) / self.ath

    def distance_from_atl(self, price: Decimal | None) -> Decimal | None:
        """Fraction the price sits above the all-time low (0 at the ATL)."""
        if price is None or self.atl is None or self.atl <= 0:
            return None
        return (price - self.atl) / self.atl

    @property
    def volume_to_mcap(self) -> Decimal | None:
        if self.volume_24h is None or self.market_cap is None or self.market_cap <= 0:
            return None
        return self.volume_24h / self.market_cap

    @property
    def reported_volume_ratio(self) -> Decimal | None:
        """Current 24h volume over the trailing average, when both are known."""
        if (
            self.volume_24h is None
            or self.average_volume is None
            or self.average_volume <= 0
        ):
            return None
        return self.volume_24h / self.average_volume
