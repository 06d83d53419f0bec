"""Validated price series and auxiliary per-asset market inputs."""

from screener.series.models import AssetContext, PricePoint, SeriesBuffer, to_decimal

__all__ = ["AssetContext", "PricePoint", "SeriesBuffer", "to_decimal"]
