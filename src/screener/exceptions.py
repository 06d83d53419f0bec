"""Custom exceptions for the oversold screener engine.

Insufficient history and missing auxiliary data never raise: indicators
degrade to None and signals to False. Only malformed input and invalid
consumer requests are errors.
"""


class ScreenerError(Exception):
    """Base exception for all screener errors."""


class MalformedSeriesError(ScreenerError):
    """Raised when a price series fails validation at construction time."""


class UnknownSignalError(ScreenerError):
    """Raised when a signal name outside the closed signal set is requested."""


class InvalidPageError(ScreenerError):
    """Raised when pagination arguments are out of range."""


class DuplicateAssetError(ScreenerError):
    """Raised when one refresh batch contains the same asset twice."""
