"""Relative Strength Index with Wilder smoothing.

Price changes come only from consecutive pairs of closes:

    gain_i = max(0, close_i - close_{i-1})
    loss_i = max(0, close_{i-1} - close_i)
    seed   = simple mean of the first ``period`` gains / losses
    avg_i  = (avg_{i-1} * (period - 1) + x_i) / period
    RSI    = 100 - 100 / (1 + avgGain / avgLoss)

The seed needs ``period + 1`` closes. With exactly ``period`` closes only
``period - 1`` changes exist; that reading averages them over ``period``
(the missing change counts as flat) so RSI is defined from ``period``
samples onward. Every entry of rsi_series equals rsi() of the closes up to
and including it.

Flat history (no gains, no losses) reads 50; gains without losses read 100.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

_ZERO = Decimal("0")
_FIFTY = Decimal("50")
_HUNDRED = Decimal("100")


def _rsi_from_averages(avg_gain: Decimal, avg_loss: Decimal) -> Decimal:
    if avg_loss == _ZERO:
        return _FIFTY if avg_gain == _ZERO else _HUNDRED
    rs = avg_gain / avg_loss
    return _HUNDRED - _HUNDRED / (Decimal("1") + rs)


def rsi_series(closes: list[Decimal], period: int = 14) -> list[Decimal | None]:
    """Compute the full RSI history aligned with ``closes``.

    Divergence and Stochastic RSI need the trailing RSI series rather than
    only the latest value.

    Args:
        closes: Close prices ordered oldest-first.
        period: RSI period (default 14).

    Returns:
        List the same length as ``closes``; None for the first
        ``period - 1`` entries (or everywhere if history is too short).
    """
    result: list[Decimal | None] = [None] * len(closes)
    if period < 1 or len(closes) < period:
        return result

    deltas = [closes[i] - closes[i - 1] for i in range(1, len(closes))]
    gains = [d if d > _ZERO else _ZERO for d in deltas]
    losses = [-d if d < _ZERO else _ZERO for d in deltas]

    divisor = Decimal(period)
    carry = Decimal(period - 1)

    # Exactly ``period`` closes: period - 1 deltas over a full window
    result[period - 1] = _rsi_from_averages(
        sum(gains[: period - 1], _ZERO) / divisor,
        sum(losses[: period - 1], _ZERO) / divisor,
    )
    if len(closes) == period:
        return result

    avg_gain = sum(gains[:period], _ZERO) / divisor
    avg_loss = sum(losses[:period], _ZERO) / divisor
    result[period] = _rsi_from_averages(avg_gain, avg_loss)

    # deltas[i - 1] is the change into closes[i]
    for i in range(period + 1, len(closes)):
        avg_gain = (avg_gain * carry + gains[i - 1]) / divisor
        avg_loss = (avg_loss * carry + losses[i - 1]) / divisor
        result[i] = _rsi_from_averages(avg_gain, avg_loss)

    return result


def rsi(closes: list[Decimal], period: int = 14) -> Decimal | None:
    """Latest RSI value in [0, 100], or None with fewer than ``period`` closes."""
    series = rsi_series(closes, period)
    return series[-1] if series else None
