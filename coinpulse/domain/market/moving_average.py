"""
Domain service: Moving-average crossover signal.

Pure business logic. No framework imports. No IO. No side effects.

Compares the mean of the most recent ``short_window`` prices with the
mean of the most recent ``long_window`` prices:
    - short > long  → Buy
    - short < long  → Sell
    - otherwise     → Hold
"""

from decimal import Decimal
from typing import Sequence

from coinpulse.domain.market.entities import MovingAverageSignal, Signal

ZERO = Decimal("0")


def moving_average(prices: Sequence[Decimal], window: int) -> Decimal:
    """Return the mean of the last ``window`` prices.

    A series shorter than the window averages to zero rather than to the
    mean of what is available.
    """
    if window <= 0 or len(prices) < window:
        return ZERO
    recent = prices[-window:]
    return sum(recent, ZERO) / window


def classify(short_ma: Decimal, long_ma: Decimal) -> Signal:
    """Map a short/long moving-average pair to a signal."""
    if short_ma > long_ma:
        return Signal.BUY
    if short_ma < long_ma:
        return Signal.SELL
    return Signal.HOLD


def predict_signal(
    prices: Sequence[Decimal],
    short_window: int,
    long_window: int,
) -> MovingAverageSignal:
    """Compute both averages, the resulting signal and its rationale.

    Args:
        prices: Price series ordered oldest to newest.
        short_window: Number of trailing points in the short average.
        long_window: Number of trailing points in the long average.

    Returns:
        The averages, the signal and a human-readable rationale.
    """
    short_ma = moving_average(prices, short_window)
    long_ma = moving_average(prices, long_window)
    rationale = (
        f"Short-term MA ({short_window}-day): {short_ma:.2f}, "
        f"Long-term MA ({long_window}-day): {long_ma:.2f}. "
        "Prediction is based on moving averages."
    )
    return MovingAverageSignal(
        short_ma=short_ma,
        long_ma=long_ma,
        signal=classify(short_ma, long_ma),
        rationale=rationale,
    )
