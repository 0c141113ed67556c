"""
Tests for the market domain layer.

Tests entities, domain services and errors in isolation.
No external dependencies or IO required.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from coinpulse.domain.market.accuracy import compute_accuracy
from coinpulse.domain.market.entities import (
    PortfolioValuation,
    PredictionRecord,
    PriceQuote,
    QuoteSnapshot,
    Signal,
)
from coinpulse.domain.market.errors import PredictionNotFoundError, ProviderError
from coinpulse.domain.market.moving_average import (
    classify,
    moving_average,
    predict_signal,
)
from coinpulse.domain.market.valuation import (
    ValuationMonitor,
    percentage_change,
    value_snapshot,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _d(values) -> list[Decimal]:
    return [Decimal(str(v)) for v in values]


def _snapshot(**prices) -> QuoteSnapshot:
    return QuoteSnapshot(
        quotes={
            s: PriceQuote(symbol=s, price=Decimal(str(p)), fetched_at=NOW)
            for s, p in prices.items()
        },
        vs_currency="usd",
        fetched_at=NOW,
    )


def _record(signal=Signal.BUY, actual=None, age_days=1.0) -> PredictionRecord:
    return PredictionRecord(
        symbol="BITCOIN",
        signal=signal,
        rationale="",
        short_ma=Decimal("0"),
        long_ma=Decimal("0"),
        prices=[],
        labels=[],
        predicted_at=NOW - timedelta(days=age_days),
        actual=actual,
    )


# =====================================================================
# Moving-average predictor
# =====================================================================


class TestMovingAverage:
    """Tests for the moving-average signal."""

    def test_rising_series_is_buy(self) -> None:
        result = predict_signal(_d(range(1, 11)), short_window=5, long_window=10)

        assert result.long_ma == Decimal("5.5")
        assert result.short_ma == Decimal("8")
        assert result.signal is Signal.BUY

    def test_falling_series_is_sell(self) -> None:
        result = predict_signal(_d(range(10, 0, -1)), short_window=5, long_window=10)

        assert result.short_ma == Decimal("3")
        assert result.signal is Signal.SELL

    @pytest.mark.parametrize("n", [10, 11, 25])
    def test_constant_series_is_hold(self, n: int) -> None:
        result = predict_signal(_d([42.5] * n), short_window=5, long_window=10)

        assert result.short_ma == result.long_ma == Decimal("42.5")
        assert result.signal is Signal.HOLD

    def test_short_series_averages_to_zero(self) -> None:
        assert moving_average(_d([1, 2, 3]), 5) == Decimal("0")

    def test_long_window_underfilled_gives_buy(self) -> None:
        # 7 points: the 5-point mean exists, the 10-point mean is zero
        result = predict_signal(_d([10] * 7), short_window=5, long_window=10)

        assert result.long_ma == Decimal("0")
        assert result.signal is Signal.BUY

    def test_both_windows_underfilled_is_hold(self) -> None:
        result = predict_signal(_d([1, 2]), short_window=5, long_window=10)

        assert result.short_ma == result.long_ma == Decimal("0")
        assert result.signal is Signal.HOLD

    def test_only_trailing_points_count(self) -> None:
        assert moving_average(_d([1000, 1, 1, 1]), 3) == Decimal("1")

    def test_rationale_embeds_rounded_averages(self) -> None:
        result = predict_signal(_d(range(1, 11)), short_window=5, long_window=10)

        assert result.rationale == (
            "Short-term MA (5-day): 8.00, Long-term MA (10-day): 5.50. "
            "Prediction is based on moving averages."
        )

    def test_classify(self) -> None:
        assert classify(Decimal("2"), Decimal("1")) is Signal.BUY
        assert classify(Decimal("1"), Decimal("2")) is Signal.SELL
        assert classify(Decimal("1"), Decimal("1")) is Signal.HOLD


# =====================================================================
# Valuation
# =====================================================================


class TestValuation:
    """Tests for portfolio valuation and the shared baseline."""

    def test_value_snapshot_sums_all_quotes(self) -> None:
        valuation = value_snapshot(_snapshot(bitcoin=100, ethereum=50.5))
        assert valuation.value == Decimal("150.5")

    def test_percentage_change_without_baseline_is_zero(self) -> None:
        assert percentage_change(Decimal("500"), None) == 0

    def test_percentage_change_with_zero_baseline_is_zero(self) -> None:
        assert percentage_change(Decimal("500"), Decimal("0")) == 0

    def test_first_observation_never_notifies(self) -> None:
        monitor = ValuationMonitor(threshold_percent=Decimal("5"))

        change = monitor.observe(PortfolioValuation(value=Decimal("500")))

        assert change.change_percent == 0
        assert change.should_notify is False
        assert monitor.previous.value == Decimal("500")

    def test_five_percent_drop_notifies(self) -> None:
        monitor = ValuationMonitor(threshold_percent=Decimal("5"))
        monitor.observe(PortfolioValuation(value=Decimal("100")))

        change = monitor.observe(PortfolioValuation(value=Decimal("95")))

        assert change.change_percent == Decimal("-5")
        assert change.should_notify is True
        assert "-5.00%" in change.notification_text
        assert "$95.00" in change.notification_text

    def test_small_move_does_not_notify(self) -> None:
        monitor = ValuationMonitor(threshold_percent=Decimal("5"))
        monitor.observe(PortfolioValuation(value=Decimal("100")))

        change = monitor.observe(PortfolioValuation(value=Decimal("104.99")))

        assert change.should_notify is False

    def test_rise_notifies(self) -> None:
        monitor = ValuationMonitor(threshold_percent=5.0)
        monitor.observe(PortfolioValuation(value=Decimal("200")))

        change = monitor.observe(PortfolioValuation(value=Decimal("220")))

        assert change.should_notify is True
        assert change.notification_text == "Portfolio value changed by 10.00% to $220.00."

    def test_baseline_overwritten_on_every_observation(self) -> None:
        monitor = ValuationMonitor()
        monitor.observe(PortfolioValuation(value=Decimal("100")))
        monitor.observe(PortfolioValuation(value=Decimal("103")))

        # compared against 103, not the first 100
        change = monitor.observe(PortfolioValuation(value=Decimal("106")))

        assert change.should_notify is False
        assert monitor.previous.value == Decimal("106")


# =====================================================================
# Accuracy
# =====================================================================


class TestAccuracy:
    """Tests for the rolling accuracy roll-up."""

    def test_empty_ledger(self) -> None:
        report = compute_accuracy([], window_days=7, now=NOW)
        assert (report.accuracy, report.total, report.correct) == (0, 0, 0)

    def test_unresolved_records_are_ignored(self) -> None:
        report = compute_accuracy([_record(), _record()], window_days=7, now=NOW)
        assert report.total == 0
        assert report.accuracy == 0

    def test_records_outside_window_are_ignored(self) -> None:
        records = [
            _record(actual="Buy", age_days=1),
            _record(actual="Sell", age_days=8),
        ]

        report = compute_accuracy(records, window_days=7, now=NOW)

        assert report.total == 1
        assert report.correct == 1
        assert report.accuracy == 100.0

    def test_exact_match_only(self) -> None:
        records = [
            _record(signal=Signal.BUY, actual="Buy"),
            _record(signal=Signal.BUY, actual="buy"),
            _record(signal=Signal.SELL, actual="Hold"),
        ]

        report = compute_accuracy(records, window_days=7, now=NOW)

        assert report.total == 3
        assert report.correct == 1
        assert report.accuracy == 33.33


# =====================================================================
# Entities & errors
# =====================================================================


class TestQuoteSnapshot:
    """Tests for the QuoteSnapshot entity."""

    def test_payload_uses_provider_shape(self) -> None:
        snapshot = _snapshot(bitcoin=64000.5)
        assert snapshot.to_payload() == {"bitcoin": {"usd": 64000.5}}

    def test_total_counts_missing_symbols_as_zero(self) -> None:
        snapshot = _snapshot(bitcoin=10)
        assert snapshot.total(["bitcoin", "unknowncoin", "bitcoin"]) == Decimal("20")


class TestDomainErrors:
    """Tests for domain error classes."""

    def test_provider_error_rate_limited(self) -> None:
        err = ProviderError("HTTP 429", status_code=429)
        assert err.rate_limited is True
        assert "HTTP 429" in err.message

    def test_provider_error_without_status(self) -> None:
        err = ProviderError("connection refused")
        assert err.rate_limited is False
        assert err.status_code is None

    def test_prediction_not_found_keeps_id(self) -> None:
        err = PredictionNotFoundError(999)
        assert err.prediction_id == 999
        assert "999" in err.message
