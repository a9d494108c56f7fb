"""
tests/test_moving_averages.py
──────────────────────────────
Unit tests for SMA / EMA series and crossover signals.
"""

import pytest

from segment_tree import InvalidInput, RangeTree
from series_analytics.moving_averages import (
    CrossoverSignal,
    crossover_signals,
    exponential_moving_average,
    simple_moving_average,
)


class TestSimpleMovingAverage:
    def test_window_truncates_at_first_day(self, tree) -> None:
        sma = simple_moving_average(tree, 3)
        assert sma == pytest.approx([100, 110, 310 / 3, 120, 440 / 3, 430 / 3])

    def test_window_of_one_is_the_raw_series(self, tree, sample_prices) -> None:
        assert simple_moving_average(tree, 1) == sample_prices

    def test_window_longer_than_series_is_cumulative_mean(self, tree) -> None:
        sma = simple_moving_average(tree, 50)
        assert sma[-1] == pytest.approx(740 / 6)
        assert len(sma) == 6

    def test_reflects_updates(self, tree) -> None:
        tree.update(0, 0)
        assert simple_moving_average(tree, 2)[1] == pytest.approx(60)

    @pytest.mark.parametrize("window", [0, -3])
    def test_non_positive_window(self, tree, window) -> None:
        with pytest.raises(InvalidInput):
            simple_moving_average(tree, window)


class TestExponentialMovingAverage:
    def test_recurrence(self, tree) -> None:
        # window 3 → k = 0.5
        ema = exponential_moving_average(tree, 3)
        assert ema == pytest.approx([100, 110, 100, 125, 162.5, 121.25])

    def test_seeded_with_first_price(self, tree) -> None:
        assert exponential_moving_average(tree, 10)[0] == 100

    def test_window_of_one_tracks_prices(self, tree, sample_prices) -> None:
        assert exponential_moving_average(tree, 1) == pytest.approx(sample_prices)

    def test_matches_manual_recurrence(self) -> None:
        prices = [10.0, 11.5, 9.25, 14.0, 13.0, 15.5, 12.75]
        k = 2 / (4 + 1)
        expected = [prices[0]]
        for p in prices[1:]:
            expected.append(p * k + expected[-1] * (1 - k))
        assert exponential_moving_average(RangeTree(prices), 4) == pytest.approx(expected)

    @pytest.mark.parametrize("window", [0, -1])
    def test_non_positive_window(self, tree, window) -> None:
        with pytest.raises(InvalidInput):
            exponential_moving_average(tree, window)


class TestCrossoverSignals:
    def test_buy_then_sell(self) -> None:
        # window 3: SMA rises through EMA on day 5, falls through it on day 7
        tree = RangeTree([10, 10, 10, 20, 30, 5, 5, 50])
        signals = crossover_signals(tree, 3)
        assert [(s.index, s.kind) for s in signals] == [(5, "buy"), (7, "sell")]
        buy = signals[0]
        assert buy.price == 5
        assert buy.sma == pytest.approx(55 / 3)
        assert buy.ema == pytest.approx(13.75)

    def test_flat_series_has_no_signals(self) -> None:
        assert crossover_signals(RangeTree([7, 7, 7, 7]), 2) == []

    def test_single_day_series(self) -> None:
        assert crossover_signals(RangeTree([7]), 3) == []

    def test_signals_are_immutable_records(self) -> None:
        signal = CrossoverSignal(index=1, kind="buy", price=1.0, sma=1.0, ema=1.0)
        with pytest.raises(AttributeError):
            signal.kind = "sell"

    def test_non_positive_window(self, tree) -> None:
        with pytest.raises(InvalidInput):
            crossover_signals(tree, 0)
