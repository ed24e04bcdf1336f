#!/usr/bin/env python3
"""Tests for calculation helper functions."""

import pytest

from carlog.calculations import (
    calc_economy,
    consecutive_pairs,
    gauge_to_percentage,
    liters_per_segment,
    mean,
)


class TestConsecutivePairs:
    """Tests for consecutive_pairs."""

    def test_pairs(self):
        assert consecutive_pairs([1, 2, 3]) == [(1, 2), (2, 3)]

    def test_too_short(self):
        assert consecutive_pairs([1]) == []
        assert consecutive_pairs([]) == []


class TestCalcEconomy:
    """Tests for calc_economy."""

    def test_distance_over_liters(self):
        assert calc_economy(300, 20) == 15.0

    def test_non_positive_inputs(self):
        assert calc_economy(0, 20) is None
        assert calc_economy(-10, 20) is None
        assert calc_economy(300, 0) is None


class TestGauge:
    """Tests for gauge conversions."""

    def test_full_tank(self):
        assert gauge_to_percentage(12) == 100.0

    def test_half_tank(self):
        assert gauge_to_percentage(6) == 50.0

    def test_liters_per_segment(self):
        assert liters_per_segment(48) == 4.0


class TestMean:
    def test_mean(self):
        assert mean([100, 110]) == 105.0

    def test_mean_of_generator(self):
        assert mean(x for x in (1, 2, 3)) == pytest.approx(2.0)

    def test_empty(self):
        assert mean([]) is None
