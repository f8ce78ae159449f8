"""Tests for the piecewise-constant Mapping."""

import math

import numpy as np
import pytest

from decider_sim.core.mapping import Mapping


class TestConstruction:
    def test_empty(self):
        m = Mapping()
        assert m.is_empty
        assert len(m) == 0
        assert m.value_at(3.0) == 0.0

    def test_unsorted_keys_raise(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            Mapping([1.0, 0.5], [1.0, 2.0])

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="differ in length"):
            Mapping([0.0, 1.0], [1.0])

    def test_arrays_are_read_only(self):
        m = Mapping([0.0, 1.0], [2.0, 0.0])
        with pytest.raises(ValueError):
            m.values[0] = 5.0

    def test_does_not_alias_input(self):
        values = np.array([2.0, 0.0])
        m = Mapping([0.0, 1.0], values)
        values[0] = 9.0
        assert m.value_at(0.0) == 2.0

    def test_pulse_requires_positive_length(self):
        with pytest.raises(ValueError):
            Mapping.pulse(1.0, 5.0, 5.0)


class TestPointQuery:
    def test_step_semantics(self):
        m = Mapping.pulse(4.0, 2.0, 6.0)
        assert m.value_at(1.9) == 0.0
        assert m.value_at(2.0) == 4.0
        assert m.value_at(5.99) == 4.0
        assert m.value_at(6.0) == 0.0

    def test_default_before_first_key(self):
        m = Mapping([10.0], [1.0], default=0.5)
        assert m.value_at(0.0) == 0.5


class TestIntervalQuery:
    def test_empty_max_is_negative_infinity(self):
        assert Mapping().find_max(0.0, 10.0) == -math.inf

    def test_empty_min_is_infinity(self):
        assert Mapping().find_min(0.0, 10.0) == math.inf

    def test_max_includes_both_borders(self):
        m = Mapping([0.0, 5.0, 10.0], [1.0, 3.0, 7.0])
        assert m.find_max(0.0, 10.0) == 7.0
        assert m.find_max(0.0, 10.0, include_end=False) == 3.0

    def test_max_uses_value_at_start(self):
        m = Mapping([0.0, 5.0], [8.0, 1.0])
        assert m.find_max(3.0, 6.0) == 8.0

    def test_degenerate_window(self):
        m = Mapping.pulse(2.0, 0.0, 10.0)
        assert m.find_max(4.0, 4.0) == 2.0
        assert m.find_max(10.0, 10.0) == 0.0

    def test_min(self):
        m = Mapping([0.0, 2.0, 4.0], [5.0, 1.0, 3.0])
        assert m.find_min(0.0, 4.0) == 1.0
        assert m.find_min(0.0, 1.9) == 5.0

    def test_reversed_interval_raises(self):
        with pytest.raises(ValueError):
            Mapping.pulse(1.0, 0.0, 1.0).find_max(2.0, 1.0)


class TestCombination:
    def test_add_overlapping_pulses(self):
        a = Mapping.pulse(1.0, 0.0, 10.0)
        b = Mapping.pulse(2.0, 5.0, 15.0)
        total = a.add(b)
        assert list(total.times) == [0.0, 5.0, 10.0, 15.0]
        assert total.value_at(2.0) == pytest.approx(1.0)
        assert total.value_at(7.0) == pytest.approx(3.0)
        assert total.value_at(12.0) == pytest.approx(2.0)
        assert total.value_at(20.0) == 0.0

    def test_add_leaves_operands_untouched(self):
        a = Mapping.pulse(1.0, 0.0, 10.0)
        b = Mapping.pulse(2.0, 5.0, 15.0)
        a + b
        assert a == Mapping.pulse(1.0, 0.0, 10.0)
        assert b == Mapping.pulse(2.0, 5.0, 15.0)

    def test_add_empty_is_identity(self):
        a = Mapping.pulse(1.0, 0.0, 10.0)
        assert Mapping().add(a) == a

    def test_divide(self):
        signal = Mapping.pulse(8.0, 0.0, 10.0)
        noise = Mapping.constant(2.0, 0.0)
        ratio = signal.divide(noise, zero_fallback=1e12)
        assert ratio.value_at(5.0) == pytest.approx(4.0)
        assert ratio.value_at(10.0) == 0.0

    def test_divide_by_zero_uses_fallback(self):
        signal = Mapping.pulse(8.0, 0.0, 10.0)
        ratio = signal.divide(Mapping(), zero_fallback=123.0)
        assert ratio.value_at(5.0) == 123.0
        assert Mapping(default=8.0).divide(Mapping(), zero_fallback=123.0).default == 123.0

    def test_zero_over_zero_is_zero(self):
        signal = Mapping.pulse(8.0, 0.0, 10.0)
        ratio = signal.divide(Mapping(), zero_fallback=123.0)
        assert ratio.value_at(-1.0) == 0.0
        assert ratio.value_at(10.0) == 0.0
        assert ratio.default == 0.0
