r"""Unit tests for PowerBackoff strategy."""

from __future__ import annotations

import math

import pytest

from apromise.backoff import PowerBackoff
from apromise.exceptions import InvalidArgumentError


def test_power_backoff_default_values() -> None:
    """Test power backoff with default values."""
    backoff = PowerBackoff()
    assert backoff.base == 100
    assert backoff.exponent == 1.1
    assert backoff.max_delay is None
    assert backoff.calculate(0) == 100.0


def test_power_backoff_default_ramp() -> None:
    """Test the default ramp grows super-exponentially."""
    backoff = PowerBackoff()
    assert backoff.calculate(0) == 100.0  # 100 ** 1
    assert backoff.calculate(1) == pytest.approx(158.489, rel=1e-4)  # 100 ** 1.1
    assert backoff.calculate(2) == pytest.approx(263.027, rel=1e-4)  # 100 ** 1.21
    assert backoff.calculate(3) == pytest.approx(459.198, rel=1e-4)  # 100 ** 1.331


def test_power_backoff_custom_values() -> None:
    """Test power backoff with integer base and exponent."""
    backoff = PowerBackoff(base=2, exponent=2)
    assert backoff.calculate(0) == 2.0  # 2 ** 1
    assert backoff.calculate(1) == 4.0  # 2 ** 2
    assert backoff.calculate(2) == 16.0  # 2 ** 4
    assert backoff.calculate(3) == 256.0  # 2 ** 8


def test_power_backoff_exponent_one_is_constant() -> None:
    """Test an exponent of 1 gives the same delay for every attempt."""
    backoff = PowerBackoff(base=250, exponent=1)
    assert [backoff.calculate(attempt) for attempt in range(4)] == [250.0] * 4


def test_power_backoff_zero_base() -> None:
    """Test a zero base disables the wait."""
    backoff = PowerBackoff(base=0)
    assert backoff.calculate(0) == 0.0
    assert backoff.calculate(5) == 0.0


def test_power_backoff_with_max_delay() -> None:
    """Test power backoff with max_delay cap."""
    backoff = PowerBackoff(base=2, exponent=2, max_delay=100.0)
    assert backoff.calculate(2) == 16.0
    assert backoff.calculate(3) == 100.0  # Would be 256.0, but capped


def test_power_backoff_overflow() -> None:
    """Test delays too large for a float are infinite."""
    assert PowerBackoff().calculate(200) == math.inf


def test_power_backoff_overflow_with_max_delay() -> None:
    """Test the cap applies to delays too large for a float."""
    assert PowerBackoff(max_delay=5000.0).calculate(200) == 5000.0


def test_power_backoff_invalid_base() -> None:
    """Test that negative base raises ValueError."""
    with pytest.raises(ValueError, match=r"base must be non-negative"):
        PowerBackoff(base=-1)


def test_power_backoff_invalid_exponent() -> None:
    """Test that negative exponent raises InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError, match=r"exponent must be non-negative"):
        PowerBackoff(exponent=-0.5)


def test_power_backoff_invalid_max_delay() -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        PowerBackoff(max_delay=0)
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        PowerBackoff(max_delay=-5.0)


def test_power_backoff_repr() -> None:
    """Test the representation of the strategy."""
    assert repr(PowerBackoff()) == "PowerBackoff(base=100, exponent=1.1, max_delay=None)"
