r"""Unit tests for the exceptions of the library."""

from __future__ import annotations

import pytest

from apromise.exceptions import (
    ApromiseError,
    CallbackError,
    InvalidArgumentError,
    TimeoutExceededError,
)

##########################################
#     Tests for InvalidArgumentError     #
##########################################


def test_invalid_argument_error_hierarchy() -> None:
    """Test InvalidArgumentError can be caught as TypeError or
    ValueError."""
    error = InvalidArgumentError("bad")
    assert isinstance(error, ApromiseError)
    assert isinstance(error, TypeError)
    assert isinstance(error, ValueError)


def test_invalid_argument_error_message() -> None:
    """Test the message of InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError, match=r"^The first argument must be awaitable$"):
        raise InvalidArgumentError("The first argument must be awaitable")


##########################################
#     Tests for TimeoutExceededError     #
##########################################


def test_timeout_exceeded_error_message() -> None:
    """Test the message of TimeoutExceededError."""
    assert str(TimeoutExceededError(200)) == "Timeout of 200ms exceeded"


def test_timeout_exceeded_error_attributes() -> None:
    """Test the attributes of TimeoutExceededError."""
    original = ValueError("late")
    error = TimeoutExceededError(timeout=200, elapsed=250.5, original=original)
    assert error.timeout == 200
    assert error.elapsed == 250.5
    assert error.original is original


def test_timeout_exceeded_error_defaults() -> None:
    """Test the default attributes of TimeoutExceededError."""
    error = TimeoutExceededError(100)
    assert error.elapsed is None
    assert error.original is None


def test_timeout_exceeded_error_hierarchy() -> None:
    """Test TimeoutExceededError can be caught as TimeoutError."""
    error = TimeoutExceededError(100)
    assert isinstance(error, ApromiseError)
    assert isinstance(error, TimeoutError)


###################################
#     Tests for CallbackError     #
###################################


def test_callback_error_value() -> None:
    """Test CallbackError keeps the raw failure value."""
    error = CallbackError("ENOENT")
    assert error.value == "ENOENT"
    assert str(error) == "Callback failed with 'ENOENT'"


def test_callback_error_list_value() -> None:
    """Test CallbackError with the argument list of a callback."""
    error = CallbackError([None, 1, 2])
    assert error.value == [None, 1, 2]
    assert isinstance(error, ApromiseError)
