from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make backoff waits instantaneous.

    The mock records the waits in seconds, so a 100ms backoff appears as
    ``call(0.1)``.
    """
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_report() -> Mock:
    """Create a mock reporter for testing retry reports."""
    return Mock()
