"""Unit tests for the opt-in transport retry decorator."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from kong_admin.exceptions import (
    KongCancelledError,
    KongConnectionError,
    KongNotFoundError,
    KongServerError,
)
from kong_admin.retry import transport_retry


@pytest.fixture(autouse=True)
def no_sleep(mocker: Any) -> None:
    """Skip the backoff delays."""
    mocker.patch("time.sleep")


class TestTransportRetry:
    """Tests for transport_retry."""

    @pytest.mark.unit
    def test_retries_connection_errors(self) -> None:
        """Transport failures should be retried until a call succeeds."""
        call = MagicMock(side_effect=[KongConnectionError(), KongConnectionError(), "ok"])

        result = transport_retry(attempts=3)(call)()

        assert result == "ok"
        assert call.call_count == 3

    @pytest.mark.unit
    def test_gives_up_after_attempts(self) -> None:
        """The last transport error should be re-raised."""
        call = MagicMock(side_effect=KongConnectionError("still down"))

        with pytest.raises(KongConnectionError, match="still down"):
            transport_retry(attempts=2)(call)()

        assert call.call_count == 2

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [
            KongCancelledError(),
            KongNotFoundError(),
            KongServerError("boom", status_code=500),
        ],
    )
    def test_other_errors_not_retried(self, error: Exception) -> None:
        """Cancellation and HTTP errors should propagate immediately."""
        call = MagicMock(side_effect=error)

        with pytest.raises(type(error)):
            transport_retry(attempts=5)(call)()

        assert call.call_count == 1

    @pytest.mark.unit
    def test_invalid_attempts(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValueError, match="attempts"):
            transport_retry(attempts=0)
