"""Unit tests for RequestContext."""

from __future__ import annotations

import time

import pytest

from kong_admin.context import RequestContext
from kong_admin.exceptions import KongCancelledError


class TestRequestContext:
    """Tests for cancellation and deadlines."""

    @pytest.mark.unit
    def test_unbounded_context(self) -> None:
        """A bare context should never expire."""
        ctx = RequestContext()

        assert ctx.remaining() is None
        assert not ctx.expired()
        ctx.check()

    @pytest.mark.unit
    def test_cancel(self) -> None:
        """check should raise once the context is cancelled."""
        ctx = RequestContext()
        ctx.cancel()

        assert ctx.cancelled
        with pytest.raises(KongCancelledError, match="cancelled"):
            ctx.check("/services")

    @pytest.mark.unit
    def test_past_deadline(self) -> None:
        """check should raise once the deadline has passed."""
        ctx = RequestContext(deadline=time.monotonic() - 1)

        assert ctx.remaining() == 0.0
        with pytest.raises(KongCancelledError, match="deadline exceeded"):
            ctx.check()

    @pytest.mark.unit
    def test_timeout_sets_deadline(self) -> None:
        """A timeout should translate into a deadline in the future."""
        ctx = RequestContext(timeout=30)

        remaining = ctx.remaining()
        assert remaining is not None
        assert 0 < remaining <= 30

    @pytest.mark.unit
    def test_earlier_of_timeout_and_deadline_wins(self) -> None:
        """When both are given the earlier bound should apply."""
        deadline = time.monotonic() + 5
        ctx = RequestContext(timeout=60, deadline=deadline)

        assert ctx.deadline == deadline

    @pytest.mark.unit
    def test_child_follows_parent_cancellation(self) -> None:
        """Cancelling a parent should cancel its children."""
        parent = RequestContext()
        child = parent.child(timeout=10)
        parent.cancel()

        assert child.cancelled
        with pytest.raises(KongCancelledError):
            child.check()

    @pytest.mark.unit
    def test_child_keeps_parent_deadline(self) -> None:
        """A child cannot outlive its parent."""
        parent = RequestContext(timeout=1)
        child = parent.child(timeout=60)

        assert child.deadline == parent.deadline
