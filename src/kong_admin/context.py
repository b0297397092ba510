"""Per-call cancellation and deadline propagation."""

from __future__ import annotations

import threading
import time

from kong_admin.exceptions import KongCancelledError


class RequestContext:
    """Cancellation flag and optional deadline carried through SDK calls.

    A context may be shared between threads: ``cancel()`` can be called from
    any thread and is observed before the next request is dispatched
    (including between pages of a list-all walk).

    Example:
        >>> ctx = RequestContext(timeout=5.0)
        >>> client.services.list_all(ctx=ctx)
    """

    def __init__(self, timeout: float | None = None, deadline: float | None = None) -> None:
        """Initialize the context.

        Args:
            timeout: Seconds from now after which calls fail.
            deadline: Absolute ``time.monotonic()`` value after which calls fail.
                When both are given the earlier one wins.
        """
        self._cancelled = threading.Event()
        self._parent: RequestContext | None = None
        candidates = [] if deadline is None else [deadline]
        if timeout is not None:
            candidates.append(time.monotonic() + timeout)
        self.deadline: float | None = min(candidates) if candidates else None

    def cancel(self) -> None:
        """Cancel every call using this context (and its children)."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent.cancelled if self._parent is not None else False

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, endpoint: str | None = None) -> None:
        """Raise if the context is cancelled or past its deadline.

        Raises:
            KongCancelledError: If the call must not proceed.
        """
        if self.cancelled:
            raise KongCancelledError("Request cancelled", endpoint=endpoint)
        if self.expired():
            raise KongCancelledError("Request deadline exceeded", endpoint=endpoint)

    def child(self, timeout: float | None = None) -> RequestContext:
        """Derive a context cancelled with this one, optionally with a tighter timeout."""
        child = RequestContext(timeout=timeout, deadline=self.deadline)
        child._parent = self
        return child
