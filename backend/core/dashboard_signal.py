"""
Dashboard refresh signal.

A process-local revision counter bumped by every mutation that changes a
dashboard figure (invoices, transactions, attendance). Clients poll the
revision and refetch the summary only when it moves; in-process listeners
are called synchronously on each bump.

Dependencies: threading (stdlib)
System role: Change notification between write paths and the dashboard
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalSnapshot:
    revision: int
    changed_at: datetime | None
    reason: str | None


Listener = Callable[[SignalSnapshot], None]


class DashboardSignal:
    """Monotonic change counter with synchronous listeners."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._revision = 0
        self._changed_at: datetime | None = None
        self._reason: str | None = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener; returns a callable that unsubscribes it.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def notify(self, reason: str) -> SignalSnapshot:
        """
        Bump the revision and fan out to listeners.

        Listener failures are logged and do not abort the caller's write.

        Args:
            reason: Short tag of what changed, e.g. "invoice.paid"

        Returns:
            SignalSnapshot: State after the bump
        """
        with self._lock:
            self._revision += 1
            self._changed_at = datetime.now(timezone.utc)
            self._reason = reason
            snapshot = SignalSnapshot(self._revision, self._changed_at, reason)
            listeners = list(self._listeners)

        logger.debug("Dashboard refresh signaled", extra={"revision": snapshot.revision, "reason": reason})

        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.warning(
                    "Dashboard listener failed",
                    extra={"reason": reason, "error": str(e)},
                )
        return snapshot

    def snapshot(self) -> SignalSnapshot:
        with self._lock:
            return SignalSnapshot(self._revision, self._changed_at, self._reason)


dashboard_signal = DashboardSignal()
