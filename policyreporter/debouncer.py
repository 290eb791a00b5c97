"""Debouncing of policy report lifecycle events.

Report updates that carry no results usually mean that the report is being
rewritten. Such an update is held back for a while and dropped if a
follow-up event for the same report arrives in the meantime.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from policyreporter.reports import PolicyReport


class EventType(Enum):
    """Kind of change that happened to a policy report."""

    ADDED = "add"
    UPDATED = "update"
    DELETED = "delete"


@dataclass(frozen=True)
class LifecycleEvent:
    """A change of a policy report."""

    type: EventType
    policy_report: PolicyReport


Publisher = Callable[[LifecycleEvent], None]


class Debouncer:
    """Forwards lifecycle events to a publisher, holding back empty updates.

    An update of a report without results is delayed by ``wait_duration``
    seconds. It is dropped when another event for the same report arrives
    first; otherwise it is published once the delay has passed.
    """

    def __init__(self, wait_duration: float, publish: Publisher) -> None:
        if wait_duration < 0:
            raise ValueError("wait_duration must not be negative")
        self._wait = wait_duration
        self._publish = publish
        self._events: dict[str, LifecycleEvent] = {}
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()
        self._closed = False

    def add(self, event: LifecycleEvent) -> None:
        """Handle an event, publishing it now, later, or not at all."""
        report_id = event.policy_report.id

        with self._lock:
            if self._closed:
                raise RuntimeError("debouncer is closed")
            pending = report_id in self._events

            if event.type is not EventType.UPDATED:
                if pending:
                    self._discard(report_id)
                publish_now = True
            elif not event.policy_report.results and not pending:
                self._events[report_id] = event
                timer = threading.Timer(self._wait, self._flush, args=(report_id,))
                timer.daemon = True
                self._timers[report_id] = timer
                timer.start()
                publish_now = False
            else:
                if event.policy_report.results and pending:
                    self._discard(report_id)
                publish_now = True

        if publish_now:
            self._publish(event)

    def _discard(self, report_id: str) -> None:
        self._events.pop(report_id, None)
        timer = self._timers.pop(report_id, None)
        if timer is not None:
            timer.cancel()

    def _flush(self, report_id: str) -> None:
        with self._lock:
            event = self._events.pop(report_id, None)
            self._timers.pop(report_id, None)
            if event is not None and not self._closed:
                self._publish(event)

    def close(self) -> None:
        """Drop all held back events and refuse further ones."""
        with self._lock:
            self._closed = True
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            self._events.clear()

    def __enter__(self) -> Debouncer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()