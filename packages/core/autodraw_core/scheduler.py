"""Throttled, cancellable execution of draw commands."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable

from .artist import Command
from .logging_setup import get_logger


class SchedulerState(str, Enum):
    IDLE = "Idle"
    RUNNING = "Running"


@dataclass
class SchedulerReport:
    executed: int = 0
    abandoned: int = 0
    cancelled: bool = False
    duration_s: float = 0.0


class CommandScheduler:
    """Drains a FIFO of commands one at a time with a delay between them.

    Before each command the liveness predicate is consulted; once it reports
    false the remaining commands are dropped. A command that has started
    always runs to completion.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep) -> None:
        self._sleep = sleep
        self._pending: deque[Command] = deque()
        self._state = SchedulerState.IDLE
        self._events: list[dict[str, Any]] = []
        self._logger = get_logger("scheduler")

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> int:
        return len(self._pending)

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self._state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]

    def submit(self, commands: Iterable[Command]) -> None:
        self._pending = deque(commands)
        if self._state == SchedulerState.IDLE and self._pending:
            self._state = SchedulerState.RUNNING
        self._log_event("submit", pending=len(self._pending))

    def cancel(self) -> int:
        dropped = len(self._pending)
        self._pending.clear()
        self._state = SchedulerState.IDLE
        self._log_event("cancel", dropped=dropped)
        return dropped

    def start(self, delay_ms: int, is_live: Callable[[], bool]) -> SchedulerReport:
        """Drain the queue; a command that raises aborts the run and drops the rest."""
        report = SchedulerReport()
        start = time.perf_counter()
        delay_s = max(0, delay_ms) / 1000
        failed = False

        try:
            while True:
                if not self._pending:
                    self._state = SchedulerState.IDLE
                    break
                if not is_live():
                    report.cancelled = True
                    report.abandoned = self.cancel()
                    self._logger.info(
                        "surface inactive, abandoning %d commands",
                        report.abandoned,
                        extra={"event": "scheduler_abandoned"},
                    )
                    break

                self._state = SchedulerState.RUNNING
                command = self._pending.popleft()
                try:
                    command()
                except Exception:
                    failed = True
                    report.abandoned = self.cancel()
                    self._logger.exception(
                        "command %s failed, dropping %d commands",
                        command.kind,
                        report.abandoned,
                        extra={"event": "scheduler_command_failed"},
                    )
                    raise
                report.executed += 1
                self._sleep(delay_s)
        finally:
            self._state = SchedulerState.IDLE
            report.duration_s = time.perf_counter() - start
            self._log_event(
                "run_done",
                executed=report.executed,
                abandoned=report.abandoned,
                cancelled=report.cancelled,
                failed=failed,
            )
        return report
