"""
Event sinks.

The sink durably records accepted events and lives outside this core.
These implementations cover in-process collection, logging, and handing
records to a worker pool so ``emit`` never waits on the real sink.
"""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple
import structlog


FieldValues = Sequence[Tuple[str, Any]]


@dataclass(frozen=True)
class EventRecord:
    """Fully resolved event as handed to a sink."""
    group_id: str
    version: int
    event_id: str
    fields: Tuple[Tuple[str, Any], ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "group_id": self.group_id,
            "version": self.version,
            "event_id": self.event_id,
            "fields": dict(self.fields),
        }

    def get(self, name: str, default: Any = None) -> Any:
        for field_name, value in self.fields:
            if field_name == name:
                return value
        return default


class EventSink(Protocol):
    """Receiver of resolved event records."""

    def record(self, group_id: str, version: int, event_id: str, fields: FieldValues) -> None:
        ...


class InMemorySink:
    """Collects records in a list. Used by tests and local debugging."""

    def __init__(self):
        self._records: List[EventRecord] = []
        self._lock = threading.Lock()

    def record(self, group_id: str, version: int, event_id: str, fields: FieldValues) -> None:
        record = EventRecord(group_id, version, event_id, tuple(fields))
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> List[EventRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class LoggingSink:
    """Writes every record as a structured log line."""

    def __init__(self, logger_name: str = "event-log"):
        self.logger = structlog.get_logger(logger_name)

    def record(self, group_id: str, version: int, event_id: str, fields: FieldValues) -> None:
        self.logger.info(
            "Event recorded",
            group_id=group_id,
            version=version,
            event_id=event_id,
            fields=dict(fields),
        )


class ExecutorSink:
    """
    Hands records to another sink on a worker pool.

    Failures of the inner sink are logged from a done callback and
    counted; they never reach the emitting thread.
    """

    def __init__(self, inner: EventSink, executor: Optional[Executor] = None, max_workers: int = 1):
        self.inner = inner
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="eventlog-sink",
        )
        self.logger = structlog.get_logger("executor-sink")
        self.failures = 0
        self._lock = threading.Lock()

    def record(self, group_id: str, version: int, event_id: str, fields: FieldValues) -> None:
        future = self.executor.submit(self.inner.record, group_id, version, event_id, tuple(fields))
        future.add_done_callback(
            lambda f: self._on_done(f, group_id, event_id)
        )

    def _on_done(self, future: Future, group_id: str, event_id: str) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is None:
            return

        with self._lock:
            self.failures += 1
        self.logger.error(
            "Sink failed to record event",
            group_id=group_id,
            event_id=event_id,
            error=str(error),
            exc_info=(type(error), error, error.__traceback__),
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool if this sink created it."""
        if self._owns_executor:
            self.executor.shutdown(wait=wait)
