"""Periodic callbacks driven by a millisecond clock."""

from __future__ import annotations

from collections.abc import Callable, Iterator

__all__ = ["TimedEvent", "EventScheduler", "DEFAULT_CAPACITY"]

DEFAULT_CAPACITY = 10

Clock = Callable[[], int]


class TimedEvent:
    """A callback that runs at most once every ``period`` milliseconds."""

    def __init__(self, callback: Callable[[], object], period: int, clock: Clock) -> None:
        if period < 0:
            raise ValueError("period must not be negative")
        self.callback = callback
        self.period = period
        self._clock = clock
        self.next_execution = 0

    def try_exec(self) -> bool:
        """Run the callback if it is due; return whether it ran."""
        if self._clock() < self.next_execution and self.next_execution != 0:
            return False
        self.callback()
        self.next_execution = self._clock() + self.period
        return True


class EventScheduler:
    """A fixed-capacity list of timed events run in registration order."""

    def __init__(self, clock: Clock, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._clock = clock
        self.capacity = capacity
        self._events: list[TimedEvent] = []

    def register(self, callback: Callable[[], object], period: int) -> TimedEvent:
        """Add a callback to run every ``period`` milliseconds."""
        if len(self._events) >= self.capacity:
            raise OverflowError(f"no room for more than {self.capacity} timed events")
        event = TimedEvent(callback, period, self._clock)
        self._events.append(event)
        return event

    def run_due(self) -> int:
        """Run every event that is due and return how many ran."""
        return sum(event.try_exec() for event in self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[TimedEvent]:
        return iter(self._events)