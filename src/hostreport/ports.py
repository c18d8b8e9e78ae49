"""Abstract collaborators the reporter is wired against."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class HostIntrospection(ABC):
    """Synchronous accessors for OS-level host telemetry."""

    @abstractmethod
    def architecture(self) -> str: ...

    @abstractmethod
    def os_name(self) -> str: ...

    @abstractmethod
    def os_version(self) -> str: ...

    @abstractmethod
    def load_average(self) -> float:
        """1-minute system load average, or -1.0 if the platform has none."""

    @abstractmethod
    def memory_free_bytes(self) -> int: ...

    @abstractmethod
    def memory_total_bytes(self) -> int: ...

    @abstractmethod
    def swap_free_bytes(self) -> int: ...

    @abstractmethod
    def swap_total_bytes(self) -> int: ...


class NodeUpdater(ABC):
    """Sink that writes a serialized document to a coordination store node."""

    @abstractmethod
    def update(self, path: str, data: bytes) -> bool:
        """Write ``data`` at ``path``. Returns False if the store rejected it."""


NodeUpdaterFactory = Callable[[str], NodeUpdater]


class ScheduledTask(ABC):
    """Handle to a periodic schedule."""

    @abstractmethod
    def cancel(self) -> None: ...

    @property
    @abstractmethod
    def cancelled(self) -> bool: ...


class Scheduler(ABC):
    @abstractmethod
    def schedule_with_fixed_delay(
        self, fn: Callable[[], None], initial_delay: float, delay: float
    ) -> ScheduledTask:
        """Run ``fn`` after ``initial_delay``, then ``delay`` seconds after each completion."""

    @abstractmethod
    def shutdown(self) -> None: ...
