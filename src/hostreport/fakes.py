"""Deterministic stand-ins for the reporter's collaborators."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from hostreport.commands import CommandRunner
from hostreport.errors import CommandExecutionError
from hostreport.ports import HostIntrospection, NodeUpdater, ScheduledTask, Scheduler


class ManualTask(ScheduledTask):
    def __init__(self, fn: Callable[[], None], next_run: float, delay: float) -> None:
        self.fn = fn
        self.next_run = next_run
        self.delay = delay
        self.run_starts: list[float] = []
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Fixed-delay scheduler driven by a manual clock.

    Nothing runs until ``advance()`` is called. Work inside a task can
    consume simulated time with ``sleep()``, so the next run is due
    ``delay`` seconds after that task's simulated completion. A task that
    raises is cancelled, matching ThreadScheduler.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.tasks: list[ManualTask] = []
        self.shut_down = False

    def schedule_with_fixed_delay(
        self, fn: Callable[[], None], initial_delay: float, delay: float
    ) -> ManualTask:
        task = ManualTask(fn, self.now + initial_delay, delay)
        self.tasks.append(task)
        return task

    def shutdown(self) -> None:
        self.shut_down = True
        for task in self.tasks:
            task.cancel()

    def sleep(self, seconds: float) -> None:
        self.now += seconds

    def advance(self, seconds: float = 0.0) -> None:
        """Move the clock forward, running every task that comes due on the way."""
        target = self.now + seconds
        while True:
            due = [t for t in self.tasks if not t.cancelled and t.next_run <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.next_run)
            self.now = max(self.now, task.next_run)
            task.run_starts.append(self.now)
            try:
                task.fn()
            except Exception:
                task.cancel()
                raise
            task.next_run = self.now + task.delay
        self.now = max(self.now, target)


@dataclass
class StaticIntrospection(HostIntrospection):
    """Introspection source that reports fixed values."""

    arch: str = "x86_64"
    name: str = "Linux"
    version: str = "5.10"
    load: float = 0.42
    mem_free: int = 2_000_000_000
    mem_total: int = 16_000_000_000
    swap_free: int = 0
    swap_total: int = 0

    def architecture(self) -> str:
        return self.arch

    def os_name(self) -> str:
        return self.name

    def os_version(self) -> str:
        return self.version

    def load_average(self) -> float:
        return self.load

    def memory_free_bytes(self) -> int:
        return self.mem_free

    def memory_total_bytes(self) -> int:
        return self.mem_total

    def swap_free_bytes(self) -> int:
        return self.swap_free

    def swap_total_bytes(self) -> int:
        return self.swap_total


class ScriptedCommandRunner(CommandRunner):
    """
    Command runner that answers from a table instead of spawning processes.

    Values may be strings (returned as stdout) or exceptions (raised).
    Commands missing from the table raise CommandExecutionError.
    """

    def __init__(
        self,
        outputs: Mapping[str, str | BaseException],
        on_run: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(timeout=None)
        self.outputs = dict(outputs)
        self.on_run = on_run
        self.calls: list[str] = []

    def run(self, command: str | Sequence[str]) -> str:
        key = command if isinstance(command, str) else " ".join(command)
        self.calls.append(key)
        if self.on_run is not None:
            self.on_run(key)
        if key not in self.outputs:
            raise CommandExecutionError(key, "no scripted output")
        result = self.outputs[key]
        if isinstance(result, BaseException):
            raise result
        return result


class InMemoryNodeUpdater(NodeUpdater):
    """Records every write. ``accept`` controls the returned verdict."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.writes: list[tuple[str, bytes]] = []

    def update(self, path: str, data: bytes) -> bool:
        self.writes.append((path, data))
        return self.accept

    @property
    def nodes(self) -> dict[str, bytes]:
        """Latest data written to each path."""
        return dict(self.writes)
