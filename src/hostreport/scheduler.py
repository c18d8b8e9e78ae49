"""Background scheduling for hostreport."""

import threading
from collections.abc import Callable

import structlog

from hostreport.errors import SchedulerError
from hostreport.ports import ScheduledTask, Scheduler

logger = structlog.get_logger(__name__)


class ThreadTask(ScheduledTask):
    """Schedule handle whose cancellation also wakes the waiting worker."""

    def __init__(self) -> None:
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``. Returns True if cancelled meanwhile."""
        return self._cancel_event.wait(timeout=seconds)


class ThreadScheduler(Scheduler):
    """
    Fixed-delay scheduler driven by a single daemon thread.

    The delay before each run starts counting when the previous run
    returns, so runs never overlap and an overrun pushes later runs back.
    If the scheduled function raises, the exception is logged and that
    schedule ends; callers that must keep running catch their own errors.
    """

    def __init__(self, name: str = "HostInfoReporter") -> None:
        """
        Initialize the ThreadScheduler.

        Args:
            name: Name given to the worker thread.
        """
        self._name = name
        self._thread: threading.Thread | None = None
        self._task: ThreadTask | None = None
        self._shut_down = False

    @property
    def is_running(self) -> bool:
        """Check if a schedule is currently active."""
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._task is not None
            and not self._task.cancelled
        )

    def schedule_with_fixed_delay(
        self, fn: Callable[[], None], initial_delay: float, delay: float
    ) -> ThreadTask:
        if self._shut_down:
            raise SchedulerError("Scheduler has been shut down")
        if self.is_running:
            raise SchedulerError("Scheduler already has an active schedule")
        if delay <= 0:
            raise SchedulerError(f"Delay must be positive, got {delay}")

        task = ThreadTask()
        self._task = task
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(fn, task, initial_delay, delay),
            daemon=True,
            name=self._name,
        )
        self._thread.start()
        return task

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """
        Cancel the active schedule and stop the worker thread.

        Args:
            timeout: How long to wait for an in-flight run to finish (seconds).
        """
        self._shut_down = True
        if self._task is not None:
            self._task.cancel()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Scheduler worker still running after shutdown", thread=self._name)
        self._thread = None

    def _run_loop(
        self, fn: Callable[[], None], task: ThreadTask, initial_delay: float, delay: float
    ) -> None:
        """Main loop running in the background thread."""
        if initial_delay > 0 and task.wait(initial_delay):
            return

        while not task.cancelled:
            try:
                fn()
            except Exception:
                logger.exception("Scheduled task failed, ending its schedule", thread=self._name)
                task.cancel()
                return

            if task.wait(delay):
                return
