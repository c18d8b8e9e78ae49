"""Periodic host info reporting for an agent."""

from enum import Enum

import structlog

from hostreport.collector import HostInfoCollector
from hostreport.commands import CommandRunner
from hostreport.config import ReporterConfig
from hostreport.errors import ReporterStateError
from hostreport.paths import status_agent_host_info
from hostreport.ports import ScheduledTask, Scheduler
from hostreport.scheduler import ThreadScheduler

logger = structlog.get_logger(__name__)


class ReporterState(Enum):
    """Lifecycle states of a HostInfoReporter."""

    IDLE = "idle"
    RUNNING = "running"
    CLOSED = "closed"


class HostInfoReporter:
    """
    Publishes a HostInfo snapshot of this host on a fixed-delay schedule.

    The first report runs as soon as the reporter starts; each later report
    starts one interval after the previous one finished. A report that fails
    is logged and counted, and the next one is scheduled regardless.

    ``start()`` and ``close()`` are not synchronized with each other;
    callers must not invoke them concurrently.
    """

    def __init__(
        self,
        config: ReporterConfig,
        scheduler: Scheduler | None = None,
        collector: HostInfoCollector | None = None,
    ) -> None:
        """
        Initialize the HostInfoReporter.

        Args:
            config: Validated reporter configuration.
            scheduler: Scheduler to run reports on. When omitted the reporter
                creates and owns a ThreadScheduler, and shuts it down on close.
            collector: Collector to use instead of one built from ``config``.
        """
        self._config = config
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler if scheduler is not None else ThreadScheduler(
            name=f"HostInfoReporter-{config.agent_id}"
        )
        self._collector = collector if collector is not None else HostInfoCollector(
            config.introspection, CommandRunner(timeout=config.command_timeout)
        )
        self._path = status_agent_host_info(config.agent_id)
        self._node_updater = config.node_updater_factory(config.agent_id)
        self._task: ScheduledTask | None = None
        self._state = ReporterState.IDLE
        self._log = logger.bind(agent=config.agent_id, path=self._path)

        self.reports = 0
        self.failures = 0
        self.last_error: BaseException | None = None

    @property
    def state(self) -> ReporterState:
        return self._state

    @property
    def path(self) -> str:
        """Coordination store path this reporter writes to."""
        return self._path

    def start(self) -> None:
        """Arm the schedule. The first report runs immediately."""
        if self._state is not ReporterState.IDLE:
            raise ReporterStateError(f"Cannot start a reporter that is {self._state.value}")

        self._task = self._scheduler.schedule_with_fixed_delay(
            self._report, 0, self._config.delay_seconds
        )
        self._state = ReporterState.RUNNING
        self._log.info(
            "Host info reporter started",
            interval=self._config.interval,
            time_unit=self._config.time_unit.name.lower(),
        )

    def close(self) -> None:
        """
        Cancel the schedule and release the worker.

        A report already in progress is allowed to finish collecting but
        will not publish. Closing twice is a no-op; closing a reporter that
        was never started raises ReporterStateError.
        """
        if self._state is ReporterState.IDLE:
            raise ReporterStateError("Cannot close a reporter that was never started")
        if self._state is ReporterState.CLOSED:
            return

        self._state = ReporterState.CLOSED
        if self._task is not None:
            self._task.cancel()
        if self._owns_scheduler:
            self._scheduler.shutdown()
        self._log.info("Host info reporter stopped", reports=self.reports, failures=self.failures)

    def __enter__(self) -> "HostInfoReporter":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def report_once(self) -> bool:
        """
        Collect and publish one snapshot, propagating any failure.

        Returns the sink's verdict on the write.
        """
        host_info = self._collector.collect()
        if self._task is not None and self._task.cancelled:
            self._log.debug("Reporter closed during collection, dropping snapshot")
            return False

        accepted = self._node_updater.update(self._path, host_info.to_json_bytes())
        if accepted:
            self._log.debug("Host info published", hostname=host_info.hostname)
        else:
            self._log.warning("Host info update was not accepted by the store")
        return accepted

    def _report(self) -> None:
        """Scheduled entry point. Never raises."""
        try:
            self.report_once()
        except Exception as e:
            self.failures += 1
            self.last_error = e
            self._log.exception("Host info report failed", error=str(e), failures=self.failures)
        else:
            self.reports += 1
