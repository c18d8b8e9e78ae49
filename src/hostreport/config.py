"""Reporter configuration."""

from dataclasses import dataclass

from hostreport.commands import DEFAULT_TIMEOUT
from hostreport.errors import ConfigurationError
from hostreport.models import TimeUnit
from hostreport.ports import HostIntrospection, NodeUpdaterFactory

DEFAULT_INTERVAL = 1
DEFAULT_TIME_UNIT = TimeUnit.MINUTES


@dataclass(slots=True, frozen=True)
class ReporterConfig:
    """
    Immutable settings for a HostInfoReporter.

    Every field is checked on construction; an invalid or missing value
    raises ConfigurationError before anything can be scheduled.
    """

    agent_id: str
    introspection: HostIntrospection
    node_updater_factory: NodeUpdaterFactory
    interval: int = DEFAULT_INTERVAL
    time_unit: TimeUnit = DEFAULT_TIME_UNIT
    command_timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not isinstance(self.agent_id, str) or not self.agent_id:
            raise ConfigurationError("agent_id is required")
        if self.introspection is None:
            raise ConfigurationError("introspection is required")
        if not isinstance(self.introspection, HostIntrospection):
            raise ConfigurationError(
                f"introspection must be a HostIntrospection, got {type(self.introspection).__name__}"
            )
        if self.node_updater_factory is None or not callable(self.node_updater_factory):
            raise ConfigurationError("node_updater_factory is required")
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 1:
            raise ConfigurationError(f"interval must be a positive integer, got {self.interval!r}")
        if not isinstance(self.time_unit, TimeUnit):
            raise ConfigurationError(f"time_unit must be a TimeUnit, got {self.time_unit!r}")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ConfigurationError(
                f"command_timeout must be positive, got {self.command_timeout!r}"
            )

    @property
    def delay_seconds(self) -> float:
        """Delay between the end of one report and the start of the next."""
        return self.time_unit.to_seconds(self.interval)


def parse_time_unit(value: TimeUnit | str) -> TimeUnit:
    """Accept a TimeUnit or its case-insensitive name, e.g. ``"minutes"``."""
    if isinstance(value, TimeUnit):
        return value
    try:
        return TimeUnit[str(value).strip().upper()]
    except KeyError:
        names = ", ".join(unit.name.lower() for unit in TimeUnit)
        raise ConfigurationError(f"Unknown time unit {value!r}, expected one of: {names}") from None


def build_config(
    agent_id: str | None,
    introspection: HostIntrospection | None,
    node_updater_factory: NodeUpdaterFactory | None,
    interval: int = DEFAULT_INTERVAL,
    time_unit: TimeUnit | str = DEFAULT_TIME_UNIT,
    command_timeout: float | None = DEFAULT_TIMEOUT,
) -> ReporterConfig:
    """Build a validated ReporterConfig, filling in defaults for optional settings."""
    return ReporterConfig(
        agent_id=agent_id,
        introspection=introspection,
        node_updater_factory=node_updater_factory,
        interval=interval,
        time_unit=parse_time_unit(time_unit),
        command_timeout=command_timeout,
    )
