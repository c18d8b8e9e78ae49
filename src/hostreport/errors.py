"""Exceptions raised by hostreport."""


class HostReportError(Exception):
    """Base class for all hostreport errors."""


class ConfigurationError(HostReportError, ValueError):
    """A reporter configuration is missing a required field or holds an invalid value."""


class CommandExecutionError(HostReportError):
    """An external command could not be launched, timed out or failed."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(f"{command!r}: {message}")
        self.command = command


class IntrospectionError(HostReportError):
    """The host introspection facility failed to report a metric."""


class ReporterStateError(HostReportError, RuntimeError):
    """A lifecycle method was called in a state that does not allow it."""


class SchedulerError(HostReportError, RuntimeError):
    """A scheduler was asked to do something it cannot."""
