"""Host attribute collection for hostreport."""

from collections.abc import Callable

from hostreport.commands import CommandRunner
from hostreport.introspection import available_cpus
from hostreport.models import HostInfo
from hostreport.ports import HostIntrospection

HOSTNAME_COMMAND = ("uname", "-n")
UNAME_COMMAND = ("uname", "-a")


class HostInfoCollector:
    """
    Gathers host attributes into a HostInfo snapshot.

    Runs two external commands (short hostname and full system
    identification) and reads everything else from the introspection
    source. Fields are read one after another, so the snapshot is only
    as consistent as the host allows. Nothing is caught here:
    CommandExecutionError and IntrospectionError reach the caller.
    """

    def __init__(
        self,
        introspection: HostIntrospection,
        runner: CommandRunner | None = None,
        cpu_count: Callable[[], int] = available_cpus,
    ) -> None:
        self._introspection = introspection
        self._runner = runner if runner is not None else CommandRunner()
        self._cpu_count = cpu_count

    def collect(self) -> HostInfo:
        """Collect a fresh snapshot of the host."""
        hostname = self._runner.run(HOSTNAME_COMMAND).strip()
        uname = self._runner.run(UNAME_COMMAND).strip()

        source = self._introspection
        return HostInfo(
            architecture=source.architecture(),
            cpus=self._cpu_count(),
            hostname=hostname,
            load_avg=source.load_average(),
            os_name=source.os_name(),
            os_version=source.os_version(),
            memory_free_bytes=source.memory_free_bytes(),
            memory_total_bytes=source.memory_total_bytes(),
            swap_free_bytes=source.swap_free_bytes(),
            swap_total_bytes=source.swap_total_bytes(),
            uname=uname,
        )
