"""Host introspection backed by psutil and the platform module."""

import os
import platform

import psutil

from hostreport.errors import IntrospectionError
from hostreport.ports import HostIntrospection

LOAD_AVG_UNSUPPORTED = -1.0


def available_cpus() -> int:
    """Number of CPUs this process may run on, never less than 1."""
    if hasattr(os, "sched_getaffinity"):
        try:
            return max(1, len(os.sched_getaffinity(0)))
        except OSError:
            pass
    return max(1, os.cpu_count() or 1)


class PsutilIntrospection(HostIntrospection):
    """
    Reads live host telemetry.

    Load average falls back to -1.0 on platforms without one. Swap figures
    are 0 on hosts with no swap configured. Memory and swap failures raise
    IntrospectionError.
    """

    def architecture(self) -> str:
        return platform.machine()

    def os_name(self) -> str:
        return platform.system()

    def os_version(self) -> str:
        return platform.release()

    def load_average(self) -> float:
        try:
            return float(psutil.getloadavg()[0])
        except (AttributeError, OSError):
            return LOAD_AVG_UNSUPPORTED

    def memory_free_bytes(self) -> int:
        return self._virtual_memory().free

    def memory_total_bytes(self) -> int:
        return self._virtual_memory().total

    def swap_free_bytes(self) -> int:
        swap = self._swap_memory()
        return swap.free if swap is not None else 0

    def swap_total_bytes(self) -> int:
        swap = self._swap_memory()
        return swap.total if swap is not None else 0

    def _virtual_memory(self):
        try:
            return psutil.virtual_memory()
        except (psutil.Error, OSError) as e:
            raise IntrospectionError(f"Cannot read memory statistics: {e}") from e

    def _swap_memory(self):
        try:
            return psutil.swap_memory()
        except RuntimeError:
            # psutil raises this on some platforms when no swap device exists
            return None
        except (psutil.Error, OSError) as e:
            raise IntrospectionError(f"Cannot read swap statistics: {e}") from e
