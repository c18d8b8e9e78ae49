"""Data models for hostreport."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TimeUnit(Enum):
    """Duration units accepted for the reporting interval."""

    MILLISECONDS = 0.001
    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 3600.0
    DAYS = 86400.0

    def to_seconds(self, amount: float) -> float:
        """Convert an amount of this unit to seconds."""
        return amount * self.value


# Attribute name -> JSON key expected by readers of the status tree.
_JSON_KEYS = {
    "architecture": "architecture",
    "cpus": "cpus",
    "hostname": "hostname",
    "load_avg": "loadAvg",
    "os_name": "osName",
    "os_version": "osVersion",
    "memory_free_bytes": "memoryFreeBytes",
    "memory_total_bytes": "memoryTotalBytes",
    "swap_free_bytes": "swapFreeBytes",
    "swap_total_bytes": "swapTotalBytes",
    "uname": "uname",
}


@dataclass(slots=True, frozen=True)
class HostInfo:
    """Immutable snapshot of host attributes taken by a single report."""

    architecture: str
    cpus: int
    hostname: str
    load_avg: float  # 1-minute average, -1.0 when unsupported
    os_name: str
    os_version: str
    memory_free_bytes: int
    memory_total_bytes: int
    swap_free_bytes: int  # 0 when no swap is configured
    swap_total_bytes: int
    uname: str  # Full `uname -a` output

    def to_dict(self) -> dict[str, Any]:
        """Return the snapshot keyed by its published JSON names."""
        return {key: getattr(self, attr) for attr, key in _JSON_KEYS.items()}

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostInfo":
        """Build a snapshot from a published JSON document."""
        return cls(**{attr: data[key] for attr, key in _JSON_KEYS.items()})
