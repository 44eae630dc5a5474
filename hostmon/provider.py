"""Host metrics provider backed by psutil and the platform module.

Every read is a point-in-time query. Values that the platform cannot supply
come back as ``None``, an empty list or ``0``; only failing to talk to the OS
at all raises :class:`ProviderError`.

Memory figures are always reported in bytes.
"""

from __future__ import annotations

import platform
import sys
from typing import Protocol

import psutil


class ProviderError(RuntimeError):
    """The OS could not be queried at all."""


class MetricsProvider(Protocol):
    def refresh_memory(self) -> None: ...

    def total_memory(self) -> int: ...

    def used_memory(self) -> int: ...

    def cpu_count(self) -> int: ...

    def os_name(self) -> str | None: ...

    def os_version(self) -> str | None: ...

    def kernel_version(self) -> str | None: ...

    def host_name(self) -> str | None: ...

    def disk_names(self) -> list[str]: ...


def _os_release() -> dict[str, str]:
    try:
        return platform.freedesktop_os_release()
    except OSError:
        return {}


class PsutilProvider:
    """Live provider. Construction primes the memory counters once."""

    def __init__(self) -> None:
        self._total = 0
        self._used = 0
        try:
            self.refresh_memory()
        except (OSError, RuntimeError) as e:
            raise ProviderError(f"cannot read system memory: {e}") from e

    def refresh_memory(self) -> None:
        mem = psutil.virtual_memory()
        self._total = int(mem.total)
        self._used = int(mem.used)

    def total_memory(self) -> int:
        return self._total

    def used_memory(self) -> int:
        return self._used

    def cpu_count(self) -> int:
        return psutil.cpu_count(logical=True) or 0

    def os_name(self) -> str | None:
        if sys.platform.startswith("linux"):
            name = _os_release().get("NAME")
            if name:
                return name
        if sys.platform == "darwin":
            return "macOS"
        return platform.system() or None

    def os_version(self) -> str | None:
        if sys.platform.startswith("linux"):
            return _os_release().get("VERSION_ID") or None
        if sys.platform == "darwin":
            return platform.mac_ver()[0] or None
        if sys.platform == "win32":
            return platform.win32_ver()[1] or None
        return None

    def kernel_version(self) -> str | None:
        return platform.release() or None

    def host_name(self) -> str | None:
        return platform.node() or None

    def disk_names(self) -> list[str]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except OSError:
            return []
        names: list[str] = []
        for part in partitions:
            if part.device and part.device not in names:
                names.append(part.device)
        return names
