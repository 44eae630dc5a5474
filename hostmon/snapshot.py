"""Immutable per-tick metrics snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from hostmon.provider import MetricsProvider

GIB = 1024**3


@dataclass(slots=True, frozen=True)
class MetricsSnapshot:
    """Raw values as the provider returned them; no sentinels applied."""

    total_memory_bytes: int
    used_memory_bytes: int
    cpu_count: int
    os_name: str | None
    os_version: str | None
    kernel_version: str | None
    host_name: str | None
    disk_names: tuple[str, ...]

    @property
    def total_memory_gb(self) -> float:
        return bytes_to_gb(self.total_memory_bytes)

    @property
    def used_memory_gb(self) -> float:
        return bytes_to_gb(self.used_memory_bytes)


def bytes_to_gb(n: int) -> float:
    return n / GIB


def build(provider: MetricsProvider) -> MetricsSnapshot:
    """Sample *provider* once. Memory counters are refreshed before reading."""
    provider.refresh_memory()
    return MetricsSnapshot(
        total_memory_bytes=provider.total_memory(),
        used_memory_bytes=provider.used_memory(),
        cpu_count=provider.cpu_count() or 0,
        os_name=provider.os_name(),
        os_version=provider.os_version(),
        kernel_version=provider.kernel_version(),
        host_name=provider.host_name(),
        disk_names=tuple(provider.disk_names()),
    )
