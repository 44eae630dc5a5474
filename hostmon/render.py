"""Snapshot → widget tree.

``render`` only describes the frame: table and footer regions sized to the
terminal, with every cell already formatted. Painting is the terminal's job
(see :mod:`hostmon.terminal`).
"""

from __future__ import annotations

from dataclasses import dataclass

from hostmon.snapshot import MetricsSnapshot

UNKNOWN = "Unknown"
NO_DISKS = "No disks found"
FOOTER_TEXT = "Press 'q' to quit"
HEADER = ("KEY", "VALUE")
DEFAULT_TITLE = "System Monitor"

LABELS = (
    "OS NAME",
    "OS VERSION",
    "KERNEL VERSION",
    "HOST NAME",
    "DISKS",
    "NB CPUS",
    "RAM TOTAL",
    "RAM USED",
)
MIN_LABEL_WIDTH = max(len(label) for label in LABELS)
DEFAULT_LABEL_WIDTH = 20
FOOTER_HEIGHT = 1
COLUMN_GAP = 1


@dataclass(slots=True, frozen=True)
class Rect:
    y: int
    x: int
    height: int
    width: int


@dataclass(slots=True, frozen=True)
class TableWidget:
    area: Rect
    title: str
    header: tuple[str, str]
    rows: tuple[tuple[str, str], ...]
    label_width: int

    @property
    def value_width(self) -> int:
        # Inside the border, after the label column and the gap.
        return max(0, self.area.width - 2 - self.label_width - COLUMN_GAP)


@dataclass(slots=True, frozen=True)
class FooterWidget:
    area: Rect
    text: str


@dataclass(slots=True, frozen=True)
class WidgetTree:
    height: int
    width: int
    table: TableWidget
    footer: FooterWidget

    @property
    def size(self) -> tuple[int, int]:
        return self.height, self.width


# ── Formatting ─────────────────────────────────────────────────────────────


def fmt_gb(gb: float) -> str:
    """Gigabytes with two decimals."""
    return f"{gb:.2f} GB"


def fmt_disks(names: tuple[str, ...] | list[str]) -> str:
    if not names:
        return NO_DISKS
    return ", ".join(names)


def table_rows(snapshot: MetricsSnapshot) -> list[tuple[str, str]]:
    """Label/value pairs in display order, sentinels applied."""
    values = (
        snapshot.os_name or UNKNOWN,
        snapshot.os_version or UNKNOWN,
        snapshot.kernel_version or UNKNOWN,
        snapshot.host_name or UNKNOWN,
        fmt_disks(snapshot.disk_names),
        str(snapshot.cpu_count or 0),
        fmt_gb(snapshot.total_memory_gb),
        fmt_gb(snapshot.used_memory_gb),
    )
    return list(zip(LABELS, values))


# ── Layout ─────────────────────────────────────────────────────────────────


def split_vertical(height: int, width: int) -> tuple[Rect, Rect]:
    """Table on top, single footer line pinned to the bottom row."""
    height = max(0, height)
    width = max(0, width)
    footer_h = min(FOOTER_HEIGHT, height)
    table_h = height - footer_h
    return Rect(0, 0, table_h, width), Rect(table_h, 0, footer_h, width)


def render(
    snapshot: MetricsSnapshot,
    width: int,
    height: int,
    *,
    title: str = DEFAULT_TITLE,
    label_width: int = DEFAULT_LABEL_WIDTH,
) -> WidgetTree:
    table_area, footer_area = split_vertical(height, width)
    table = TableWidget(
        area=table_area,
        title=f" {title} " if title else "",
        header=HEADER,
        rows=tuple(table_rows(snapshot)),
        label_width=max(label_width, MIN_LABEL_WIDTH),
    )
    return WidgetTree(
        height=max(0, height),
        width=max(0, width),
        table=table,
        footer=FooterWidget(area=footer_area, text=FOOTER_TEXT),
    )


# ── Plain text ─────────────────────────────────────────────────────────────


def render_text(snapshot: MetricsSnapshot) -> str:
    """ASCII table of the same rows, for non-interactive output."""
    rows = table_rows(snapshot)
    label_w = max(len(label) for label, _ in rows)
    value_w = max(len(value) for _, value in rows)
    inner = label_w + value_w + 5
    lines = ["." + "-" * inner + "."]
    for label, value in rows:
        lines.append(f"| {label:<{label_w}} | {value:<{value_w}} |")
    lines.append("'" + "-" * inner + "'")
    return "\n".join(lines)
