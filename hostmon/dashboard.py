"""Interactive terminal dashboard — hostmon's live host summary table.

Shows OS identity, disks, CPU count and memory in a bordered table that is
resampled on every tick. The key poll timeout is the refresh cadence, so a
quit key is seen within one tick.

Usage:
    hostmon
    hostmon --interval-ms 500 --config path/to/config.toml
    hostmon --once
"""

from __future__ import annotations

import argparse
import curses
import sys
from enum import Enum
from pathlib import Path

from hostmon.config import DEFAULT_CONFIG, dump_default_config, load_config
from hostmon.provider import MetricsProvider, ProviderError, PsutilProvider
from hostmon.render import DEFAULT_LABEL_WIDTH, DEFAULT_TITLE, render, render_text
from hostmon.snapshot import build
from hostmon.terminal import KEY_ESCAPE, CursesTerminal, Terminal, terminal_session

QUIT_KEYS = frozenset({ord("q"), KEY_ESCAPE})


class LoopState(Enum):
    RUNNING = "running"
    STOPPING = "stopping"


def is_quit_key(key: int | None) -> bool:
    return key is not None and key in QUIT_KEYS


class RefreshLoop:
    """Sample → render → draw → poll, until a quit key arrives.

    Terminal mode is held for the lifetime of :meth:`run` and restored exactly
    once whichever way the loop ends. Errors from drawing or input are not
    retried; they end the loop and propagate after the terminal is restored.
    """

    def __init__(
        self,
        terminal: Terminal,
        provider: MetricsProvider,
        poll_timeout_ms: int = DEFAULT_CONFIG["dashboard"]["poll_timeout_ms"],
        *,
        title: str = DEFAULT_TITLE,
        label_width: int = DEFAULT_LABEL_WIDTH,
    ) -> None:
        self._terminal = terminal
        self._provider = provider
        self._poll_timeout_ms = poll_timeout_ms
        self._title = title
        self._label_width = label_width
        self.should_quit = False

    @property
    def state(self) -> LoopState:
        return LoopState.STOPPING if self.should_quit else LoopState.RUNNING

    @property
    def poll_timeout_ms(self) -> int:
        return self._poll_timeout_ms

    def tick(self, last_size: tuple[int, int] | None) -> tuple[int, int]:
        """Run one tick and return the size of the frame it drew."""
        snapshot = build(self._provider)
        height, width = self._terminal.size()
        tree = render(
            snapshot,
            width,
            height,
            title=self._title,
            label_width=self._label_width,
        )
        self._terminal.draw(tree, full_clear=tree.size != last_size)

        key = self._terminal.poll_key(self._poll_timeout_ms)
        if is_quit_key(key):
            self.should_quit = True
        return tree.size

    def run(self) -> None:
        with terminal_session(self._terminal):
            frame_size: tuple[int, int] | None = None
            while not self.should_quit:
                frame_size = self.tick(frame_size)


# ── CLI entry point ────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Live terminal summary of host memory, CPUs, OS and disks.",
    )
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=None,
        metavar="MS",
        help="Milliseconds between refreshes (default: 200, or config value)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to TOML config file",
    )
    parser.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the default configuration and exit",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print a single snapshot as a plain table and exit",
    )
    args = parser.parse_args(argv)

    if args.dump_config:
        print(dump_default_config(), end="")
        return 0

    if args.interval_ms is not None and args.interval_ms <= 0:
        parser.error("--interval-ms must be positive")

    config = load_config(args.config)
    dash = config["dashboard"]
    interval_ms = args.interval_ms or dash["poll_timeout_ms"]

    try:
        provider = PsutilProvider()
    except ProviderError as e:
        print(f"hostmon: error: {e}", file=sys.stderr)
        return 1

    if args.once:
        print(render_text(build(provider)))
        return 0

    loop = RefreshLoop(
        CursesTerminal(),
        provider,
        interval_ms,
        title=dash["title"],
        label_width=dash["label_width"],
    )
    try:
        loop.run()
    except KeyboardInterrupt:
        pass
    except (curses.error, OSError) as e:
        print(f"hostmon: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
