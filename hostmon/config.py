"""Configuration loading for hostmon.

Loads settings from TOML config files with sensible defaults.
Search order: explicit --config path → ~/.config/hostmon/config.toml → defaults only.
"""

from __future__ import annotations

import sys
import tomllib
from pathlib import Path
from typing import Any

from hostmon.render import DEFAULT_LABEL_WIDTH, DEFAULT_TITLE, MIN_LABEL_WIDTH

DEFAULT_CONFIG: dict[str, Any] = {
    "dashboard": {
        "poll_timeout_ms": 200,
        "title": DEFAULT_TITLE,
        "label_width": DEFAULT_LABEL_WIDTH,
    },
}

_DEFAULT_PATH = Path.home() / ".config" / "hostmon" / "config.toml"


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge overlay into base. Nested dicts are merged at the first level only."""
    merged = dict(base)
    for key, value in overlay.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _validate(config: dict[str, Any], source: Path | str) -> dict[str, Any]:
    dash = config.get("dashboard")
    if not isinstance(dash, dict):
        print(f"hostmon: {source}: [dashboard] must be a table", file=sys.stderr)
        raise SystemExit(1)
    timeout = dash.get("poll_timeout_ms")
    if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
        print(
            f"hostmon: {source}: poll_timeout_ms must be a positive integer",
            file=sys.stderr,
        )
        raise SystemExit(1)
    width = dash.get("label_width")
    if not isinstance(width, int) or isinstance(width, bool) or width < MIN_LABEL_WIDTH:
        print(
            f"hostmon: {source}: label_width must be an integer >= {MIN_LABEL_WIDTH}",
            file=sys.stderr,
        )
        raise SystemExit(1)
    if not isinstance(dash.get("title"), str):
        print(f"hostmon: {source}: title must be a string", file=sys.stderr)
        raise SystemExit(1)
    return config


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration, merging user TOML over defaults.

    Args:
        path: Explicit config file path (from --config). If None, tries the
              default location ~/.config/hostmon/config.toml.

    Returns:
        Merged configuration dict.

    Raises:
        SystemExit: If an explicit path doesn't exist, can't be parsed, or
                    holds out-of-range values.
    """
    if path is not None:
        if not path.is_file():
            print(f"hostmon: config file not found: {path}", file=sys.stderr)
            raise SystemExit(1)
        try:
            user_config = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            print(f"hostmon: invalid TOML in {path}: {e}", file=sys.stderr)
            raise SystemExit(1) from e
        except OSError as e:
            print(f"hostmon: cannot read config file {path}: {e}", file=sys.stderr)
            raise SystemExit(1) from e
        return _validate(_deep_merge(DEFAULT_CONFIG, user_config), path)

    # Try default location silently
    if _DEFAULT_PATH.is_file():
        try:
            user_config = tomllib.loads(_DEFAULT_PATH.read_text(encoding="utf-8"))
            return _validate(_deep_merge(DEFAULT_CONFIG, user_config), _DEFAULT_PATH)
        except tomllib.TOMLDecodeError:
            print(
                f"hostmon: warning: ignoring invalid TOML in {_DEFAULT_PATH}",
                file=sys.stderr,
            )
        except OSError as e:
            print(
                f"hostmon: warning: cannot read {_DEFAULT_PATH}: {e}",
                file=sys.stderr,
            )

    return _deep_merge(DEFAULT_CONFIG, {"dashboard": {}})


def dump_default_config() -> str:
    """Return the default configuration as a TOML string."""
    dash = DEFAULT_CONFIG["dashboard"]
    lines = [
        "# hostmon configuration",
        "# Place this file at ~/.config/hostmon/config.toml",
        "",
        "[dashboard]",
        f"poll_timeout_ms = {dash['poll_timeout_ms']}",
        f'title = "{dash["title"]}"',
        f"label_width = {dash['label_width']}",
    ]
    return "\n".join(lines) + "\n"
