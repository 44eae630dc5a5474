"""Tests for hostmon.config."""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from hostmon.config import DEFAULT_CONFIG, _deep_merge, dump_default_config, load_config


@pytest.fixture(autouse=True)
def _isolated_default_path(tmp_path: Path) -> Iterator[Path]:
    path = tmp_path / "home" / "config.toml"
    with patch("hostmon.config._DEFAULT_PATH", path):
        yield path


class TestLoadConfigDefaults:
    def test_defaults_returned_when_no_file(self) -> None:
        cfg = load_config(None)
        assert cfg["dashboard"]["poll_timeout_ms"] == 200
        assert cfg["dashboard"]["title"] == "System Monitor"
        assert cfg["dashboard"]["label_width"] == 20

    def test_all_default_keys_present(self) -> None:
        cfg = load_config(None)
        assert set(cfg.keys()) == set(DEFAULT_CONFIG.keys())

    def test_returned_config_is_a_copy(self) -> None:
        cfg = load_config(None)
        cfg["dashboard"]["poll_timeout_ms"] = 1
        assert DEFAULT_CONFIG["dashboard"]["poll_timeout_ms"] == 200


class TestTomlOverlay:
    def test_overrides_timeout(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("[dashboard]\npoll_timeout_ms = 500\n")
        cfg = load_config(toml_file)
        assert cfg["dashboard"]["poll_timeout_ms"] == 500
        # Other keys remain at defaults
        assert cfg["dashboard"]["title"] == "System Monitor"

    def test_overrides_title(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text('[dashboard]\ntitle = "homelab"\n')
        cfg = load_config(toml_file)
        assert cfg["dashboard"]["title"] == "homelab"

    def test_default_location_used(self, _isolated_default_path: Path) -> None:
        _isolated_default_path.parent.mkdir()
        _isolated_default_path.write_text("[dashboard]\nlabel_width = 30\n")
        cfg = load_config(None)
        assert cfg["dashboard"]["label_width"] == 30

    def test_invalid_default_location_ignored(
        self, _isolated_default_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _isolated_default_path.parent.mkdir()
        _isolated_default_path.write_text("this is [not valid toml\n")
        cfg = load_config(None)
        assert cfg["dashboard"]["poll_timeout_ms"] == 200
        assert "warning: ignoring invalid TOML" in capsys.readouterr().err


    def test_unreadable_default_location_ignored(
        self, _isolated_default_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _isolated_default_path.parent.mkdir()
        _isolated_default_path.write_text("[dashboard]\n")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            cfg = load_config(None)
        assert cfg["dashboard"]["poll_timeout_ms"] == 200
        assert "warning: cannot read" in capsys.readouterr().err


class TestExplicitPath:
    def test_unreadable_explicit_path_errors(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text("[dashboard]\n")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(SystemExit) as exc:
                load_config(cfg_file)
        assert exc.value.code == 1
        assert "hostmon: cannot read config file" in capsys.readouterr().err

    def test_missing_explicit_path_errors(self, tmp_path: Path) -> None:
        missing = tmp_path / "nonexistent.toml"
        with pytest.raises(SystemExit):
            load_config(missing)

    def test_invalid_toml_errors(self, tmp_path: Path) -> None:
        bad_file = tmp_path / "bad.toml"
        bad_file.write_text("this is [not valid toml\n")
        with pytest.raises(SystemExit):
            load_config(bad_file)

    @pytest.mark.parametrize(
        "body",
        [
            "[dashboard]\npoll_timeout_ms = 0\n",
            "[dashboard]\npoll_timeout_ms = -5\n",
            '[dashboard]\npoll_timeout_ms = "fast"\n',
            "[dashboard]\npoll_timeout_ms = true\n",
            "[dashboard]\nlabel_width = 5\n",
            "[dashboard]\ntitle = 3\n",
            'dashboard = "oops"\n',
        ],
    )
    def test_out_of_range_values_error(
        self, tmp_path: Path, body: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text(body)
        with pytest.raises(SystemExit) as exc:
            load_config(cfg_file)
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("hostmon: ")


class TestDumpDefaultConfig:
    def test_is_valid_toml(self) -> None:
        parsed = tomllib.loads(dump_default_config())
        assert "dashboard" in parsed

    def test_roundtrips_defaults(self) -> None:
        parsed = tomllib.loads(dump_default_config())
        assert parsed == DEFAULT_CONFIG


class TestDeepMerge:
    def test_scalar_overwrite(self) -> None:
        result = _deep_merge({"a": 1, "b": 2}, {"a": 10})
        assert result == {"a": 10, "b": 2}

    def test_nested_dict_merge(self) -> None:
        base = {"x": {"a": 1, "b": 2}}
        overlay = {"x": {"b": 3, "c": 4}}
        result = _deep_merge(base, overlay)
        assert result["x"] == {"a": 1, "b": 3, "c": 4}

    def test_new_key_added(self) -> None:
        result = _deep_merge({"a": 1}, {"b": 2})
        assert result == {"a": 1, "b": 2}
