"""Tests for PocketTopoSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from pockettopo.config.settings import CONFIG_FILENAME, PocketTopoSettings, find_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "POCKETTOPO_CONFIG",
        "POCKETTOPO_VERBOSE",
        "POCKETTOPO_CHECK__STRICT_TRIP_INDEX",
        "POCKETTOPO_EXPORT__INDENT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[check]\nstrict_trip_index = true\n")
        assert find_config(tmp_path) == config_file.resolve()

    def test_walks_up_the_survey_tree(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "surveys" / "2022" / "october"
        child.mkdir(parents=True)
        assert find_config(child) == config_file.resolve()

    def test_nearest_file_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        child = tmp_path / "cave"
        child.mkdir()
        nearer = child / CONFIG_FILENAME
        nearer.write_text("")
        assert find_config(child) == nearer.resolve()

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = PocketTopoSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.check.strict_trip_index is False
        assert settings.export.indent == 2

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PocketTopoSettings.from_cli(start=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "pockettopo.toml"
        toml.write_text('[check]\nstrict_trip_index = true\n[export]\nelement_order = "render"\n')
        settings = PocketTopoSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml
        assert settings.check.strict_trip_index is True
        assert settings.export.element_order == "render"
        assert settings.export.indent == 2

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        toml = tmp_path / "custom.toml"
        toml.write_text("[export]\nindent = 0\n")
        settings = PocketTopoSettings.from_cli(config_path=str(toml), start=tmp_path)
        assert settings.config_path == toml
        assert settings.export.indent == 0

    def test_explicit_config_path_missing(self, tmp_path: Path) -> None:
        (tmp_path / "pockettopo.toml").write_text("[export]\nindent = 0\n")
        settings = PocketTopoSettings.from_cli(
            config_path=str(tmp_path / "missing.toml"), start=tmp_path
        )
        assert settings.config_path is None
        assert settings.export.indent == 2

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pockettopo.toml").write_text("[export\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PocketTopoSettings.from_cli(start=tmp_path)

    def test_out_of_range_value(self, tmp_path: Path) -> None:
        (tmp_path / "pockettopo.toml").write_text("[export]\nindent = 20\n")
        with pytest.raises(ValidationError):
            PocketTopoSettings.from_cli(start=tmp_path)

    def test_only_sections_are_read(self, tmp_path: Path) -> None:
        (tmp_path / "pockettopo.toml").write_text("verbose = true\n[export]\nindent = 4\n")
        settings = PocketTopoSettings.from_cli(start=tmp_path)
        assert settings.verbose is False
        assert settings.export.indent == 4


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pockettopo.toml").write_text("[export]\nindent = 4\n")
        monkeypatch.setenv("POCKETTOPO_EXPORT__INDENT", "6")
        settings = PocketTopoSettings.from_cli(start=tmp_path)
        assert settings.export.indent == 6

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETTOPO_VERBOSE", "true")
        assert PocketTopoSettings.from_cli(start=tmp_path).verbose is True

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETTOPO_VERBOSE", "true")
        settings = PocketTopoSettings.from_cli(start=tmp_path, verbose=False)
        assert settings.verbose is False
