"""Unit tests for the config commands."""

import json
from pathlib import Path

from diskscope.cli.main import app
from diskscope.core.config import load_settings
from typer.testing import CliRunner

runner = CliRunner()


def _config_file(config_home: Path) -> Path:
    return config_home / "diskscope" / "config.toml"


class TestConfigPath:
    """Tests for diskscope config path."""

    def test_prints_location(self, isolated_config_home: Path) -> None:
        """The path lives under XDG_CONFIG_HOME."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(_config_file(isolated_config_home))


class TestConfigInit:
    """Tests for diskscope config init."""

    def test_creates_defaults(self, isolated_config_home: Path) -> None:
        """init writes a settings file with default values."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0, result.output
        settings = load_settings(_config_file(isolated_config_home))
        assert settings.use_trash is True
        assert settings.exclude_patterns == []

    def test_keeps_existing_file(self, isolated_config_home: Path) -> None:
        """An existing file is not overwritten without --force."""
        config_file = _config_file(isolated_config_home)
        config_file.parent.mkdir(parents=True)
        config_file.write_text("use_trash = false\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert config_file.read_text() == "use_trash = false\n"

    def test_force_overwrites(self, isolated_config_home: Path) -> None:
        """--force replaces the file with defaults."""
        config_file = _config_file(isolated_config_home)
        config_file.parent.mkdir(parents=True)
        config_file.write_text("use_trash = false\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0, result.output
        assert load_settings(config_file).use_trash is True


class TestConfigShow:
    """Tests for diskscope config show."""

    def test_defaults(self) -> None:
        """Without a file, defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "defaults" in result.output
        assert "use_trash = true" in result.output

    def test_json(self, isolated_config_home: Path) -> None:
        """--json prints the effective settings."""
        config_file = _config_file(isolated_config_home)
        config_file.parent.mkdir(parents=True)
        config_file.write_text('exclude_patterns = ["node_modules"]\nmax_depth = 3\n')

        result = runner.invoke(app, ["config", "show", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["exclude_patterns"] == ["node_modules"]
        assert data["max_depth"] == 3

    def test_invalid_file(self, isolated_config_home: Path) -> None:
        """Unknown keys are reported as an error."""
        config_file = _config_file(isolated_config_home)
        config_file.parent.mkdir(parents=True)
        config_file.write_text("colour = 'red'\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
