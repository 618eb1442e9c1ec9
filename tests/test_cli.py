"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from sitenav.cli import cli


class TestInspectCommand:
    """Tests for the inspect command."""

    def test__marks_selected_branch(self, menu_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/products/catalog", "-m", str(menu_file)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == '- Home (/) [id="home"]'
        assert lines[1] == '* Products (/products) [class="selected" id="products"]'
        assert lines[2] == (
            '  * Catalog (/products/catalog) '
            '[class="selected simple-navigation-active-leaf" id="catalog"]'
        )
        assert lines[3] == '  - Offers (/products/offers) [id="offers"]'
        assert lines[4] == '- About (/about#team) [id="about"]'

    def test__uses_config_settings(self, tmp_path: Path, menu_file: Path) -> None:
        config_file = tmp_path / "sitenav.toml"
        config_file.write_text(
            '[navigation]\nselected_class = "on"\nactive_leaf_class = ""\n'
            "autogenerate_item_ids = false\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/about", "-c", str(config_file)])

        assert result.exit_code == 0
        assert '* About (/about#team) [class="on"]' in result.output

    def test__missing_menu_file__fails(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/", "-m", str(tmp_path / "missing.toml")])

        assert result.exit_code != 0
        assert "Menu file not found" in result.output

    def test__invalid_menu__fails(self, tmp_path: Path) -> None:
        menu_file = tmp_path / "navigation.toml"
        menu_file.write_text('[[menu]]\nname = "No key"\n')

        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/", "-m", str(menu_file)])

        assert result.exit_code != 0
        assert "menu[0].key must be a string" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sitenav.toml"
        config_file.write_text("[server]\nport = \"x\"\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/", "-c", str(config_file)])

        assert result.exit_code != 0
        assert "Invalid configuration" in result.output

    def test__empty_menu(self, tmp_path: Path) -> None:
        menu_file = tmp_path / "navigation.toml"
        menu_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "/", "-m", str(menu_file)])

        assert result.exit_code == 0
        assert "Navigation is empty" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    def test__runs_server_with_overrides(self, tmp_path: Path, menu_file: Path) -> None:
        config_file = tmp_path / "sitenav.toml"
        config_file.write_text("[server]\nport = 3000\n")

        runner = CliRunner()
        with patch("sitenav.server.run_server") as run_server:
            result = runner.invoke(
                cli,
                ["serve", "-c", str(config_file), "--port", "4000", "--no-live-reload"],
            )

        assert result.exit_code == 0
        assert "Starting server on 127.0.0.1:4000" in result.output
        assert "Live reload: disabled" in result.output
        config = run_server.call_args.args[0]
        assert config.server.port == 4000
        assert config.navigation.menu_file == menu_file
        assert config.live_reload.enabled is False
