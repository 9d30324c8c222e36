"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from modular_svg.__main__ import main


def test_import():
    import modular_svg

    assert modular_svg is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "JSON scene tree to SVG" in result.output
