"""Tests für die Kommandozeile (click CliRunner)."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from openpyxl import load_workbook

from main import cli


@pytest.fixture
def runner():
    return CliRunner()


def _setup(runner) -> None:
    result = runner.invoke(cli, ["setup", "--defaults"])
    assert result.exit_code == 0, result.output
    assert Path("config/kursplan.yaml").exists()


class TestCli:
    def test_missing_config_aborts(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["show"])
            assert result.exit_code == 1
            assert "Keine Konfiguration gefunden" in result.output

    def test_weeks_without_config(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["weeks", "odd", "--length", "7"])
            assert result.exit_code == 0
            assert "1 3 5 7" in result.output

    def test_weeks_rejects_unknown_pattern(self, runner):
        result = runner.invoke(cli, ["weeks", "every-third"])
        assert result.exit_code != 0

    def test_setup_and_config_show(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["config", "show"])
            assert result.exit_code == 0
            assert "Muster-Hochschule" in result.output

    def test_show_week(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["show", "--week", "3"])
            assert result.exit_code == 0, result.output
            assert "Woche 3 von 20" in result.output

    def test_show_semester_for_class(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["show", "--semester", "--class-id", "class_002"])
            assert result.exit_code == 0, result.output
            assert "gesamtes Semester" in result.output

    def test_show_week_out_of_range(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["show", "--week", "21"])
            assert result.exit_code == 1
            assert "außerhalb" in result.output

    def test_check_sample_data(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["check"])
            assert result.exit_code == 0, result.output
            assert "KONFLIKTFREI" in result.output

    def test_export(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(
                cli, ["export", "-w", "2", "-w", "1", "--semester", "-o", "out/plan.xlsx"]
            )
            assert result.exit_code == 0, result.output
            wb = load_workbook("out/plan.xlsx")
            assert wb.sheetnames == ["Woche 1", "Woche 2", "Semester", "Einträge"]

    def test_add_interactive(self, runner):
        """Kompletter Durchlauf: Kurs, Zeit, Wochen, Bestätigung."""
        with runner.isolated_filesystem():
            _setup(runner)
            answers = "\n".join([
                "course_001", "class_002",   # Kurs & Klasse
                "5", "7", "A101",             # Freitag, 7. Block, Raum
                "odd", "",                    # ungerade Wochen, keine Kategorie
                "y",                          # bestätigen
            ]) + "\n"
            result = runner.invoke(cli, ["add"], input=answers)
            assert result.exit_code == 0, result.output
            assert "schedule_005" in result.output
            assert "Woche 1 von 20" in result.output

    def test_default_view_semester(self, runner):
        """Ohne --week/--semester gilt grid.default_view aus der Konfiguration."""
        from config.defaults import default_schedule_config
        from config.manager import ConfigManager
        from config.schema import ViewMode

        with runner.isolated_filesystem():
            config = default_schedule_config()
            config.grid.default_view = ViewMode.SEMESTER
            ConfigManager().save(config)

            result = runner.invoke(cli, ["show"])
            assert result.exit_code == 0, result.output
            assert "gesamtes Semester" in result.output

            result = runner.invoke(cli, ["export", "-o", "plan.xlsx"])
            assert result.exit_code == 0, result.output
            assert load_workbook("plan.xlsx").sheetnames == ["Semester", "Einträge"]

    def test_default_view_week(self, runner):
        with runner.isolated_filesystem():
            _setup(runner)
            result = runner.invoke(cli, ["show"])
            assert result.exit_code == 0, result.output
            assert "Woche 1 von 20" in result.output

    def test_weeks_with_broken_config(self, runner):
        with runner.isolated_filesystem():
            Path("config").mkdir()
            Path("config/kursplan.yaml").write_text("semester:\n  length: 99\n", encoding="utf-8")
            result = runner.invoke(cli, ["weeks", "odd"])
            assert result.exit_code == 1
            assert "Konfiguration fehlerhaft" in result.output

    def test_add_repeated_week_counts_once(self, runner):
        """Doppelt genannte Woche bleibt ausgewählt."""
        with runner.isolated_filesystem():
            _setup(runner)
            answers = "\n".join([
                "course_002", "class_003",
                "2", "9", "B201",
                "1,1,3", "Labor",
                "y",
            ]) + "\n"
            result = runner.invoke(cli, ["add"], input=answers)
            assert result.exit_code == 0, result.output
            assert "gewählt: 1, 3" in result.output
            assert "schedule_005" in result.output
