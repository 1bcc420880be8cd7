import json

import pytest
from openpyxl import load_workbook

from report_engine.interfaces.cli.main import CLIManager, main


@pytest.fixture
def manager():
    return CLIManager()


@pytest.fixture
def input_file(tmp_path, sample_data):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(sample_data), encoding="utf-8")
    return path


def test_commands_are_discovered(manager):
    assert set(manager.available_commands) == {"list_reports", "preview", "render"}


def test_help(capsys):
    assert main(["help"]) == 0
    output = capsys.readouterr().out
    assert "render" in output
    assert "list_reports" in output


def test_unknown_command(manager, capsys):
    assert manager.run_command("migrate", []) == 1
    assert "Unknown command: migrate" in capsys.readouterr().out


def test_list_reports(manager, capsys):
    assert manager.run_command("list_reports", ["--columns"]) == 0
    output = capsys.readouterr().out
    assert "compliance_detail" in output
    assert "Compliance Data" in output
    assert "- Learner ID" in output


def test_preview(manager, input_file, capsys):
    assert manager.run_command("preview", ["--report", "at_risk_users", "--input", str(input_file)]) == 0
    output = capsys.readouterr().out
    assert "AT-RISK USERS" in output
    assert "Citra" in output
    assert "CRITICAL" in output


def test_render_workbook(manager, input_file, tmp_path):
    output_dir = tmp_path / "out"
    exit_code = manager.run_command(
        "render",
        [
            "--report", "at_risk_users",
            "--report", "compliance_detail",
            "--input", str(input_file),
            "--output", str(output_dir),
            "--generated-at", "2024-01-15T10:30:00",
        ],
    )
    assert exit_code == 0

    path = output_dir / "report_workbook_20240115_103000.xlsx"
    assert path.exists()
    assert load_workbook(path).sheetnames == ["At-Risk Users", "Compliance Data"]


def test_render_csv(manager, input_file, tmp_path):
    exit_code = manager.run_command(
        "render",
        ["-r", "module_performance", "-i", str(input_file), "-o", str(tmp_path), "-f", "csv",
         "--generated-at", "2024-01-15T10:30:00"],
    )
    assert exit_code == 0
    content = (tmp_path / "module_performance_20240115_103000.csv").read_text(encoding="utf-8")
    assert content.startswith("MODULE PERFORMANCE")


def test_missing_input_file(manager, tmp_path, capsys):
    exit_code = manager.run_command(
        "render", ["--report", "at_risk_users", "--input", str(tmp_path / "missing.json")]
    )
    assert exit_code == 1
    assert "Input file not found" in capsys.readouterr().out


def test_invalid_json_input(manager, tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert manager.run_command("preview", ["--report", "at_risk_users", "--input", str(path)]) == 1
    assert "Invalid JSON input" in capsys.readouterr().out


def test_help_for_one_command(capsys):
    assert main(["help", "render"]) == 0
    assert "--format" in capsys.readouterr().out
    assert main(["help", "migrate"]) == 1
