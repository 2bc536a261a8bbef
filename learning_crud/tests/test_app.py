import os
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from learning_crud.app import app, create_cli_app
from learning_crud.config import get_config


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    # Only errors reach stderr so stdout assertions stay exact on every click version.
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


def test_default_properties_select_development(cli_runner):
    result = cli_runner.invoke(app, [])
    assert result.exit_code == 0
    assert result.stdout == "Dev Data\n"

@pytest.mark.parametrize("arg", ["-Dproject.mode=development", "--project.mode=development"])
def test_development(cli_runner, properties_file, arg):
    result = cli_runner.invoke(app, [arg])
    assert result.exit_code == 0
    assert result.stdout == "Dev Data\n"

@pytest.mark.parametrize("arg", ["-Dproject.mode=production", "--project.mode=production"])
def test_production(cli_runner, properties_file, arg):
    result = cli_runner.invoke(app, [arg])
    assert result.exit_code == 0
    assert result.stdout == "Prod Data\n"

def test_staging_fails(cli_runner, properties_file):
    result = cli_runner.invoke(app, ["-Dproject.mode=staging"])
    assert result.exit_code != 0
    assert "project.mode" in result.output

def test_unset_fails(cli_runner, properties_file):
    result = cli_runner.invoke(app, [])
    assert result.exit_code != 0
    assert "project.mode" in result.output

def test_environment_selects_production(cli_runner, properties_file, monkeypatch):
    monkeypatch.setenv("PROJECT_MODE", "production")
    result = cli_runner.invoke(app, [])
    assert result.exit_code == 0
    assert result.stdout == "Prod Data\n"

def test_command_line_beats_environment(cli_runner, properties_file, monkeypatch):
    monkeypatch.setenv("PROJECT_MODE", "staging")
    result = cli_runner.invoke(app, ["-Dproject.mode=development"])
    assert result.exit_code == 0
    assert result.stdout == "Dev Data\n"

def test_properties_file_selects_production(cli_runner, properties_file):
    properties_file.write_text("project.mode=production\n", encoding="utf-8")
    result = cli_runner.invoke(app, [])
    assert result.exit_code == 0
    assert result.stdout == "Prod Data\n"

def test_unparseable_arguments_are_ignored(cli_runner, properties_file):
    result = cli_runner.invoke(app, ["positional", "-Dproject.mode=production"])
    assert result.exit_code == 0
    assert result.stdout == "Prod Data\n"

def test_overrides_reach_config(cli_runner, properties_file):
    result = cli_runner.invoke(app, ["-Dproject.mode=production", "--log.level=error"])
    assert result.exit_code == 0
    assert get_config().project_mode == "production"
    assert get_config().log_level == "ERROR"

def test_create_cli_app_returns_fresh_app(cli_runner, properties_file):
    result = cli_runner.invoke(create_cli_app(), ["--project.mode=production"])
    assert result.exit_code == 0
    assert result.stdout == "Prod Data\n"

def test_default_log_level_keeps_stdout_to_one_line(properties_file, monkeypatch):
    """At INFO, log records go to stderr and stdout carries only the datum."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    root = Path(__file__).resolve().parents[2]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(root), env.get("PYTHONPATH")]))
    completed = subprocess.run(
        [sys.executable, "-m", "learning_crud.app", "-Dproject.mode=production"],
        cwd=root,
        env=env,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 0
    assert completed.stdout == "Prod Data\n"
    assert "Bound ProdSource" in completed.stderr
