import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from main import app, ROUTES
from ui_helpers import OUTPUT_MODE_ENV

runner = CliRunner()


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)


def test_routes_plain():
    result = runner.invoke(app, ["routes"])
    assert result.exit_code == 0
    assert "GET /books -> 200 list envelope, cacheable" in result.stdout
    assert "DELETE /books/{id} -> 204 empty body | 404 empty body" in result.stdout


def test_routes_json():
    result = runner.invoke(app, ["--output", "json", "routes"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == ROUTES


def test_script_command():
    result = runner.invoke(app, ["script"])
    assert result.exit_code == 0
    assert result.stdout.strip() == 'console.log("Hello from code on demand!")'


@patch("subprocess.run")
def test_serve_command(mock_subprocess_run):
    result = runner.invoke(app, ["serve", "--port", "3100"])
    assert result.exit_code == 0
    assert "Starting API on http://" in result.stdout
    mock_subprocess_run.assert_called_once()
    # Check if uvicorn is called with correct arguments
    args = mock_subprocess_run.call_args[0][0]
    assert "uvicorn" in args
    assert "api:app" in args
    assert "--host" in args
    assert args[args.index("--port") + 1] == "3100"
    assert "--reload" not in args


@patch("subprocess.run", side_effect=FileNotFoundError)
def test_serve_without_uvicorn(mock_subprocess_run):
    result = runner.invoke(app, ["serve"])
    assert result.exit_code == 1
    assert "could not be found" in result.stdout
