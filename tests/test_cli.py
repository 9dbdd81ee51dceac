import json
import logging

import pytest
from typer.testing import CliRunner

from stubflow.sdk import config as sdk_config
from stubflow.sdk.cli import main as cli

from conftest import OBJECTS_API, widgets_model

runner = CliRunner()


@pytest.fixture
def api_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sdk_config, "DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    monkeypatch.delenv("STUBFLOW_STUB_RESPONSES", raising=False)
    path = tmp_path / "widgets.json"
    path.write_text(json.dumps(widgets_model()), encoding="utf-8")
    return path


def test_operations(api_file):
    result = runner.invoke(cli.app, ["operations", str(api_file)])
    assert result.exit_code == 0
    assert "protocol: json" in result.output
    assert "describe_widget (DescribeWidget)" in result.output


def test_stub_default(api_file):
    result = runner.invoke(cli.app, ["stub", str(api_file), "describe_widget"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["widget"]["details"] == {"color": "String", "parts": 0}
    assert payload["owner"] is None


def test_stub_with_data_to_file(api_file, tmp_path):
    out = tmp_path / "out" / "stub.json"
    result = runner.invoke(
        cli.app,
        [
            "stub",
            str(api_file),
            "describe_widget",
            "--data",
            '{"next_token": "abc"}',
            "--output-format",
            "json",
            "--output-path",
            str(out),
        ],
    )
    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["next_token"] == "abc"


def test_stub_invalid_data(api_file):
    result = runner.invoke(cli.app, ["stub", str(api_file), "describe_widget", "--data", '{"next_token": 1}'])
    assert result.exit_code == 1
    assert "validation error" in result.output


def test_wire_error(api_file):
    result = runner.invoke(cli.app, ["wire", str(api_file), "describe_widget", "--error", "WidgetNotFound"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["status_code"] == 400
    assert "WidgetNotFound" in payload["body"]


def test_wire_data_rest_xml(tmp_path, monkeypatch):
    monkeypatch.setattr(sdk_config, "DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    path = tmp_path / "objects.json"
    path.write_text(json.dumps(OBJECTS_API), encoding="utf-8")
    result = runner.invoke(cli.app, ["wire", str(path), "head_object", "--data", '{"content_length": 150}'])
    assert result.exit_code == 0
    assert json.loads(result.output)["headers"]["Content-Length"] == "150"


def test_unknown_operation(api_file):
    result = runner.invoke(cli.app, ["stub", str(api_file), "launch_widget"])
    assert result.exit_code == 1
    assert "Unknown operation" in result.output


def test_init_writes_config(tmp_path, monkeypatch):
    target = tmp_path / ".stubflow" / "config.toml"
    monkeypatch.setattr(cli, "DEFAULT_CONFIG_PATH", target)
    monkeypatch.setattr(sdk_config, "DEFAULT_CONFIG_PATH", tmp_path / "unused.toml")
    monkeypatch.delenv("STUBFLOW_STUB_RESPONSES", raising=False)
    monkeypatch.delenv("STUBFLOW_ENDPOINT", raising=False)
    result = runner.invoke(cli.app, ["init", "--endpoint", "http://localhost:9000"])
    assert result.exit_code == 0
    cfg = sdk_config.load_config(target)
    assert cfg.stub_responses is True
    assert cfg.endpoint_url == "http://localhost:9000"


def test_verbose_enables_debug_logging(api_file):
    logger = logging.getLogger("stubflow")
    try:
        result = runner.invoke(cli.app, ["--verbose", "operations", str(api_file)])
        assert result.exit_code == 0
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(logging.NOTSET)
