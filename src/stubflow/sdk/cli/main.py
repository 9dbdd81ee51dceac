"""stubflow CLI entrypoint."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from stubflow.core.errors import StubflowError
from stubflow.core.models.shapes import ApiModel, parse_api
from stubflow.core.models.structures import Structure
from stubflow.core.models.stubs import HttpStub
from stubflow.core.protocols import get_protocol
from stubflow.core.stubbing import StubAdapter, StubGenerator
from stubflow.core.utils.io import dump_json, load_structured, save_json
from stubflow.sdk.config import DEFAULT_CONFIG_PATH, load_config
from stubflow.sdk.errors import SdkError

app = typer.Typer(add_completion=False, help="stubflow CLI")


class Context:
    def __init__(self) -> None:
        self.config = load_config()


# --- utility helpers ---


def _handle_exc(err: Exception) -> None:
    """Print a concise error and exit non-zero."""
    typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(code=1)


def _load_api(path: Path) -> ApiModel:
    return parse_api(load_structured(path))


def _load_data(data: str | None, data_file: Path | None) -> Any:
    if data_file:
        return load_structured(data_file)
    if data:
        return json.loads(data)
    return None


def _to_obj(value: Any) -> Any:
    if isinstance(value, Structure):
        return value.to_dict()
    return value


def _print_output(payload: Any, output_format: str, output_path: Path | None) -> None:
    text = dump_json(_to_obj(payload))
    if output_format == "print":
        typer.echo(text)
    elif output_format == "json":
        if output_path:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            save_json(output_path, _to_obj(payload))
        else:
            typer.echo(text)
    else:
        typer.echo(f"Unsupported output format: {output_format}")
        raise typer.Exit(code=1)


# --- CLI commands ---


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
) -> None:
    if ctx.obj is None:
        ctx.obj = Context()
    if verbose:
        logging.getLogger("stubflow").setLevel(logging.DEBUG)


@app.command()
def init(
    stub_responses: bool = typer.Option(True, "--stub-responses/--no-stub-responses", help="Enable stubbing by default"),
    endpoint: str = typer.Option("", "--endpoint", help="Default service endpoint"),
    api_model: Optional[Path] = typer.Option(None, "--api-model", help="Default API model file"),
    default_output_format: str = typer.Option("print", "--default-output-format", help="Default output format"),
) -> None:
    cfg_dir = DEFAULT_CONFIG_PATH.parent
    cfg_dir.mkdir(parents=True, exist_ok=True)
    lines = ["[stubflow]"]
    lines.append(f"stub_responses = {'true' if stub_responses else 'false'}")
    if endpoint:
        lines.append(f"endpoint = \"{endpoint}\"")
    if api_model:
        lines.append(f"api_model = \"{api_model}\"")
    lines.append(f"default_output_format = \"{default_output_format}\"")
    DEFAULT_CONFIG_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")
    typer.echo(f"Wrote TOML config to {DEFAULT_CONFIG_PATH}")


@app.command()
def operations(api_file: Path = typer.Argument(..., help="API model (JSON/YAML)")) -> None:
    """List the operations an API model declares."""
    try:
        api = _load_api(api_file)
    except (StubflowError, OSError, ValueError) as exc:
        _handle_exc(exc)
    typer.echo(f"protocol: {api.protocol}")
    for name in api.operation_names():
        op = api.operation(name)
        typer.echo(f"{name} ({op.wire_name})")


@app.command()
def stub(
    ctx: typer.Context,
    api_file: Path = typer.Argument(..., help="API model (JSON/YAML)"),
    operation: str = typer.Argument(..., help="Operation name"),
    data: Optional[str] = typer.Option(None, "--data", help="Partial output data as JSON"),
    data_file: Optional[Path] = typer.Option(None, "--data-file", help="Partial output data file (JSON/YAML)"),
    output_format: Optional[str] = typer.Option(None, "--output-format", help="print|json"),
    output_path: Optional[Path] = typer.Option(None, "--output-path", help="Write output to file"),
) -> None:
    """Print the stubbed response data for an operation."""
    context: Context = ctx.obj
    try:
        api = _load_api(api_file)
        op = api.operation(operation)
        result = StubGenerator(op.output).format(_load_data(data, data_file))
    except (StubflowError, SdkError, OSError, ValueError) as exc:
        _handle_exc(exc)
    _print_output(result, output_format or context.config.default_output_format, output_path)


@app.command()
def wire(
    api_file: Path = typer.Argument(..., help="API model (JSON/YAML)"),
    operation: str = typer.Argument(..., help="Operation name"),
    error: Optional[str] = typer.Option(None, "--error", help="Error code to stub"),
    data: Optional[str] = typer.Option(None, "--data", help="Partial output data as JSON"),
) -> None:
    """Print the synthetic HTTP response a stub would produce."""
    try:
        api = _load_api(api_file)
        api.operation(operation)
        if error:
            response = get_protocol(api.protocol, api.metadata).stub_error(error)
        else:
            entry = StubAdapter(api).classify(operation, _load_data(data, None) or {})
            if not isinstance(entry, HttpStub):
                raise SdkError("stub does not produce an HTTP response")
            response = entry.response
    except (StubflowError, SdkError, OSError, ValueError) as exc:
        _handle_exc(exc)
    typer.echo(dump_json(response.to_dict()))


if __name__ == "__main__":  # pragma: no cover
    app()
