import sys
import typer
from pathlib import Path
from typing import Optional

from ninjadiag.cli.formatter import OutputFormatter, render_classified, render_json, render_text
from ninjadiag.config.loader import (
    DEFAULT_CONFIG_NAME,
    load_config,
    output_settings_from_config,
    settings_from_config,
)
from ninjadiag.parsing.assembler import parse_build_output
from ninjadiag.parsing.classifier import LineClassifier
from ninjadiag.utils.errors import ConfigError

app = typer.Typer(name="ninjadiag", help="Compiler diagnostics parser for Ninja build logs", rich_markup_mode=None)

OUTPUT_FORMATS = {"text", "json", "table"}


def _read_option_value(tokens: list[str], index: int, option_name: str) -> tuple[str, int]:
    if index + 1 >= len(tokens):
        raise typer.BadParameter(f"Option {option_name} requires a value.")
    return tokens[index + 1], index + 2


def _read_build_log(source: Optional[str]) -> str:
    if source is None or source == "-":
        return sys.stdin.read()

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        OutputFormatter.log(f"Error: Unable to read build log '{path}': {exc}", severity="error")
        raise typer.Exit(code=1)


def _load_config_or_exit(config_path: Optional[Path]) -> dict:
    path = config_path if config_path is not None else Path(DEFAULT_CONFIG_NAME)
    if config_path is not None and not path.exists():
        OutputFormatter.log(f"Warning: Config file '{path}' does not exist.", severity="warning")
    try:
        return load_config(path)
    except ConfigError as exc:
        OutputFormatter.log(str(exc), severity="error")
        raise typer.Exit(code=1)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def parse(
    ctx: typer.Context,
):
    """Parse a build log (file or stdin) into compiler diagnostics."""
    source: Optional[str] = None
    config_path: Optional[Path] = None
    output_format: Optional[str] = None
    output: Optional[Path] = None
    show_trace: Optional[bool] = None
    fail_on_errors = False

    tokens = list(ctx.args)
    extras: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in ("--config", "-c"):
            config_value, index = _read_option_value(tokens, index, token)
            config_path = Path(config_value)
            continue
        if token.startswith("--config="):
            config_path = Path(token.split("=", 1)[1])
            index += 1
            continue
        if token == "--format":
            output_format, index = _read_option_value(tokens, index, token)
            continue
        if token.startswith("--format="):
            output_format = token.split("=", 1)[1]
            index += 1
            continue
        if token in ("--output", "-o"):
            output_value, index = _read_option_value(tokens, index, token)
            output = Path(output_value)
            continue
        if token.startswith("--output="):
            output = Path(token.split("=", 1)[1])
            index += 1
            continue
        if token == "--no-trace":
            show_trace = False
            index += 1
            continue
        if token == "--fail-on-errors":
            fail_on_errors = True
            index += 1
            continue
        if token.startswith("-") and token != "-":
            raise typer.BadParameter(f"Unknown option: {token}")
        extras.append(token)
        index += 1

    if len(extras) > 1:
        raise typer.BadParameter(f"Unexpected arguments: {' '.join(extras[1:])}")
    if extras:
        source = extras[0]

    config = _load_config_or_exit(config_path)
    try:
        settings = settings_from_config(config)
        output_settings = output_settings_from_config(config)
    except ConfigError as exc:
        OutputFormatter.log(str(exc), severity="error")
        raise typer.Exit(code=1)

    OutputFormatter.set_level(settings.log_level)

    output_format = (output_format or output_settings.format).lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter("Option --format must be one of: text, json, table")
    if show_trace is None:
        show_trace = output_settings.show_trace

    diagnostics = parse_build_output(_read_build_log(source), settings)

    if output_format == "table":
        if diagnostics:
            OutputFormatter.print_diagnostics(diagnostics, show_trace=show_trace)
        else:
            OutputFormatter.log("No errors found.", severity="success")
        rendered = None
    elif output_format == "json":
        rendered = render_json(diagnostics)
    else:
        rendered = render_text(diagnostics, show_trace=show_trace)

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered if rendered is not None else render_json(diagnostics))
        except OSError as exc:
            OutputFormatter.log(f"Unable to write diagnostics report: {exc}", severity="error")
            raise typer.Exit(code=1)

    if rendered is not None:
        typer.echo(rendered)

    if fail_on_errors and diagnostics:
        raise typer.Exit(code=1)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def classify(
    ctx: typer.Context,
):
    """Show how each line of a build log is classified."""
    source: Optional[str] = None
    config_path: Optional[Path] = None

    tokens = list(ctx.args)
    extras: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in ("--config", "-c"):
            config_value, index = _read_option_value(tokens, index, token)
            config_path = Path(config_value)
            continue
        if token.startswith("--config="):
            config_path = Path(token.split("=", 1)[1])
            index += 1
            continue
        if token.startswith("-") and token != "-":
            raise typer.BadParameter(f"Unknown option: {token}")
        extras.append(token)
        index += 1

    if len(extras) > 1:
        raise typer.BadParameter(f"Unexpected arguments: {' '.join(extras[1:])}")
    if extras:
        source = extras[0]

    config = _load_config_or_exit(config_path)
    try:
        settings = settings_from_config(config)
    except ConfigError as exc:
        OutputFormatter.log(str(exc), severity="error")
        raise typer.Exit(code=1)

    OutputFormatter.set_level(settings.log_level)
    classifier = LineClassifier(settings)

    lines = _read_build_log(source).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    typer.echo(render_classified([classifier.classify(line) for line in lines]))


if __name__ == "__main__":
    app()
