"""Typer CLI entrypoint for specification evaluation."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from .container import create_container
from .logging import configure_logging
from .pipeline import SpecificationLoadError, render_text, serialize_outcome
from .schemas import load_config

app = typer.Typer(help="Evaluate documents against predicate specifications.")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@app.command()
def evaluate(
    spec: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Specification YAML/JSON path."),
    document: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Document YAML/JSON path."),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Console output format."),
    output: Optional[Path] = typer.Option(
        None,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Also write the JSON outcome to this path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logging (overrides config)."),
    fail_on_undetermined: bool = typer.Option(
        False,
        "--fail-on-undetermined",
        help="Exit with code 2 when any predicate is undetermined.",
    ),
) -> None:
    """Evaluate a document against a specification."""
    raw_settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            if not isinstance(loaded, dict):
                raise typer.BadParameter("Config file must be a YAML object", param_name="config")
            raw_settings = loaded

    try:
        app_config = load_config(raw_settings)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc

    configure_logging(log_level or app_config.logging.level)

    container = create_container(settings=app_config.to_settings())
    pipeline = container.pipeline()

    try:
        outcome = pipeline.run(spec_path=spec, document_path=document, output_path=output)
    except SpecificationLoadError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(serialize_outcome(outcome), ensure_ascii=False, indent=2))
    else:
        typer.echo(render_text(outcome))

    if fail_on_undetermined and not outcome.summary.fully_determined:
        raise typer.Exit(code=2)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
