"""Main entry point for the tradefeed command line interface."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from loguru import logger

from tradefeed.core.config import ConfigManager, TradeFeedConfig
from tradefeed.core.logging import configure_logging

from . import fetch as fetch_commands
from .fetch import register as register_fetch_commands
from .constants import VALIDATION_EXIT_CODE
from .formatters import create_formatter
from .report import register as register_report_commands
from .utils import emit_error


def create_app() -> typer.Typer:
    """Create a Typer application instance for tradefeed."""

    app = typer.Typer(add_completion=False, help="Trade dashboard data capture")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level (defaults to the configured level).",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
        config_path: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="Path to a TOML configuration file (default: ./tradefeed.toml).",
        ),
        data_file: Path | None = typer.Option(
            None,
            "--data-file",
            help="Override the time-series JSON file.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        try:
            config = ConfigManager(config_path).get_config()
        except ValueError as exc:
            emit_error(f"Invalid configuration: {exc}", "CONFIG_ERROR")
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
        if data_file is not None:
            config.storage.path = str(data_file)
        if log_level:
            config.logging.level = log_level.upper()

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "no_color": no_color,
                "config": config,
            }
        )
        try:
            _configure_logging(config)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    register_fetch_commands(app)
    register_report_commands(app)
    return app


def _configure_logging(config: TradeFeedConfig) -> None:
    if config.logging.file:
        configure_logging(config.logging.level, file_output=True, file_path=config.logging.file)
    else:
        configure_logging(config.logging.level)


def fetch_entry() -> None:
    """Zero-argument capture run used by schedulers; exits 1 when the data file cannot be handled."""

    try:
        config = ConfigManager().get_config()
        _configure_logging(config)
        result = asyncio.run(fetch_commands.get_pipeline_runner()(config))
    except Exception as error:
        logger.opt(exception=error).error("Capture run failed")
        print(f"tradefeed-fetch failed: {error}", file=sys.stderr)
        sys.exit(1)

    print(f"Saved {result.total} records to {result.path}")


app = create_app()
