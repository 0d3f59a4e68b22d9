"""Capture and compaction commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping

import typer

from tradefeed.core.config import TradeFeedConfig
from tradefeed.core.services.pipeline import CompactionResult, PipelineResult, run_compaction, run_pipeline

from .utils import exit_for_error, get_cli_options, prepare_output

FETCH_COLUMNS = ["ts", "action", "total", "usdCny", "usdCnyMid", "commodities", "errors", "path"]
COMPACT_COLUMNS = ["before", "after", "removed", "path"]


def register(app: typer.Typer) -> None:
    """Register capture commands on the root CLI application."""

    app.command("fetch")(fetch_command)
    app.command("compact")(compact_command)


def get_pipeline_runner() -> Callable[[TradeFeedConfig], Awaitable[PipelineResult]]:
    """Factory hook returning the capture pipeline."""

    return run_pipeline


def get_compaction_runner() -> Callable[[TradeFeedConfig], CompactionResult]:
    """Factory hook returning the compaction pass."""

    return run_compaction


def fetch_command(ctx: typer.Context) -> None:
    """Capture one snapshot from every source and merge it into the data file."""

    options = get_cli_options(ctx)
    runner = get_pipeline_runner()
    try:
        result = asyncio.run(runner(options.config))
    except Exception as error:
        raise exit_for_error(error) from error

    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        formatter.render([_fetch_row(result)], stream=stream, columns=FETCH_COLUMNS)
    finally:
        stack.close()


def compact_command(ctx: typer.Context) -> None:
    """Collapse the data file to one canonical record per morning/afternoon slot."""

    options = get_cli_options(ctx)
    runner = get_compaction_runner()
    try:
        result = runner(options.config)
    except Exception as error:
        raise exit_for_error(error) from error

    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        formatter.render(
            [
                {
                    "before": result.before,
                    "after": result.after,
                    "removed": result.before - result.after,
                    "path": result.path,
                }
            ],
            stream=stream,
            columns=COMPACT_COLUMNS,
        )
    finally:
        stack.close()


def _fetch_row(result: PipelineResult) -> Mapping[str, object]:
    record = result.record
    detailed = record.errors.commodities_detailed or {}
    top_level = [record.errors.fx_spot, record.errors.usd_cny_mid, record.errors.commodities]
    return {
        "ts": record.ts,
        "action": "replaced" if result.replaced else "appended",
        "total": result.total,
        "usdCny": record.fx.usd_cny,
        "usdCnyMid": record.fx.usd_cny_mid,
        "commodities": len(record.commodities),
        "errors": len(detailed) + sum(1 for message in top_level if message),
        "path": result.path,
    }


__all__ = ["COMPACT_COLUMNS", "FETCH_COLUMNS", "compact_command", "fetch_command", "register"]
