"""Read-only views over the persisted series: volatility alerts and history."""

from __future__ import annotations

import typer

from tradefeed.core.exceptions import StorageError
from tradefeed.core.services.alerts import DEFAULT_ALERT_THRESHOLD, history_rows, volatility_alerts

from .constants import VALIDATION_EXIT_CODE
from .utils import emit_error, exit_for_error, get_repository, prepare_output

ALERT_COLUMNS = ["kind", "key", "title", "current", "previous", "pct"]
HISTORY_COLUMNS = ["ts", "usdCnyMid", "usdCny", "usdBrl", "brlCny", "commodities", "partial"]


def register(app: typer.Typer) -> None:
    """Register report commands on the root CLI application."""

    app.command("alerts")(alerts_command)
    app.command("history")(history_command)


def alerts_command(
    ctx: typer.Context,
    threshold: float = typer.Option(
        DEFAULT_ALERT_THRESHOLD,
        "--threshold",
        "-t",
        help="Minimum absolute percent change that raises an alert.",
        show_default=True,
    ),
) -> None:
    """List series whose latest value moved at least ``threshold`` percent."""

    if threshold < 0:
        emit_error("--threshold must be non-negative.", "VALIDATION_ERROR", details={"threshold": threshold})
        raise typer.Exit(code=VALIDATION_EXIT_CODE)

    try:
        rows = get_repository(ctx).load()
    except StorageError as error:
        raise exit_for_error(error) from error

    alerts = volatility_alerts(rows, threshold=threshold)
    payload = [
        {
            "kind": alert.kind,
            "key": alert.key,
            "title": alert.title,
            "current": alert.current,
            "previous": alert.previous,
            "pct": round(alert.pct, 2),
        }
        for alert in alerts
    ]

    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        formatter.render(payload, stream=stream, columns=ALERT_COLUMNS, title=f"|change| >= {threshold:g}%")
    finally:
        stack.close()


def history_command(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", help="Number of most recent records to show.", show_default=True),
) -> None:
    """Show the most recent records, newest first."""

    if limit <= 0:
        emit_error("--limit must be a positive integer.", "VALIDATION_ERROR", details={"limit": limit})
        raise typer.Exit(code=VALIDATION_EXIT_CODE)

    try:
        rows = get_repository(ctx).load()
    except StorageError as error:
        raise exit_for_error(error) from error

    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        formatter.render(history_rows(rows)[:limit], stream=stream, columns=HISTORY_COLUMNS)
    finally:
        stack.close()


__all__ = ["ALERT_COLUMNS", "HISTORY_COLUMNS", "alerts_command", "history_command", "register"]
