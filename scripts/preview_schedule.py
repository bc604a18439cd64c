#!/usr/bin/env python3
"""Preview a generated session schedule for a list of player names."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from kob.logging import setup_logging
from kob.scheduling import (
    DEFAULT_ROUNDS_PER_SESSION,
    DEFAULT_SCHEDULE_WEIGHTS,
    RoundScheduler,
    courts_for_roster,
    load_scheduler_system_config,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Session scheduling jobs.",
)


@app.command("preview")
def preview_schedule(
    players: Annotated[list[str], typer.Argument(help="Unique player names.")],
    rounds: Annotated[
        Optional[int],
        typer.Option("--rounds", help="Rounds to schedule. Defaults to the config or 4."),
    ] = None,
    courts: Annotated[
        Optional[int],
        typer.Option("--courts", help="Courts per round. Defaults to players // 4."),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", help="Scheduler system TOML file."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug output.")] = False,
) -> None:
    """Generate rounds with default ratings and print them."""
    setup_logging("DEBUG" if verbose else "WARNING", format_style="simple")

    weights = DEFAULT_SCHEDULE_WEIGHTS
    round_count = DEFAULT_ROUNDS_PER_SESSION
    if config is not None:
        system_config = load_scheduler_system_config(config)
        weights = system_config.weights
        round_count = system_config.rounds_per_session
    if rounds is not None:
        round_count = rounds
    court_count = courts if courts is not None else courts_for_roster(len(players))

    if round_count < 0:
        raise typer.BadParameter("--rounds must be >= 0")
    if court_count < 0:
        raise typer.BadParameter("--courts must be >= 0")

    try:
        scheduler = RoundScheduler(players, round_count, court_count, weights=weights)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="players") from exc

    schedule = scheduler.generate()
    for round_ in schedule:
        typer.echo(round_.round_id)
        for court in round_.courts:
            team1, team2 = court.teams
            typer.echo(
                f"  court={court.court} set={court.set_id} "
                f"{' & '.join(team1.players)} vs {' & '.join(team2.players)}"
            )

    typer.echo(
        f"completed rounds={len(schedule)} "
        f"courts_per_round={court_count} "
        f"skipped_courts={len(scheduler.shortfalls)} "
        f"fallback_courts={len(scheduler.fallbacks)}"
    )


if __name__ == "__main__":
    app()
