from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import Config, Settings
from ..core.exceptions import TalkRangeError
from ..core.system import TalkRangeSystem
from ..decision.actions import action_labels
from .scenarios import run_scenarios


app = typer.Typer(help="TalkRange: conversational intent range and action EV.", add_completion=False,
                  no_args_is_help=True)
console = Console()

_state: Dict[str, Optional[Config]] = {"config": None}


def setup_logging(debug: bool = False, verbose: bool = False, config: Optional[Config] = None) -> None:
    """Setup logging configuration with optional debug control"""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        configured = config.get('logging.level', 'WARNING') if config else 'WARNING'
        log_level = logging.getLevelName(str(configured).upper())
        if not isinstance(log_level, int):
            log_level = logging.WARNING

    fmt = config.get('logging.format') if config else None
    logging.basicConfig(
        level=log_level,
        format=fmt or '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if not debug:
        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    logging.getLogger('talkrange').setLevel(log_level)


def _config() -> Config:
    config = _state["config"]
    if config is None:
        config = Config()
        _state["config"] = config
    return config


def _build_system() -> TalkRangeSystem:
    try:
        settings = Settings.from_config(_config())
        return TalkRangeSystem(settings)
    except TalkRangeError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to a YAML config file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging"),
) -> None:
    """TalkRange command-line interface."""
    try:
        config = Config(config_path)
    except TalkRangeError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    _state["config"] = config
    setup_logging(debug=debug, verbose=verbose, config=config)


@app.command(name="range")
def range_cmd(
    role: str = typer.Option(..., "--role", help="Counterpart role, e.g. 상사 or peer"),
    time_context: str = typer.Option(..., "--time", help="Time context, e.g. 퇴근 직전"),
    utterance: str = typer.Option(..., "--utterance", help="Utterance to analyze"),
    culture: Optional[str] = typer.Option(None, "--culture", help="balanced | pressure | wlb"),
    history: Optional[List[str]] = typer.Option(None, "--history", help="Previous utterance (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
) -> None:
    """Estimate the intent range and rank response actions."""
    system = _build_system()
    if culture is not None and culture not in ("balanced", "pressure", "wlb"):
        console.print(f"[red]Unknown culture:[/red] {culture}")
        raise typer.Exit(code=2)

    analysis = system.analyze(role, time_context, utterance, culture=culture, history=history or [])

    if as_json:
        typer.echo(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
        return

    intents = Table(title="TalkRange Intent Range", show_lines=False)
    intents.add_column("Intent", no_wrap=True)
    intents.add_column("P", justify="right")
    for item in analysis.result.range:
        intents.add_row(item.intent, f"{item.probability:.3f}")

    labels = action_labels()
    actions = Table(title="TalkRange Action EV", show_lines=True)
    actions.add_column("Action", no_wrap=True)
    actions.add_column("Label")
    actions.add_column("EV", justify="right", no_wrap=True)
    actions.add_column("Template")
    for rec in analysis.actions:
        actions.add_row(rec.action, labels.get(rec.action, ""), f"{rec.ev:.3f}", rec.template)

    console.rule("Range")
    console.print(intents)
    console.print(f"Signals: {', '.join(analysis.result.signals) or '-'} ({analysis.result.note})")
    console.rule("Actions")
    console.print(actions)
    console.rule("Decision")
    console.print(f"Choice: [bold]{analysis.actions[0].action}[/bold] → {analysis.actions[0].rationale}")


@app.command(name="scenarios")
def scenarios_cmd(
    path: Optional[Path] = typer.Argument(None, help="YAML scenario file; bundled examples when omitted"),
    as_json: bool = typer.Option(False, "--json", help="Print the outcomes as JSON"),
) -> None:
    """Run a scenario file and print the top intent and action of each."""
    system = _build_system()
    try:
        outcomes = run_scenarios(system, path)
    except TalkRangeError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([outcome.to_dict() for outcome in outcomes], ensure_ascii=False, indent=2))
        return

    table = Table(title="TalkRange Scenarios", show_lines=True)
    table.add_column("Scenario", no_wrap=True)
    table.add_column("Top intent", no_wrap=True)
    table.add_column("P", justify="right")
    table.add_column("Top action", no_wrap=True)
    table.add_column("EV", justify="right")
    for outcome in outcomes:
        table.add_row(outcome.name, outcome.top_intent, f"{outcome.top_probability:.3f}",
                      outcome.top_action, f"{outcome.top_ev:.3f}")
    console.print(table)
    console.print(f"Total: {len(outcomes)}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (defaults to $PORT or 3333)"),
) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn

    from ..api.app import create_app

    system = _build_system()
    server = _config().server
    bind_host = host or server.get('host', '0.0.0.0')
    bind_port = port or int(server.get('port', 3333))

    console.print(f"TalkRange server listening on port {bind_port}")
    uvicorn.run(create_app(system=system), host=bind_host, port=bind_port)


if __name__ == "__main__":
    app()
