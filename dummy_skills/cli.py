"""Command-line interface for dispatching dummy skills.

Usage:
    dummy-skills execute ConditionTrue        # run to completion
    dummy-skills tick Action1SecondSuccess    # tick until finished
    dummy-skills list                         # show registered skills
    dummy-skills config show                  # show effective config
    dummy-skills config init                  # write a starter config file

The exit code mirrors the skill status: 0 for SUCCESS, 1 for FAILURE,
2 for ERROR.
"""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dummy_skills import __version__
from dummy_skills.config import DispatchConfig
from dummy_skills.skills.base import SkillConfigError, SkillRegistry, StatusCode
from dummy_skills.skills.dispatcher import SkillDispatcher, portable_sleep
from dummy_skills.skills.ticking import SkillState, TickingDispatcher

console = Console()

app = typer.Typer(
    name="dummy-skills",
    help="Dispatch stand-in skills and report their status.",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Inspect and create configuration files.", no_args_is_help=True)
app.add_typer(config_app, name="config")

EXIT_CODES = {
    StatusCode.SUCCESS: 0,
    StatusCode.FAILURE: 1,
    StatusCode.ERROR: 2,
}

STATUS_STYLES = {
    StatusCode.RUNNING: "yellow",
    StatusCode.SUCCESS: "green",
    StatusCode.FAILURE: "red",
    StatusCode.ERROR: "bold red",
}

ConfigOption = typer.Option(None, "--config", "-c", help="Path to a config file")
JsonOption = typer.Option(False, "--json", help="Output as JSON")


def _configure_logging(level: str, quiet: bool = False) -> None:
    """Send log records to stdout. JSON output keeps stdout clean."""
    logging.basicConfig(
        level=logging.CRITICAL if quiet else logging.getLevelName(level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True,
    )


def _load(config_path: str | None, quiet: bool) -> tuple[DispatchConfig, SkillRegistry]:
    """Load and validate configuration, exiting with ERROR's code on problems."""
    try:
        config = DispatchConfig.load(config_path)
    except SkillConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=EXIT_CODES[StatusCode.ERROR]) from e

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]Configuration error:[/red] {escape(error)}")
        raise typer.Exit(code=EXIT_CODES[StatusCode.ERROR])

    # log_level is one of LOG_LEVELS once validated
    _configure_logging(config.log_level, quiet=quiet)
    return config, config.build_registry()


def _echo_json(data: dict) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.command()
def execute(
    name: str = typer.Argument(..., help="Skill name (case-sensitive)"),
    delay: bool | None = typer.Option(
        None, "--delay/--no-delay", help="Sleep for the skill's simulated duration"
    ),
    config_path: str | None = ConfigOption,
    json_output: bool = JsonOption,
):
    """Execute a skill to completion and report its status."""
    config, registry = _load(config_path, quiet=json_output)
    simulate_delay = config.simulate_delay if delay is None else delay

    dispatcher = SkillDispatcher(registry, simulate_delay=simulate_delay)
    status = dispatcher.execute(name)

    if json_output:
        _echo_json({"skill": name, "status": status.name, "code": int(status)})
    else:
        style = STATUS_STYLES[status]
        console.print(f"{escape(name)}: [{style}]{status.name}[/{style}]")

    raise typer.Exit(code=EXIT_CODES[status])


@app.command()
def tick(
    name: str = typer.Argument(..., help="Skill name (case-sensitive)"),
    interval_ms: int | None = typer.Option(
        None, "--interval-ms", min=0, help="Pause between ticks in milliseconds"
    ),
    max_ticks: int | None = typer.Option(
        None, "--max-ticks", min=1, help="Halt the skill after this many ticks"
    ),
    config_path: str | None = ConfigOption,
    json_output: bool = JsonOption,
):
    """Tick a skill until it finishes, halting it after --max-ticks."""
    config, registry = _load(config_path, quiet=json_output)
    interval = config.tick_interval_ms if interval_ms is None else interval_ms

    dispatcher = TickingDispatcher(registry)
    ticks = 0
    status = StatusCode.RUNNING
    while max_ticks is None or ticks < max_ticks:
        status = dispatcher.tick(name)
        ticks += 1
        if status.is_terminal or ticks == max_ticks:
            break
        portable_sleep(interval)

    if not status.is_terminal:
        dispatcher.halt(name)
        status = dispatcher.tick(name)

    state = dispatcher.state(name)
    state_name = state.value.upper() if state else status.name

    if json_output:
        _echo_json(
            {
                "skill": name,
                "status": status.name,
                "state": state_name,
                "ticks": ticks,
            }
        )
    else:
        style = STATUS_STYLES[status]
        suffix = " (halted)" if state is SkillState.HALTED else ""
        console.print(f"{escape(name)}: [{style}]{status.name}[/{style}]{suffix} after {ticks} ticks")

    raise typer.Exit(code=EXIT_CODES[status])


@app.command("list")
def list_skills(
    config_path: str | None = ConfigOption,
    json_output: bool = JsonOption,
):
    """List registered skills."""
    _, registry = _load(config_path, quiet=json_output)

    if json_output:
        _echo_json(registry.get_info())
        return

    table = Table(title=f"Skills ({len(registry)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Description", style="dim")

    for descriptor in registry:
        style = STATUS_STYLES[descriptor.outcome]
        table.add_row(
            descriptor.name,
            f"[{style}]{descriptor.outcome.name}[/{style}]",
            str(descriptor.duration_ms),
            descriptor.description,
        )

    console.print(table)


@config_app.command("show")
def config_show(
    config_path: str | None = ConfigOption,
    json_output: bool = JsonOption,
):
    """Show the effective configuration."""
    try:
        config = DispatchConfig.load(config_path)
    except SkillConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=EXIT_CODES[StatusCode.ERROR]) from e

    errors = config.validate()

    if json_output:
        _echo_json({"source": config.source, "config": config.to_dict(), "errors": errors})
    else:
        console.print(f"[bold]Source:[/bold] {config.source or '(defaults)'}")
        console.print(f"  simulate_delay: {config.simulate_delay}")
        console.print(f"  log_level: {config.log_level}")
        console.print(f"  tick_interval_ms: {config.tick_interval_ms}")
        console.print(f"  skills: {len(config.skills)}")
        for error in errors:
            console.print(f"  [red]- {error}[/red]")

    if errors:
        raise typer.Exit(code=1)


@config_app.command("init")
def config_init(
    path: Path = typer.Argument(Path("dummy-skills.yml"), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a config file holding the default settings and skills."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists[/red] (use --force to overwrite)")
        raise typer.Exit(code=1)

    DispatchConfig().save(str(path))
    console.print(f"[green]Wrote {path}[/green]")


@app.command()
def version():
    """Show the package version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
