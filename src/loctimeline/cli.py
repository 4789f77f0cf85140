"""Command-line interface for loctimeline."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from loctimeline.logging_config import configure_logging
from loctimeline.models import CommitStats, Settings, TimelineSnapshot
from loctimeline.timeline import TimelineSession

app = typer.Typer(
    name="loctimeline",
    help="Commit history timeline - explore a repository's lines of code over time",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default from LOCTIMELINE_LOG_LEVEL)"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Explore a repository's commit history from its per-line dataset."""
    settings = Settings()
    configure_logging(log_level or settings.log_level, json_format=json_logs or settings.log_json)


def _settings(repo_url: Optional[str]) -> Settings:
    settings = Settings()
    if repo_url:
        settings = settings.model_copy(update={"repo_url": repo_url})
    return settings


def _check_cutoff_options(cutoff: Optional[str], progress: Optional[float]) -> None:
    if cutoff is not None and progress is not None:
        raise typer.BadParameter("Use either --cutoff or --progress, not both")


def _open(
    data: Optional[Path],
    repo_url: Optional[str],
    cutoff: Optional[str] = None,
    progress: Optional[float] = None,
) -> TimelineSession:
    """Build a session and move it to the requested cutoff."""
    session = TimelineSession.from_file(data, _settings(repo_url))
    if cutoff is not None:
        session.machine.set_cutoff(session.parse_instant(cutoff))
    elif progress is not None:
        session.slider.on_input(progress)
    return session


def _print_cutoff(snapshot: TimelineSnapshot) -> None:
    state = snapshot.state
    if state.cutoff_time is None:
        console.print("[yellow]No commits in dataset[/yellow]")
        return
    console.print(f"[bold blue]Cutoff:[/bold blue] {state.label} [dim]({state.progress:.1f}%)[/dim]")


def _stats_table(stats: CommitStats) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", justify="right", style="yellow")

    table.add_row("COMMITS", str(stats.commits))
    table.add_row("FILES", str(stats.files))
    table.add_row("TOTAL_LOC", str(stats.total_lines))
    table.add_row("MAX_DEPTH", str(stats.max_depth))
    table.add_row("LONGEST_LINE", str(stats.longest_line))
    table.add_row("MAX_LINES", str(stats.max_lines))
    table.add_row("AUTHORS", str(stats.authors))
    return table


@app.command()
def summary(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv (default from LOCTIMELINE_DATA_FILE)"),
    cutoff: Optional[str] = typer.Option(None, "--cutoff", "-c", help="Cutoff instant (ISO 8601)"),
    progress: Optional[float] = typer.Option(None, "--progress", "-p", min=0, max=100, help="Slider position 0-100"),
    repo_url: Optional[str] = typer.Option(None, "--repo-url", help="Repository base URL for commit links"),
) -> None:
    """Show summary statistics at a cutoff."""
    _check_cutoff_options(cutoff, progress)
    try:
        session = _open(data, repo_url, cutoff, progress)
        snapshot = session.snapshot

        _print_cutoff(snapshot)
        console.print(_stats_table(snapshot.stats))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def scatter(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv"),
    cutoff: Optional[str] = typer.Option(None, "--cutoff", "-c", help="Cutoff instant (ISO 8601)"),
    progress: Optional[float] = typer.Option(None, "--progress", "-p", min=0, max=100, help="Slider position 0-100"),
    repo_url: Optional[str] = typer.Option(None, "--repo-url", help="Repository base URL for commit links"),
) -> None:
    """Show the scatterplot geometry (one circle per commit)."""
    _check_cutoff_options(cutoff, progress)
    try:
        session = _open(data, repo_url, cutoff, progress)
        geometry = session.snapshot.scatter

        _print_cutoff(session.snapshot)
        if geometry.is_empty:
            console.print("[yellow]No commits at or before this cutoff[/yellow]")
            return

        start, end = geometry.x_domain
        console.print(f"[bold blue]Time domain:[/bold blue] {start.isoformat()} .. {end.isoformat()}")
        console.print(f"[bold blue]Lines domain:[/bold blue] {geometry.r_domain[0]} .. {geometry.r_domain[1]}\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Commit", style="cyan", width=10)
        table.add_column("Date", style="blue")
        table.add_column("Lines", justify="right", style="yellow")
        table.add_column("x", justify="right")
        table.add_column("y", justify="right")
        table.add_column("r", justify="right", style="green")

        for point in geometry.points:
            table.add_row(
                point.commit_id[:7],
                point.datetime.strftime("%Y-%m-%d %H:%M"),
                str(point.total_lines),
                f"{point.x:.1f}",
                f"{point.y:.1f}",
                f"{point.r:.1f}",
            )

        console.print(table)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def files(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv"),
    cutoff: Optional[str] = typer.Option(None, "--cutoff", "-c", help="Cutoff instant (ISO 8601)"),
    progress: Optional[float] = typer.Option(None, "--progress", "-p", min=0, max=100, help="Slider position 0-100"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum files to show"),
) -> None:
    """List files by number of lines at a cutoff."""
    _check_cutoff_options(cutoff, progress)
    try:
        session = _open(data, None, cutoff, progress)
        aggregates = session.snapshot.files

        _print_cutoff(session.snapshot)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("File", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Lines", justify="right", style="yellow")
        table.add_column("Color")

        for aggregate in aggregates[:limit]:
            table.add_row(
                aggregate.name,
                aggregate.type,
                str(aggregate.line_count),
                f"[{aggregate.color}]■[/] {aggregate.color}",
            )

        console.print(table)
        if len(aggregates) > limit:
            console.print(f"[dim]... and {len(aggregates) - limit} more files[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def story(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv"),
    repo_url: Optional[str] = typer.Option(None, "--repo-url", help="Repository base URL for commit links"),
) -> None:
    """Print the commit narrative, one step per commit."""
    try:
        session = TimelineSession.from_file(data, _settings(repo_url))

        for step in session.steps:
            console.print(f"[bold]{step.index + 1}.[/bold] {step.text}", soft_wrap=True)
            console.print(f"   [dim]{step.url}[/dim]")

        console.print(f"\n[bold green]✓[/bold green] {len(session.steps)} steps")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def replay(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv"),
) -> None:
    """Scroll through the narrative and show the stats at every step."""
    try:
        session = TimelineSession.from_file(data, _settings(None))

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Step", justify="right", style="cyan")
        table.add_column("Cutoff", style="blue")
        table.add_column("Progress", justify="right")
        table.add_column("Commits", justify="right", style="yellow")
        table.add_column("Files", justify="right")
        table.add_column("LOC", justify="right")
        table.add_column("Max lines", justify="right", style="green")

        for step in session.steps:
            snapshot = session.scroller.on_step_enter(step.index)
            table.add_row(
                str(step.index + 1),
                snapshot.state.label,
                f"{snapshot.state.progress:.1f}%",
                str(snapshot.stats.commits),
                str(snapshot.stats.files),
                str(snapshot.stats.total_lines),
                str(snapshot.stats.max_lines),
            )

        console.print(table)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def export(
    data: Optional[Path] = typer.Argument(None, help="Path to loc.csv"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file (default: stdout)"),
    cutoff: Optional[str] = typer.Option(None, "--cutoff", "-c", help="Cutoff instant (ISO 8601)"),
    progress: Optional[float] = typer.Option(None, "--progress", "-p", min=0, max=100, help="Slider position 0-100"),
    repo_url: Optional[str] = typer.Option(None, "--repo-url", help="Repository base URL for commit links"),
) -> None:
    """Export the view state at a cutoff, plus the narrative, as JSON."""
    _check_cutoff_options(cutoff, progress)
    try:
        session = _open(data, repo_url, cutoff, progress)
        payload = {
            "snapshot": session.snapshot.model_dump(mode="json"),
            "steps": [step.model_dump(mode="json") for step in session.steps],
            "step_offset": session.scroller.offset,
        }

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w") as f:
                json.dump(payload, f, indent=2, default=str)
            console.print(f"[bold green]✓[/bold green] Saved to {output}")
        else:
            typer.echo(json.dumps(payload, indent=2, default=str))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
