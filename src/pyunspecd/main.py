from __future__ import annotations

from pathlib import Path

import typer
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config.loader import find_config_file, load_discovery_config, resolve_tool_patterns
from .discovery.loader import discover_tools_sync
from .errors import UnspecdError
from .logging_config import setup_logging
from .router import run_dashboard, run_focus
from .scaffold import init_project
from .server import DEFAULT_HOST, DevServerLauncher

app = typer.Typer(add_completion=False, help="pyunspecd: discover tool specs and serve them as a web UI.")
console = Console()


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    setup_logging(verbose=verbose)


def _resolve_cwd(cwd: Path | None, *, create: bool = False) -> Path:
    cwd = cwd or Path.cwd()
    cwd = Path(str(cwd)).expanduser()
    if not cwd.is_absolute():
        cwd = (Path.cwd() / cwd).resolve()
    else:
        cwd = cwd.resolve()
    if cwd.exists() and not cwd.is_dir():
        raise typer.BadParameter(f"--cwd must be a directory, got file: {cwd}")
    if not cwd.exists():
        if not create:
            raise typer.BadParameter(f"--cwd does not exist: {cwd}")
        cwd.mkdir(parents=True, exist_ok=True)
    return cwd


def _header(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table.grid(padding=(0, 2))
    for k, v in rows:
        table.add_row(f"[bold green]{k}[/bold green]", f"[bright_cyan]{v}[/bright_cyan]")
    console.print(
        Align.center(
            Panel(
                table,
                title=f"[bold magenta]{title}[/bold magenta]",
                border_style="bright_blue",
            )
        )
    )


def _fail(e: UnspecdError) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
    return typer.Exit(code=1)


@app.command()
def init(
    cwd: Path = typer.Option(None, "--cwd", help="Directory to initialize. Defaults to current directory."),
):
    """Create a starter project (config, welcome tool, .gitignore)."""
    cwd = _resolve_cwd(cwd, create=True)
    try:
        written = init_project(cwd)
    except UnspecdError as e:
        raise _fail(e)

    console.print("[bold green]Project created.[/bold green]")
    for p in written:
        console.print(f"  [dim]wrote[/dim] {p.relative_to(cwd).as_posix()}")
    console.print("\nNext: run [bold]pyunspecd dev[/bold] and open http://localhost:3000")


@app.command()
def dev(
    cwd: Path = typer.Option(None, "--cwd", help="Project root to discover tools in. Defaults to current directory."),
    port: int = typer.Option(None, "--port", help="Port to serve on (default 3000)."),
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind."),
    title: str = typer.Option(None, "--title", help="Dashboard title."),
):
    """Discover every tool under the project and serve them as one dashboard."""
    cwd = _resolve_cwd(cwd)
    cfg = find_config_file(cwd)
    _header(
        "pyunspecd dev",
        [
            ("cwd", str(cwd)),
            ("config", str(cfg) if cfg else "(defaults)"),
            ("address", f"http://{host}:{port or 3000}"),
        ],
    )
    try:
        run_dashboard(cwd, DevServerLauncher(port=port, host=host), title=title)
    except UnspecdError as e:
        raise _fail(e)


@app.command("exec")
def exec_(
    file: str = typer.Argument(..., help="Tool file or script exposing an UnspecdUI instance."),
    port: int = typer.Option(None, "--port", help="Port to serve on (default 3000)."),
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind."),
    title: str = typer.Option(None, "--title", help="Title shown in focus mode."),
):
    """Serve a single file: its UnspecdUI instance, its tool specs, or the script itself."""
    _header("pyunspecd exec", [("file", file), ("address", f"http://{host}:{port or 3000}")])
    try:
        plan = run_focus(file, DevServerLauncher(port=port, host=host), title=title)
    except UnspecdError as e:
        raise _fail(e)
    console.print(f"[dim]mode: {plan.outcome.value}[/dim]")


@app.command()
def tools(
    cwd: Path = typer.Option(None, "--cwd", help="Project root to discover tools in. Defaults to current directory."),
):
    """List discovered tools without starting a server."""
    cwd = _resolve_cwd(cwd)
    patterns = resolve_tool_patterns(load_discovery_config(cwd))
    found = discover_tools_sync(cwd, patterns)
    if not found:
        console.print("[yellow]No tools found.[/yellow]")
        console.print(f"[dim]patterns: {', '.join(patterns)}[/dim]")
        raise typer.Exit(code=1)

    table = Table(title=f"{len(found)} tool(s)")
    table.add_column("id", style="bright_cyan")
    table.add_column("title")
    table.add_column("file", style="dim")
    for t in found:
        try:
            rel = t.file_path.relative_to(cwd).as_posix()
        except ValueError:
            rel = str(t.file_path)
        table.add_row(t.id, t.title, rel)
    console.print(table)


if __name__ == "__main__":
    app()
