#!/usr/bin/env python3
"""
Istari - interactive command menus
Command-line entry point running the bundled demos in the text host
"""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from istari import __status__, __version__, create_session
from istari.config import config
from istari.demos import DEMOS, get_demo
from istari.exceptions import IstariException
from istari.logger import logger
from istari.ui.text import run_text

console = Console()

app = typer.Typer(
    name="istari",
    help="Istari - interactive, tree-structured command menus",
    add_completion=False
)


def show_version():
    """Show version information"""
    console.print(f"[bold cyan]{config.get('tool.name', 'Istari')}[/bold cyan] v{__version__} ({__status__})")
    console.print("[dim]Embeddable engine for interactive command menus[/dim]")


def run_demo(name: str, history_size: Optional[int] = None, async_timeout: Optional[float] = None):
    try:
        demo = get_demo(name)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="NAME")

    session = create_session(
        demo.menu, demo.state,
        history_size=history_size,
        tick_handler=demo.tick_handler,
        async_timeout=async_timeout,
    )
    logger.info(f"Starting demo '{demo.name}'")
    run_text(session, console=console)


@app.command("version", help="Show version information")
def version():
    show_version()


@app.command("list-demos", help="List the bundled demo menus")
def list_demos():
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Demo", style="cyan", no_wrap=True)
    table.add_column("Description")
    for name, builder in DEMOS.items():
        table.add_row(name, builder().description)
    console.print(table)


@app.command("demo", help="Run a demo menu in the text host")
def demo(
    name: str = typer.Argument("counter", help="Demo to run (see list-demos)"),
    history_size: Optional[int] = typer.Option(None, "--history-size", min=1,
                                               help="Commands kept in history"),
    async_timeout: Optional[float] = typer.Option(None, "--async-timeout", min=0,
                                                  help="Seconds before an async action is abandoned"),
):
    """Run a demo menu in the text host"""
    run_demo(name, history_size, async_timeout)


@app.command("config", help="Print the effective configuration")
def show_config():
    config.print_config(console)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """Run the counter demo when no command is given"""
    if ctx.invoked_subcommand is None:
        run_demo("counter")


def main():
    """
    Main entry point for Istari.
    Validates configuration, then hands over to Typer.
    """
    try:
        config.validate()
        logger.configure(
            level=config.get("logging.level"),
            directory=config.get("logging.directory"),
            max_size_mb=config.get("logging.max_size_mb"),
            backup_count=config.get("logging.backup_count"),
        )
        logger.info("Istari started")

        app()

    except IstariException as e:
        console.print(f"\n[bold red]Error: {e.message}[/bold red]")
        if e.details:
            console.print(f"[dim]Details: {e.details}[/dim]")
        logger.error(f"{e.code}: {e.message}", extra={"details": e.details})
        raise SystemExit(1)

    except KeyboardInterrupt:
        console.print("\n[bold yellow]Interrupted[/bold yellow]")
        logger.info("User interrupted (Ctrl+C)")
        raise SystemExit(0)

    except Exception as e:
        console.print(f"\n[bold red]Unexpected error: {str(e)}[/bold red]")
        logger.critical(f"Unexpected error: {str(e)}", exc_info=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
