"""Weather dashboard CLI.

Runs the interactive terminal dashboard, one-off lookups, and the proxy
server itself.
"""

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from config.settings import settings
from config.logging import setup_logging
from .dashboard.client import ProxyClient
from .dashboard.controller import Dashboard
from .dashboard.presentation import build_view
from .dashboard.render import get_theme, render_dashboard
from .dashboard.state import Phase
from .dashboard.storage import KeyValueStore


app = typer.Typer(help="Weather dashboard CLI", add_completion=False)

logger = logging.getLogger(__name__)

API_URL_OPTION = typer.Option(None, "--api-url", help="Weather proxy base URL")
STORAGE_OPTION = typer.Option(None, "--storage", help="Preferences file", dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")

QUIT_COMMANDS = {":q", ":quit", ":exit"}
HELP_LINE = "Commands: a city name searches, :theme toggles the theme, :N picks recent search N, :quit exits"


class Screen:
    """Themed console that follows the dashboard's dark mode flag."""

    def __init__(self):
        self.console: Optional[Console] = None
        self.dark_mode: Optional[bool] = None

    def show(self, dashboard: Dashboard) -> None:
        dark_mode = dashboard.state.dark_mode
        if self.console is None or self.dark_mode != dark_mode:
            self.console = Console(theme=get_theme(dark_mode))
            self.dark_mode = dark_mode
        self.console.print(render_dashboard(build_view(dashboard.state, date.today())))

    def prompt(self) -> str:
        return self.console.input("[accent]City (:theme, :N, :quit)> [/accent]")


def _build_dashboard(api_url: Optional[str], storage: Optional[Path]) -> Dashboard:
    client = ProxyClient(base_url=api_url)
    store = KeyValueStore(storage or settings.dashboard_storage_path)
    return Dashboard.from_storage(client, store)


async def _handle(dashboard: Dashboard, line: str) -> bool:
    """Apply one line of input. Returns False when the user quits."""
    command = line.strip()
    if command in QUIT_COMMANDS:
        return False
    if command == ":theme":
        dashboard.toggle_theme()
    elif command[1:].isdigit() and command.startswith(":"):
        index = int(command[1:]) - 1
        recent = dashboard.state.recent_searches
        if 0 <= index < len(recent):
            await dashboard.select_recent(recent[index])
        else:
            logger.debug(f"No recent search at position {index + 1}")
    elif command.startswith(":"):
        typer.echo(HELP_LINE)
    else:
        dashboard.edit_city(line)
        await dashboard.search()
    return True


async def _interactive(dashboard: Dashboard) -> None:
    screen = Screen()
    screen.show(dashboard)
    try:
        while True:
            try:
                line = screen.prompt()
            except (EOFError, KeyboardInterrupt):
                break
            if not await _handle(dashboard, line):
                break
            screen.show(dashboard)
    finally:
        await dashboard.client.close()


async def _search_once(dashboard: Dashboard, city: str) -> Phase:
    try:
        await dashboard.search(city)
    finally:
        await dashboard.client.close()
    Screen().show(dashboard)
    return dashboard.state.phase


@app.command()
def dashboard(
    api_url: Optional[str] = API_URL_OPTION,
    storage: Optional[Path] = STORAGE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run the interactive weather dashboard."""
    setup_logging(stream="ext://sys.stderr", level="DEBUG" if debug else "WARNING", formatter="standard")
    asyncio.run(_interactive(_build_dashboard(api_url, storage)))


@app.command()
def search(
    city: str = typer.Argument(..., help="City to look up"),
    api_url: Optional[str] = API_URL_OPTION,
    storage: Optional[Path] = STORAGE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Look up one city, render the result and exit."""
    setup_logging(stream="ext://sys.stderr", level="DEBUG" if debug else "WARNING", formatter="standard")
    if not city.strip():
        typer.secho("City name is required", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    phase = asyncio.run(_search_once(_build_dashboard(api_url, storage), city))
    if phase is Phase.ERROR:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Start the weather proxy server."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=host or settings.app_host,
        port=port or settings.app_port,
        reload=reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    app()
