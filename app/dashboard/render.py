"""Rich rendering of a DashboardView."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .presentation import DashboardView


def get_theme(dark_mode: bool) -> Theme:
    """
    Returns a Rich Theme for the dashboard's dark or light mode.
    """
    if dark_mode:
        return Theme({
            "title": "bold bright_magenta",
            "muted": "grey62",
            "accent": "bright_cyan",
            "error": "bold bright_red",
            "card": "white on grey15",
            "border": "magenta",
        })
    return Theme({
        "title": "bold blue",
        "muted": "grey42",
        "accent": "dark_cyan",
        "error": "bold red",
        "card": "black on grey93",
        "border": "blue",
    })


def _header(view: DashboardView) -> Text:
    toggle = "☀️" if view.dark_mode else "🌙"
    header = Text("🌤️ Weather Dashboard", style="title")
    header.append(f"   [{toggle} :theme]", style="muted")
    return header


def _recent(view: DashboardView) -> RenderableType:
    text = Text("Recent: ", style="muted")
    for index, city in enumerate(view.recent_searches, start=1):
        text.append(f":{index} ", style="muted")
        text.append(city, style="accent")
        text.append("  ")
    return text


def _card(view: DashboardView) -> RenderableType:
    card = view.card
    summary = Table.grid(padding=(0, 2))
    summary.add_column()
    summary.add_column(justify="right")
    summary.add_row(Text(card.city, style="title"), Text(f"{card.glyph} {card.condition}"))
    summary.add_row(Text(card.date_line, style="muted"), Text(card.icon_url or "", style="muted"))
    summary.add_row(Text(f"{card.temperature}°C", style="bold"), Text(card.description.capitalize()))

    details = Table(show_header=True, header_style="muted", box=None, expand=True)
    details.add_column("💧 Humidity", justify="center")
    details.add_column("💨 Wind", justify="center")
    details.add_column("☀️ Feels Like", justify="center")
    details.add_row(f"{card.humidity}%", f"{card.wind_speed:g} m/s", f"{card.feels_like}°C")

    return Panel(Group(summary, Text(""), details), border_style="border", style="card")


def _forecast(view: DashboardView) -> RenderableType:
    table = Table(box=None, show_header=False, expand=True)
    table.add_column("Day")
    table.add_column("Icon", justify="center")
    table.add_column("Temp", justify="right")
    for day in view.forecast:
        table.add_row(day.day, day.glyph, f"{day.temperature}°C")
    return Panel(table, title="5-Day Forecast (demo)", border_style="border")


def render_dashboard(view: DashboardView) -> RenderableType:
    """Build the renderable for one view; print it with a themed console."""
    parts = [_header(view)]
    if view.recent_searches:
        parts.append(_recent(view))
    if view.show_spinner:
        parts.append(Text("⏳ Loading...", style="accent"))
    if view.error_message:
        parts.append(Panel(Text(view.error_message, style="error"), border_style="error"))
    if view.card is not None:
        parts.append(_card(view))
        parts.append(_forecast(view))
    parts.append(Text("Data provided by OpenWeatherMap", style="muted"))
    return Group(*parts)
