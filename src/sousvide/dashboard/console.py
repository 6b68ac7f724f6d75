"""
Terminal rendering of the panel with Rich.
"""

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from sousvide.dashboard.view import ON, PanelView


def _badge(label: str) -> str:
    """Color-coded On/Off badge."""
    if not label:
        return "[dim]--[/]"
    return f"[bold {'green' if label == ON else 'red'}]{escape(label)}[/]"


def _current(view: PanelView) -> str:
    if view.cur_temp_missing:
        return f"[red]{escape(view.cur_temp_label)}[/]"
    return escape(view.cur_temp_label) or "[dim]--[/]"


def build_panel(view: PanelView, url: str = "") -> Panel:
    """Build the renderable for one frame."""
    table = Table(box=box.SIMPLE, show_header=False, expand=True)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Target", escape(view.set_temp_label) or "[dim]--[/]")
    table.add_row("Current", _current(view))
    table.add_row("Pump", _badge(view.pump_label))
    table.add_row("Heater", _badge(view.heater_label))

    footer = Text(view.version_label, style="dim")

    return Panel(
        Group(table, footer),
        title="[bold]Sous Vide[/]",
        subtitle=url or None,
        box=box.ROUNDED,
    )


def make_console() -> Console:
    return Console(highlight=False)


class LivePanel:
    """Renderable that rebuilds the panel from the view on every refresh."""

    def __init__(self, view: PanelView, url: str = ""):
        self._view = view
        self._url = url

    def __rich__(self) -> Panel:
        return build_panel(self._view, self._url)
