"""
Dashboard module for the sous-vide panel.

Provides the poll-and-render loop and the command relay:
- 1 second state polling
- Label view-model
- Fire-and-forget device commands
- Terminal rendering
"""

from sousvide.dashboard.view import PanelView
from sousvide.dashboard.console import LivePanel, build_panel
from sousvide.dashboard.poller import StatePoller
from sousvide.dashboard.commands import CommandDispatcher
from sousvide.dashboard.panel import ControlPanel, UnknownHandlerError

__all__ = [
    "PanelView",
    "StatePoller",
    "CommandDispatcher",
    "ControlPanel",
    "UnknownHandlerError",
    "LivePanel",
    "build_panel",
]
