"""Terminal weather dashboard backed by the weather proxy."""

from .client import ProxyClient
from .controller import Dashboard
from .presentation import build_view
from .render import render_dashboard, get_theme
from .state import ClientState, Phase
from .storage import KeyValueStore

__all__ = [
    "ProxyClient",
    "Dashboard",
    "build_view",
    "render_dashboard",
    "get_theme",
    "ClientState",
    "Phase",
    "KeyValueStore",
]
