"""Console presentation for match snapshots."""

from goalkick.ui.console import ConsoleView, render_scenario, render_state

__all__ = ["ConsoleView", "render_scenario", "render_state"]
