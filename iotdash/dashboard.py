"""
Created on 2026-10-12

@author: wf
"""
from nicegui import ui


class Dashboard:
    """
    base UI for a dashboard showing a list of dicts in a ListOfDictsGrid
    """

    # Color constants for the different states
    COLORS = {
        "idle": "#d1fae5",  # Light green - data loaded
        "loading": "#f0f0f0",  # Light gray - user triggered fetch running
        "error": "#fee2e2",  # Light red - API unreachable or failing
    }

    def __init__(self, solution):
        self.solution = solution
        self.webserver = solution.webserver
        self.grid = None  # Will hold the ListOfDictsGrid instance

    def setup_legend(self):
        """
        show the color legend
        """
        with ui.row().classes("ml-auto gap-2 text-xs"):
            for state, color in self.COLORS.items():
                ui.label(state).style(
                    f"background: {color}; padding: 4px 8px; border-radius: 4px"
                )

    def setup_ui(self):
        """
        Base setup method to be overridden by subclasses
        """
        pass
