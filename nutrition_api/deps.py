"""Dependency helpers for the API endpoints."""

from nutrition_core.data import load_dashboard_state
from nutrition_core.state import DashboardState


def get_dashboard_state() -> DashboardState:
    """Run a fresh load + merge for the request."""
    return load_dashboard_state()
