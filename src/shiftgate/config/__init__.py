"""Roster configuration models and loaders."""

from .loaders import load_roster, read_csv
from .models import RosterConfig

__all__ = ["RosterConfig", "load_roster", "read_csv"]
