"""Command-line interface for shiftgate."""
