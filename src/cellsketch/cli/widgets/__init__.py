"""TUI widgets for the diagram editor."""
