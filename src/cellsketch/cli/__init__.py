"""Command-line interface and terminal editor."""
