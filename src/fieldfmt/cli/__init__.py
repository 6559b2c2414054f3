"""Command-line interface for fieldfmt."""
