"""Command line interface for notecal."""
