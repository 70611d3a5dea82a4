"""Click commands of the notecal CLI."""
