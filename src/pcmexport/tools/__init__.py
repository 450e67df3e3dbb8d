"""Command-line helpers built on top of the writers."""
