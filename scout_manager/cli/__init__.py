"""Command-line interface for Scout Manager."""
