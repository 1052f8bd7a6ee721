"""Command-line interface for scalewalk."""
