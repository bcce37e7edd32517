"""Main entry point for the Typer-based CLI for Thumbforge."""

from thumbforge.cli.main import app


def main() -> None:
    """Entry point for the CLI."""
    app()
