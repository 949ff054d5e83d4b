"""Colorized terminal output."""

import sys

import click

RULE = "━" * 60

BANNER = """\
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║   Content Processing Solution Accelerator - Deployment Script        ║
║                                                                       ║
║   Microsoft - Azure AI                                                ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝"""


class Console:
    """Prints progress messages in the deployment script's house style."""

    LEVELS = {
        "SUCCESS": ("✓", "green"),
        "ERROR": ("✗", "red"),
        "WARNING": ("⚠", "yellow"),
        "INFO": ("ℹ", "blue"),
    }

    def log(self, message: str, level: str = "INFO") -> None:
        """Print a message prefixed with the symbol for its level."""
        symbol, color = self.LEVELS.get(level, ("•", None))
        click.secho(f"{symbol} {message}", fg=color)

    def success(self, message: str) -> None:
        self.log(message, "SUCCESS")

    def error(self, message: str) -> None:
        self.log(message, "ERROR")

    def warning(self, message: str) -> None:
        self.log(message, "WARNING")

    def info(self, message: str) -> None:
        self.log(message, "INFO")

    def header(self, title: str) -> None:
        click.echo()
        click.secho(RULE, fg="blue")
        click.secho(title, fg="blue")
        click.secho(RULE, fg="blue")
        click.echo()

    def echo(self, message: str = "") -> None:
        click.echo(message)

    def banner(self) -> None:
        # Only wipe the screen of an interactive terminal
        if sys.stdout.isatty():
            click.clear()
        click.echo(BANNER)
        click.echo()
