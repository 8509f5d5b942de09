"""Rich console shared by logging and progress output."""

from rich.console import Console

stderr_console = Console(stderr=True)
