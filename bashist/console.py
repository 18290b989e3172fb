"""
Shared Rich Console singletons for diagnostic output.

Every warning or error the toolkit reports about itself (bad config, a
command that could not be started) goes through `err_console`, so the
shell script's own stdout stays clean for the text it asked us to produce.

Rendered color strings and indented child output do NOT go through Rich:
they already carry raw terminal escape sequences, and they must reach the
stream byte for byte.

Usage:
    from .console import err_console
    err_console.print("[yellow]Warning: ...[/yellow]")
"""

from rich.console import Console

# Diagnostics are written to stderr. Tests can patch this object in one place.
err_console = Console(stderr=True, highlight=False)
