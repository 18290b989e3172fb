"""
Run a child command with its output indented beneath a header.

`tab_command` is the preferred way to show a sub-tool's output in a
section: the child keeps its colors because it runs inside a
pseudo-terminal session, every line of its combined output is indented by
four spaces, and the caller gets the child's real exit status back rather
than the status of the indentation step.

Known limitation: children that drive the terminal heavily (progress bars,
cursor movement) can render oddly once indented.
"""

import sys
from collections.abc import Sequence
from typing import BinaryIO

from .console import err_console
from .filters import tab
from .harness import TerminalSession, session_for

# Shell convention for a command that could not be found or started
COMMAND_NOT_FOUND = 127


def exit_status(returncode: int) -> int:
    """Translate a Popen return code into a shell-style exit status.

    A child killed by signal N has returncode -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def tab_command(
    argv: Sequence[str],
    session: TerminalSession | None = None,
    dst: BinaryIO | None = None,
) -> int:
    """Run `argv`, indent its combined output onto `dst`, return its exit status.

    A blank line is written after the child's output as a visual separator,
    whatever the outcome.
    """
    if not argv:
        raise ValueError("tab_command needs a command to run")
    session = session if session is not None else session_for()
    dst = dst if dst is not None else sys.stdout.buffer

    try:
        proc = session.spawn(argv)
    except OSError as e:
        err_console.print(f"[red]Error: could not run {argv[0]}: {e}[/red]")
        status = COMMAND_NOT_FOUND
    else:
        with proc:
            assert proc.stdout is not None
            tab(proc.stdout, dst)
            status = exit_status(proc.wait())

    dst.write(b"\n")
    dst.flush()
    return status

