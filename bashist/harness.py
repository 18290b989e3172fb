"""
Pseudo-terminal sessions for child commands.

Many tools switch off colors and progress output as soon as they notice
their stdout is not a terminal, which is exactly what happens when we
capture their output to indent it. A session puts a terminal harness, the
`script` utility, between the child and our pipe so the child still sees a
TTY while we read a plain byte stream.

Every session has the same contract: start `argv`, merge stderr into
stdout, hand back a process whose exit status is the child's own, and leave
the byte stream otherwise untouched. Only the harness command line differs
per platform, so each platform is one small subclass and `session_for()`
picks between them.
"""

import shlex
import subprocess
from collections.abc import Sequence

from . import probe
from .config import SCRIPT_COMMAND


class TerminalSession:
    """Runs the command directly, with no terminal emulation.

    Used where no harness exists (Windows). The child may disable colors.
    """

    def __init__(self, harness: str = SCRIPT_COMMAND):
        self.harness = harness

    def command_line(self, argv: Sequence[str]) -> list[str]:
        return list(argv)

    def spawn(self, argv: Sequence[str]) -> subprocess.Popen:
        """Start `argv` with its combined output on the returned process's stdout."""
        return subprocess.Popen(
            self.command_line(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )


class LinuxScriptSession(TerminalSession):
    """util-linux `script`: takes a single shell command line.

    The typescript goes to /dev/null and `--return` makes `script` exit with
    the child's status instead of its own.
    """

    def command_line(self, argv: Sequence[str]) -> list[str]:
        return [self.harness, "-q", "/dev/null", "-c", shlex.join(argv), "--return"]


class BsdScriptSession(TerminalSession):
    """BSD/macOS `script`: takes the argument vector and forwards the exit status."""

    def command_line(self, argv: Sequence[str]) -> list[str]:
        return [self.harness, "-q", "/dev/null", *argv]


SESSIONS: dict[str, type[TerminalSession]] = {
    probe.WINDOWS: TerminalSession,
    probe.LINUX: LinuxScriptSession,
}


def session_for(platform: str | None = None, harness: str = SCRIPT_COMMAND) -> TerminalSession:
    """Return the session strategy for `platform` (default: this machine).

    Anything that is neither Windows nor Linux gets the BSD flavor of
    `script`, which is what macOS ships.
    """
    if platform is None:
        platform = probe.platform_name()
    return SESSIONS.get(platform, BsdScriptSession)(harness)
