"""
Symbolic color/format codes and the engine that renders them.

A format string is ordinary text with format codes mixed in. A format code
is a symbolic name wrapped in curly braces, e.g. `{red}` or `{bold}`, and it
applies to every following character until another code overrides it:

    '{red}Red, {bold}bold beautiful text!{clear}'

How it works:
  1. At process start, `build_capability_table()` asks the terminal
     capability service (`tput`) for the control sequence behind every
     symbolic code, once. An unknown terminal or a missing `tput` simply
     leaves that code empty; colorized output must never crash a script.
  2. A `Palette` wraps the resulting `CapabilityTable` and substitutes
     `{code}` placeholders with the resolved sequences, one code at a time
     in declared order.

Caveats:
  - You *must* send `{clear}` when you are done with formatted text, or the
    formatting leaks into the user's prompt and into later programs. The
    engine does not add it for you.
  - There is no escape for a literal `{clear}`-shaped string in user text.
  - Placeholders naming an unknown code are left alone.
"""

import subprocess
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .config import TPUT_COMMAND

# Order matters: rendering replaces codes in exactly this order.
COLOR_CODES: tuple[str, ...] = (
    "clear",  # reset
    "black", "red", "green", "yellow", "blue", "purple", "cyan", "white",  # colors
    "bold", "dim",  # bold/bright, unbold/dim
    "rev",  # reverse video
    "under", "nounder",  # underline, no underline
)

# Terminal capability query for each code, aligned with COLOR_CODES.
CAPABILITY_QUERIES: tuple[tuple[str, ...], ...] = (
    ("sgr0",),
    ("setaf", "0"), ("setaf", "1"), ("setaf", "2"), ("setaf", "3"),
    ("setaf", "4"), ("setaf", "5"), ("setaf", "6"), ("setaf", "7"),
    ("bold",), ("dim",),
    ("rev",),
    ("smul",), ("rmul",),
)

HEADER_MARKER = "-->"

CapabilityQuery = Callable[[Sequence[str]], str]


def tput(capability: Sequence[str], command: str = TPUT_COMMAND) -> str:
    """Return the control sequence for `capability`, or "" if unsupported.

    tput exits non-zero for capabilities the terminal lacks and for unknown
    terminal types; both mean "substitute nothing here".
    """
    try:
        result = subprocess.run(
            [command, *capability],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class CapabilityTable:
    """Resolved control sequence for every symbolic code, in declared order."""

    sequences: tuple[str, ...]

    def __post_init__(self):
        if len(self.sequences) != len(COLOR_CODES):
            raise ValueError(
                f"Capability table needs {len(COLOR_CODES)} entries, got {len(self.sequences)}"
            )

    @classmethod
    def from_mapping(cls, mapping: dict[str, str]) -> "CapabilityTable":
        """Build a table from {code: sequence}; missing codes resolve to ""."""
        return cls(tuple(mapping.get(code, "") for code in COLOR_CODES))

    @classmethod
    def empty(cls) -> "CapabilityTable":
        return cls(("",) * len(COLOR_CODES))

    def items(self) -> list[tuple[str, str]]:
        return list(zip(COLOR_CODES, self.sequences))

    def __getitem__(self, code: str) -> str:
        return self.sequences[COLOR_CODES.index(code)]


def build_capability_table(query: CapabilityQuery = tput) -> CapabilityTable:
    """Query the terminal once per symbolic code and freeze the results."""
    return CapabilityTable(tuple(query(capability) for capability in CAPABILITY_QUERIES))


class Palette:
    """Renders format strings against one CapabilityTable.

    The table is built once per process and handed in, so everything that
    renders shares the same read-only resolution.
    """

    def __init__(self, table: CapabilityTable):
        self.table = table
        self._pairs = [("{" + code + "}", sequence) for code, sequence in table.items()]

    def render(self, *strings: str) -> str:
        """Join `strings` with single spaces and substitute every format code."""
        text = " ".join(strings)
        for placeholder, sequence in self._pairs:
            text = text.replace(placeholder, sequence)
        return text

    def echo(self, *strings: str, file=None):
        """Write the rendered strings and a newline to stdout (or `file`)."""
        out = file if file is not None else sys.stdout
        out.write(self.render(*strings) + "\n")
        out.flush()

    def error(self, *strings: str):
        """Write the rendered strings to standard error."""
        self.echo(*strings, file=sys.stderr)

    def die(self, *strings: str):
        """Write the rendered strings to standard error, then exit with status 1."""
        self.error(*strings)
        sys.exit(1)

    def header(self, *strings: str, file=None):
        """Write `strings` preceded by an arrow marker to indicate a section header.

        Pair with `tab` or `tab_command` to output the section beneath it.
        """
        self.echo(HEADER_MARKER, *strings, file=file)
