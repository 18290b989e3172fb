"""Pure string helpers for building shell command lines."""

import re
import shlex

# Characters special to POSIX basic regular expressions, see re_format(7)
_BRE_SPECIAL = re.compile(r"[\]^$*.\[\\]")


def lines_to_args(lines: str) -> str:
    """Convert newline-separated values into a string of shell-quoted arguments.

    Example:
        >>> lines_to_args("long-filename-one.js\\nfilename with spaces.js")
        "long-filename-one.js 'filename with spaces.js'"
    """
    return shlex.join(line for line in lines.split("\n") if line)


def regexp_escape(text: str) -> str:
    """Escape `text` for use inside a basic regular expression."""
    return _BRE_SPECIAL.sub(r"\\\g<0>", text)
