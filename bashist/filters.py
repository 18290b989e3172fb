"""
Line-oriented output filters.

Both filters copy a byte stream line by line, adding a prefix to the start
of every line and flushing after each one, so output that a user is
watching live (`tail -f`, a long build) shows up as it is produced rather
than when the stream ends.
"""

import sys
from typing import BinaryIO

INDENT = b"    "


def prefix_lines(src: BinaryIO, dst: BinaryIO, prefix: bytes) -> int:
    """Copy `src` to `dst`, writing `prefix` before every line.

    A final line without a trailing newline is still prefixed. Reaching the
    end of the stream right after a newline does not produce an extra line.
    Returns the number of lines written.
    """
    count = 0
    for line in iter(src.readline, b""):
        dst.write(prefix + line)
        dst.flush()
        count += 1
    return count


def tab(src: BinaryIO | None = None, dst: BinaryIO | None = None) -> int:
    """Indent every line of `src` (stdin) by four spaces onto `dst` (stdout).

    Usage from a shell script:
        some-command | bashist tab
    """
    src = src if src is not None else sys.stdin.buffer
    dst = dst if dst is not None else sys.stdout.buffer
    return prefix_lines(src, dst, INDENT)


def force_cr_on_nl(src: BinaryIO | None = None, dst: BinaryIO | None = None) -> int:
    """Put a carriage return at the start of every line.

    Output from a backgrounded SSH session that requested a pseudo-TTY,
    interleaved with the host terminal's output, can lose its carriage
    returns and drift to the right:

        Line 1
              Line 2
                    Line 3

    Prefixing each line with "\\r" returns the cursor to column zero. Lines
    that already had one end up with two, which is invisible to the user.
    """
    src = src if src is not None else sys.stdin.buffer
    dst = dst if dst is not None else sys.stdout.buffer
    return prefix_lines(src, dst, b"\r")
