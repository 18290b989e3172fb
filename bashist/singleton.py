"""
Keep a script from running twice at the same time.

`ensure_singleton("deploy")` records the caller's process id in
`<lock dir>/deploy`. A later caller reads that record and, if the recorded
process is still alive, aborts with a fatal error instead of waiting.

The record is never deleted. A script that exits, crashes or is killed
leaves its pid behind, and the next caller notices that no such process
exists and takes the lock over.

Exclusivity is best-effort: reading, checking and rewriting the record are
separate steps, so two processes starting at the same instant can both
see a stale record and both proceed.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import psutil
from rich.markup import escape

from .colors import Palette
from .config import LOCK_DIR
from .console import err_console


def lock_path(lock_id: str, lock_dir: Path | None = None) -> Path:
    return (lock_dir if lock_dir is not None else LOCK_DIR) / lock_id


def read_pid(path: Path) -> int | None:
    """Return the pid recorded in `path`, or None if there is no usable record.

    Creates the file when it does not exist yet. Empty, unreadable or
    non-numeric records all mean "no holder".
    """
    path.touch()
    try:
        with open(path) as f:
            first_line = f.readline().strip()
    except OSError:
        return None
    try:
        pid = int(first_line)
    except ValueError:
        return None
    return pid if pid > 0 else None


def ensure_singleton(
    lock_id: str,
    palette: Palette,
    program: str,
    pid: int | None = None,
    lock_dir: Path | None = None,
    is_alive: Callable[[int], bool] = psutil.pid_exists,
) -> Path:
    """Claim `lock_id` for `pid` (default: this process) or die trying.

    If the recorded holder is alive, prints "'<program>' is already running!"
    on stderr and exits with status 1. Otherwise overwrites the record with
    `pid` and returns the lock file path. A lock file that cannot be read or
    written (e.g. one owned by another user) is reported and exits with 1 too.
    """
    path = lock_path(lock_id, lock_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        holder = read_pid(path)
    except OSError as e:
        err_console.print(
            f"[red]Error: could not read lock file {escape(str(path))}: {escape(str(e))}[/red]"
        )
        sys.exit(1)

    if holder is not None and is_alive(holder):
        palette.die(f"{{red}}'{program}' is already running! aborting...{{clear}}")

    try:
        with open(path, "w") as f:
            f.write(f"{pid if pid is not None else os.getpid()}\n")
    except OSError as e:
        err_console.print(
            f"[red]Error: could not write lock file {escape(str(path))}: {escape(str(e))}[/red]"
        )
        sys.exit(1)
    return path
