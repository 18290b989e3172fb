"""
Host platform detection.

The command wrapper picks its pseudo-terminal strategy from the label
returned here. Labels form a closed set so callers can switch on them
without a fallthrough surprise.
"""

import platform
import shutil

WINDOWS = "windows"
MAC = "mac"
LINUX = "linux"
UNSUPPORTED = "unsupported"

PLATFORMS = (WINDOWS, MAC, LINUX, UNSUPPORTED)


def platform_name(system: str | None = None) -> str:
    """Return this machine's platform label.

    `system` is the `uname`-style report; it defaults to `platform.system()`.
    MSYS/Cygwin shells report names such as "MINGW64_NT-10.0", so any report
    containing "NT" counts as Windows, as does native Python's "Windows".
    """
    if system is None:
        system = platform.system()
    if "NT" in system or system == "Windows":
        return WINDOWS
    if system == "Darwin":
        return MAC
    if system == "Linux":
        return LINUX
    return UNSUPPORTED


def arch(machine: str | None = None) -> str:
    """Return the CPU word width of this machine: "x64" or "x86"."""
    if machine is None:
        machine = platform.machine()
    if machine in ("x86_64", "AMD64"):
        return "x64"
    return "x86"


def which(executable: str) -> bool:
    """True if `executable` exists on the user's PATH"""
    return shutil.which(executable) is not None
