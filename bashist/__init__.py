"""bashist - terminal helpers for shell scripts"""

from .colors import (
    COLOR_CODES,
    CapabilityTable,
    Palette,
    build_capability_table,
    tput,
)
from .config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    LOCK_DIR,
    SCRIPT_COMMAND,
    TPUT_COMMAND,
    get_setting,
    load_config,
    save_config,
)
from .console import err_console
from .filters import force_cr_on_nl, tab
from .harness import BsdScriptSession, LinuxScriptSession, TerminalSession, session_for
from .probe import arch, platform_name, which
from .prompt import ask, confirm
from .runner import tab_command
from .singleton import ensure_singleton, read_pid
from .strings import lines_to_args, regexp_escape

__all__ = [
    # Colors
    "COLOR_CODES",
    "CapabilityTable",
    "Palette",
    "build_capability_table",
    "tput",
    # Config
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "LOCK_DIR",
    "SCRIPT_COMMAND",
    "TPUT_COMMAND",
    "get_setting",
    "load_config",
    "save_config",
    # Console
    "err_console",
    # Command execution
    "BsdScriptSession",
    "LinuxScriptSession",
    "TerminalSession",
    "session_for",
    "tab_command",
    # Platform
    "arch",
    "platform_name",
    "which",
    # Prompts
    "ask",
    "confirm",
    # Singleton
    "ensure_singleton",
    "read_pid",
    # Strings
    "lines_to_args",
    "regexp_escape",
    # Filters
    "force_cr_on_nl",
    "tab",
]
