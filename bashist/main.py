"""
Command-line entry point used by shell scripts.

Each subcommand maps onto one toolkit function, so a script can write

    bashist header "{bold}Installing dependencies{clear}"
    bashist tab-command npm install || bashist die "{red}npm failed{clear}"
    bashist singleton nightly-sync

The capability table is built at most once per invocation, and only for
subcommands that render format strings.
"""

import argparse
import os
import sys

import psutil

from . import probe
from .colors import Palette, build_capability_table
from .config import CONFIG_FILE, DEFAULT_CONFIG, get_setting, load_config, save_config
from .console import err_console
from .filters import force_cr_on_nl, tab
from .prompt import ask, confirm
from .runner import tab_command
from .singleton import ensure_singleton
from .strings import lines_to_args, regexp_escape

# Subcommands that take every argument as format text
VERBATIM_COMMANDS = ("color", "error", "die", "header")

DASH_HINT = "put -- first when the value starts with '-'"


def script_name(cmdline: list[str]) -> str | None:
    """Script path from an interpreter command line, e.g. `bash -e sync.sh`.

    That is the first non-option argument after the interpreter. Inline
    code (`bash -c ...`) has no script, so the result is None.
    """
    for arg in cmdline[1:]:
        if arg == "-c":
            return None
        if not arg.startswith("-"):
            return arg
    return None


def parent_name() -> str:
    """Name of the program that invoked us, normally the calling script."""
    try:
        parent = psutil.Process(os.getppid())
        return script_name(parent.cmdline()) or parent.name()
    except psutil.Error:
        return "bashist"


def cmd_color(args, palette: Palette) -> int:
    palette.echo(*args.text)
    return 0


def cmd_error(args, palette: Palette) -> int:
    palette.error(*args.text)
    return 0


def cmd_die(args, palette: Palette) -> int:
    palette.die(*args.text)
    return 1


def cmd_header(args, palette: Palette) -> int:
    palette.header(*args.text)
    return 0


def cmd_singleton(args, palette: Palette) -> int:
    ensure_singleton(
        args.id,
        palette,
        program=args.name or parent_name(),
        pid=args.pid if args.pid is not None else os.getppid(),
    )
    return 0


def cmd_tab(_args) -> int:
    tab()
    return 0


def cmd_cr(_args) -> int:
    force_cr_on_nl()
    return 0


def cmd_tab_command(args) -> int:
    command = args.command
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        err_console.print("[red]Error: tab-command needs a command to run[/red]")
        return 2
    return tab_command(command)


def cmd_platform(_args) -> int:
    print(probe.platform_name())
    return 0


def cmd_arch(_args) -> int:
    print(probe.arch())
    return 0


def cmd_which(args) -> int:
    return 0 if probe.which(args.executable) else 1


def cmd_ask(args) -> int:
    try:
        answer = ask(args.prompt, args.default)
    except EOFError:
        answer = args.default or ""
    print(answer)
    return 0


def cmd_confirm(args) -> int:
    try:
        return 0 if confirm(args.prompt) else 1
    except EOFError:
        return 1


def cmd_regexp_escape(args) -> int:
    print(regexp_escape(args.text))
    return 0


def cmd_lines_to_args(args) -> int:
    print(lines_to_args(args.lines))
    return 0


def cmd_config(args) -> int:
    """Handle `bashist config` - show or change persisted settings.

    Subcommands:
      config list            - Show every setting with its effective value
      config get KEY         - Show one setting's effective value
      config set KEY VALUE   - Save a setting to the config file

    Effective values follow the usual priority (env var > config file >
    default), so a setting saved here can still be overridden per run from
    the environment.
    """
    if args.action in ("get", "set"):
        if not args.key:
            err_console.print(f"[red]Error: config {args.action} needs a KEY[/red]")
            return 2
        key = args.key.upper()
        if key not in DEFAULT_CONFIG:
            err_console.print(
                f"[red]Unknown setting: {key}\nAvailable keys: {', '.join(DEFAULT_CONFIG)}[/red]"
            )
            return 2

    if args.action == "list":
        for key, default in DEFAULT_CONFIG.items():
            print(f"{key}={get_setting(key, default)}")
        print(f"# config file: {CONFIG_FILE}")
    elif args.action == "get":
        print(get_setting(key, DEFAULT_CONFIG[key]))
    else:
        if args.value is None:
            err_console.print("[red]Error: config set needs a VALUE[/red]")
            return 2
        config = load_config()
        config[key] = args.value
        if not save_config(config):
            return 1
        err_console.print(f"[green]Updated {key} in {CONFIG_FILE}[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bashist", description="Terminal helpers for shell scripts"
    )
    sub = parser.add_subparsers(dest="subcommand", required=True)

    # Subcommands that render format strings get a Palette
    for name, func, help_text in (
        ("color", cmd_color, "Output formatted strings"),
        ("error", cmd_error, "Output formatted strings to standard error"),
        ("die", cmd_die, "Output formatted strings to standard error and exit 1"),
        ("header", cmd_header, "Output formatted strings as a '-->' header"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(
            "text", nargs="*", help="Format strings, e.g. '{red}oops{clear}', output verbatim"
        )
        p.set_defaults(func=func, needs_palette=True)

    p = sub.add_parser("singleton", help="Abort if another copy of ID is running")
    p.add_argument("id", help="Lock identifier")
    p.add_argument("--pid", type=int, help="Pid to record (default: the calling process)")
    p.add_argument("--name", help="Program name for the error message")
    p.set_defaults(func=cmd_singleton, needs_palette=True)

    p = sub.add_parser("tab", help="Indent standard input by four spaces")
    p.set_defaults(func=cmd_tab)

    p = sub.add_parser("cr", help="Prefix every line of standard input with a carriage return")
    p.set_defaults(func=cmd_cr)

    p = sub.add_parser(
        "tab-command", help="Run a command in a pseudo-terminal and indent its output"
    )
    p.add_argument("command", nargs=argparse.REMAINDER, help="Command and arguments")
    p.set_defaults(func=cmd_tab_command)

    p = sub.add_parser("platform", help="Print windows, mac, linux or unsupported")
    p.set_defaults(func=cmd_platform)

    p = sub.add_parser("arch", help="Print x64 or x86")
    p.set_defaults(func=cmd_arch)

    p = sub.add_parser("which", help="Succeed if EXECUTABLE is on PATH")
    p.add_argument("executable", help=DASH_HINT)
    p.set_defaults(func=cmd_which)

    p = sub.add_parser("ask", help="Prompt for one line of input and print it")
    p.add_argument("prompt", help=DASH_HINT)
    p.add_argument("default", nargs="?")
    p.set_defaults(func=cmd_ask)

    p = sub.add_parser("confirm", help="Succeed if the user answers yes")
    p.add_argument("prompt", help=DASH_HINT)
    p.set_defaults(func=cmd_confirm)

    p = sub.add_parser("regexp-escape", help="Escape TEXT for a basic regular expression")
    p.add_argument("text", help=DASH_HINT)
    p.set_defaults(func=cmd_regexp_escape)

    p = sub.add_parser("lines-to-args", help="Turn newline-separated LINES into shell arguments")
    p.add_argument("lines", help=DASH_HINT)
    p.set_defaults(func=cmd_lines_to_args)

    p = sub.add_parser("config", help="Show or change settings")
    p.add_argument("action", choices=["list", "get", "set"], nargs="?", default="list")
    p.add_argument("key", nargs="?")
    p.add_argument("value", nargs="?")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    if argv and argv[0] in VERBATIM_COMMANDS:
        # Like echo: "-->" or "-n" is text to render, never an option
        args = parser.parse_args(argv[:1])
        args.text = argv[1:]
    else:
        args = parser.parse_args(argv)
    if getattr(args, "needs_palette", False):
        palette = Palette(build_capability_table())
        return args.func(args, palette)
    return args.func(args)
