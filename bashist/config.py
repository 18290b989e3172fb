import json
import os
import tempfile
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import err_console

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "BASHIST_LOCK_DIR": tempfile.gettempdir(),
    "BASHIST_TPUT": "tput",
    "BASHIST_SCRIPT": "script",
}

# File Paths
BASHIST_DIR = Path(os.getenv("BASHIST_DIR", str(Path.home() / ".bashist")))
CONFIG_FILE = Path(os.getenv("BASHIST_CONFIG_FILE", str(BASHIST_DIR / "config.json")))


def ensure_bashist_dir():
    """Ensure the bashist storage directory exists"""
    if not BASHIST_DIR.exists():
        try:
            BASHIST_DIR.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            err_console.print(
                f"[yellow]Warning: Could not create directory {BASHIST_DIR}: {e}[/yellow]"
            )


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file"""
    path = path or CONFIG_FILE
    if path.exists():
        try:
            with open(path) as f:
                config: dict[str, Any] = json.load(f)
                return config
        except Exception as e:
            err_console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def save_config(config: dict[str, Any], path: Path | None = None) -> bool:
    """Save configuration to file"""
    path = path or CONFIG_FILE
    try:
        if path == CONFIG_FILE:
            ensure_bashist_dir()
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except Exception as e:
        err_console.print(f"[red]Error saving config file: {e}[/red]")
        return False


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Config File > Default"""
    # 1. Environment Variable
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


# Initialize Configuration
LOCK_DIR = Path(get_setting("BASHIST_LOCK_DIR", DEFAULT_CONFIG["BASHIST_LOCK_DIR"]))
TPUT_COMMAND = get_setting("BASHIST_TPUT", DEFAULT_CONFIG["BASHIST_TPUT"])
SCRIPT_COMMAND = get_setting("BASHIST_SCRIPT", DEFAULT_CONFIG["BASHIST_SCRIPT"])
