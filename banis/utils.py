# banis/utils.py
import os
from pathlib import Path

import platformdirs

# --- Constants for platformdirs ---
APP_NAME = "BanisCLI"
APP_AUTHOR = "BanisCLI"

# Set to a directory to keep cache and config side by side (portable installs, tests)
HOME_ENV_VAR = "BANIS_HOME"


def get_app_path(kind: str, filename: str = "") -> Path:
    """
    Get the absolute path to a writable per-user file or directory.

    Args:
        kind: Either 'cache' or 'config'.
        filename: File inside that directory. Leave empty for the
                  directory itself.

    Returns:
        Absolute path. The containing directory is created if missing.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        base_dir = Path(override).expanduser() / kind
    elif kind == "cache":
        base_dir = Path(platformdirs.user_cache_dir(APP_NAME, APP_AUTHOR))
    elif kind == "config":
        base_dir = Path(platformdirs.user_config_dir(APP_NAME, APP_AUTHOR))
    else:
        raise ValueError(f"Unknown app path kind: {kind!r}")

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir / filename if filename else base_dir
