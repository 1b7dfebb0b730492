"""Platform and environment utilities."""

import os
from pathlib import Path


def get_home_directory() -> str:
    """Get the user's home directory.

    Returns:
        Path to the home directory
    """
    return os.path.expanduser("~")


def get_env(name: str, default: str | None = None) -> str | None:
    """Get an environment variable.

    Empty values are treated as unset.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.environ.get(name) or default


def get_config_home() -> Path:
    """Get the base directory for user configuration files.

    Honors XDG_CONFIG_HOME, falling back to ~/.config. OpenCode uses the
    same location on every OS, so there is no Windows special case.

    Returns:
        Path to the configuration home
    """
    xdg = get_env("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path(get_home_directory()) / ".config"


def get_opencode_config_dir() -> Path:
    """Get the OpenCode configuration directory.

    Resolution order:
    1. OPENCODE_CONFIG_DIR
    2. $XDG_CONFIG_HOME/opencode
    3. ~/.config/opencode

    Returns:
        Path to the OpenCode configuration directory
    """
    override = get_env("OPENCODE_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return get_config_home() / "opencode"
