"""Well-known paths for diskscope.

Provides the XDG configuration location of diskscope itself, and the
per-user application-data roots used to attribute files to the
application that created them.

XDG defaults:
- Config: ~/.config/diskscope/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "diskscope"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/diskscope/ (or XDG_CONFIG_HOME/diskscope/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/diskscope/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/diskscope/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


# =============================================================================
# Per-user application data roots
# =============================================================================


def get_roaming_app_data_dir() -> Path:
    """Get the roaming application data root.

    Returns:
        %APPDATA%, or ~/AppData/Roaming when unset.
    """
    base = os.environ.get("APPDATA")
    if base:
        return Path(base)
    return Path.home() / "AppData" / "Roaming"


def get_local_app_data_dir() -> Path:
    """Get the local application data root.

    Returns:
        %LOCALAPPDATA%, or ~/AppData/Local when unset.
    """
    base = os.environ.get("LOCALAPPDATA")
    if base:
        return Path(base)
    return Path.home() / "AppData" / "Local"


def get_app_data_roots() -> tuple[str, ...]:
    """Get all per-user application data roots, in matching order.

    The Windows roaming and local roots come first, followed by the XDG
    config and data homes used by applications on Linux.

    Returns:
        Tuple of absolute root paths as strings.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    xdg_data = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return (
        str(get_roaming_app_data_dir()),
        str(get_local_app_data_dir()),
        xdg_config,
        xdg_data,
    )
