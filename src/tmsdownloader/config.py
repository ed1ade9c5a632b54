"""Configuration management for the tile downloader.

This module handles loading and managing configuration settings using
Dynaconf. Settings are loaded from multiple locations in order of
increasing priority:

1. Global settings (/etc/tmsdownloader/)
2. User settings (~/.config/tmsdownloader/)
3. Current directory settings (./)
4. Environment variable specified file (TMSDOWNLOADER_SETTINGS_FILE_FOR_DYNACONF)

Environment variables prefixed with ``TMSDOWNLOADER_`` override all files,
e.g. ``TMSDOWNLOADER_WAIT_TIME=250``.

Attributes
----------
USER_DIR : pathlib.Path
    Path to user configuration directory.
GLOB_DIR : pathlib.Path
    Path to global configuration directory.
CURR_DIR : pathlib.Path
    Path to current working directory.
DEFAULTS : dict
    Values used when a key is missing from every settings source.
settings : Dynaconf
    The Dynaconf settings object with loaded configuration.
"""
import os
import pathlib

from dynaconf import Dynaconf

USER_DIR = pathlib.Path("~/.config/tmsdownloader").expanduser()
GLOB_DIR = pathlib.Path("/etc/tmsdownloader/")
CURR_DIR = pathlib.Path("./").absolute()
settings_files = [
    GLOB_DIR / "settings.toml",
    GLOB_DIR / ".secrets.toml",
    USER_DIR / "settings.toml",
    USER_DIR / ".secrets.toml",
    CURR_DIR / "settings.toml",
    CURR_DIR / ".secrets.toml"
    ]
extra_file = os.getenv("TMSDOWNLOADER_SETTINGS_FILE_FOR_DYNACONF")
if extra_file:
    settings_files.append(pathlib.Path(extra_file).absolute())

DEFAULTS = {
    "wait_time": 1000,
    "timeout": 30,
    "user_agent": "tms-downloader",
    "tile_ext": "png",
    "tile_dir": "./tiles",
    "bbox_crs": "EPSG:3857",
    "bbox_precision": 9,
}

settings = Dynaconf(
    merge_enabled=True,
    envvar_prefix="TMSDOWNLOADER",
    settings_files=settings_files,
    environments=True,
    load_dotenv=True,
)


def get(key):
    """Return a setting, falling back to the packaged default.

    Parameters
    ----------
    key : str
        Setting name, e.g. ``"wait_time"``.
    """
    return settings.get(key, DEFAULTS.get(key))


def change_env(new_env):
    """Change the active Dynaconf environment.

    Parameters
    ----------
    new_env : str
        The environment name to switch to (e.g., 'development', 'production').
    """
    settings.setenv(new_env)
    settings.reload()
