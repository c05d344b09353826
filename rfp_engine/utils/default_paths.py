"""
Default path utilities for the store's data directory
Version: v1.0.0
Date: 2026-10-12

Provides the default location of the persisted store blob without hardcoded
platform assumptions.
"""

import os
from pathlib import Path
from .path_utils import convert_windows_to_wsl_path, get_project_root


def get_default_data_path() -> str:
    """
    Get the default directory for the persisted store.

    Priority order:
    1. RFP_DATA_PATH environment variable
    2. ~/.rfp_suite when the home directory is usable
    3. <project root>/data fallback

    Returns:
        Directory path string
    """
    env_path = os.getenv("RFP_DATA_PATH")
    if env_path:
        return convert_windows_to_wsl_path(env_path)

    try:
        home = Path.home()
        if home.exists():
            return str(home / ".rfp_suite")
    except (OSError, RuntimeError):
        pass

    return str(get_project_root() / "data")
