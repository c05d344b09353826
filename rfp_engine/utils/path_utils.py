# ## File: rfp_engine/utils/path_utils.py
# Version: 1.0.0
# Date: 2026-10-12
# Purpose: Path handling helpers shared by the persistence layer and config.

import re
from pathlib import Path
from typing import Union, Optional


def convert_windows_to_wsl_path(path_str: Union[str, Path, None]) -> str:
    """
    Convert Windows-style paths to WSL-compatible paths.

    Examples:
        'C:/Users/docs' -> '/mnt/c/Users/docs'
        'F:\\rfp_data' -> '/mnt/f/rfp_data'
        '/mnt/c/existing' -> '/mnt/c/existing' (unchanged)
    """
    if not path_str:
        return ""

    path_str = str(path_str).strip()

    if path_str.startswith('/mnt/'):
        return path_str

    normalized_path = path_str.replace('\\', '/')

    match = re.match(r'^([a-zA-Z]):/(.*)', normalized_path)
    if match:
        drive_letter, rest = match.groups()
        return f"/mnt/{drive_letter.lower()}/{rest}"

    return normalized_path


def normalize_path(path_str: Union[str, Path, None]) -> Optional[Path]:
    """
    Normalize a path string to an absolute Path object.

    Returns:
        Normalized Path object or None if invalid
    """
    if not path_str:
        return None

    normalized_str = convert_windows_to_wsl_path(path_str)

    try:
        return Path(normalized_str).expanduser().resolve()
    except (OSError, ValueError):
        return None


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Raises:
        ValueError: If the path cannot be normalized
        OSError: If directory cannot be created
    """
    path_obj = normalize_path(path)
    if not path_obj:
        raise ValueError(f"Invalid path provided: {path}")

    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


def get_project_root() -> Path:
    # utils/path_utils.py -> utils -> rfp_engine -> project root
    return Path(__file__).parent.parent.parent
