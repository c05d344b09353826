"""Shared utilities: logging and path handling."""

from .logging_utils import get_logger, setup_logging, resolve_log_level
from .path_utils import (
    convert_windows_to_wsl_path,
    normalize_path,
    ensure_directory,
    get_project_root,
)
from .default_paths import get_default_data_path

__all__ = [
    "get_logger",
    "setup_logging",
    "resolve_log_level",
    "convert_windows_to_wsl_path",
    "normalize_path",
    "ensure_directory",
    "get_project_root",
    "get_default_data_path",
]
