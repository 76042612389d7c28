"""Utility functions package."""

from turf_talent.utils.file_storage import delete_file, file_exists, resolve_path, save_bytes
from turf_talent.utils.slug import create_slug, safe_file_name
from turf_talent.utils.timestamps import utc_now

__all__ = [
    "create_slug",
    "delete_file",
    "file_exists",
    "resolve_path",
    "safe_file_name",
    "save_bytes",
    "utc_now",
]
