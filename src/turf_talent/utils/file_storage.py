"""File storage utilities for saving and removing uploaded evidence."""

import os
from pathlib import Path


def resolve_path(filepath: str, root: str | None = None) -> str:
    """
    Resolve a file path to an absolute path.

    Relative paths are resolved under ``root`` (``settings.evidence_root`` when
    omitted) so that uploads land in the configured data directory outside the
    repo.  Absolute paths are returned unchanged.

    Args:
        filepath: An absolute or relative path string.
        root: Directory relative paths are resolved against.

    Returns:
        Absolute path string.

    Raises:
        ValueError: If a relative path escapes the root directory.
    """
    if os.path.isabs(filepath):
        return filepath

    if root is None:
        # Import here to avoid circular imports at module load time
        from turf_talent.config import settings

        root = settings.evidence_root

    base = Path(root).resolve()
    resolved = (base / filepath).resolve()
    if base != resolved and base not in resolved.parents:
        raise ValueError(f"Path escapes storage root: {filepath}")
    return str(resolved)


def file_exists(filepath: str, root: str | None = None) -> bool:
    """
    Check if a file exists.

    Args:
        filepath: The path to check (absolute or relative to root).
        root: Storage root for relative paths.

    Returns:
        True if the file exists, False otherwise.
    """
    return os.path.isfile(resolve_path(filepath, root))


def save_bytes(content: bytes, filepath: str, root: str | None = None) -> str:
    """
    Save binary content to a file, creating directories if needed.

    Args:
        content: The bytes to save.
        filepath: The destination path (absolute or relative to root).
        root: Storage root for relative paths.

    Returns:
        The absolute path where the file was saved.

    Raises:
        OSError: If the file cannot be written.

    Examples:
        >>> save_bytes(b"%PDF-1.7", "skill-evidence/u1/1700000000000-cert.pdf")
    """
    resolved = resolve_path(filepath, root)
    Path(resolved).parent.mkdir(parents=True, exist_ok=True)
    with open(resolved, "wb") as f:
        f.write(content)
    return resolved


def delete_file(filepath: str, root: str | None = None) -> bool:
    """
    Delete a file if it exists.

    Args:
        filepath: The path to delete (absolute or relative to root).
        root: Storage root for relative paths.

    Returns:
        True if a file was removed, False if there was nothing to remove.
    """
    resolved = resolve_path(filepath, root)
    try:
        os.remove(resolved)
    except FileNotFoundError:
        return False
    return True
