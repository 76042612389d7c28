"""Slug generation utilities."""

from pathlib import PurePath

from slugify import slugify


def create_slug(text: str) -> str:
    """
    Create a URL-friendly slug from text.

    Args:
        text: The text to convert to a slug

    Returns:
        A lowercase, hyphenated slug

    Examples:
        >>> create_slug("Greenkeeping Level 2")
        'greenkeeping-level-2'
        >>> create_slug("PA1 & PA6 Spraying")
        'pa1-pa6-spraying'
    """
    return slugify(text, lowercase=True, separator="-")


def safe_file_name(file_name: str) -> str:
    """
    Slugify a file name while keeping its extension.

    Examples:
        >>> safe_file_name("My Cert (2024).PDF")
        'my-cert-2024.pdf'
        >>> safe_file_name("noext")
        'noext'
    """
    path = PurePath(file_name)
    stem = create_slug(path.stem) or "file"
    suffix = path.suffix.lower()
    return f"{stem}{suffix}" if suffix else stem
