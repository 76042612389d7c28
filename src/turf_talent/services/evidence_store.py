"""Evidence blob storage for skill claim uploads."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from turf_talent.config import EvidenceConfig, settings
from turf_talent.utils.file_storage import delete_file, file_exists, resolve_path, save_bytes
from turf_talent.utils.slug import safe_file_name

logger = logging.getLogger(__name__)


class EvidenceStoreError(Exception):
    """Raised when the blob store cannot persist or remove a file."""


@dataclass
class EvidenceFile:
    """An uploaded file waiting to be stored."""

    file_name: str
    content_type: str
    data: bytes
    description: str | None = None


def build_upload_path(
    prefix: str,
    user_id: str,
    file_name: str,
    now_ms: int | None = None,
    token: str | None = None,
) -> str:
    """
    Build the storage path for an upload.

    Paths are namespaced by uploader and upload time so that two uploads of
    the same file name never collide.

    Args:
        prefix: Top-level folder (``EvidenceConfig.upload_prefix``)
        user_id: Uploading user
        file_name: Original file name
        now_ms: Upload time in epoch milliseconds (defaults to now)
        token: Extra discriminator for files uploaded in the same millisecond

    Returns:
        Relative storage path

    Examples:
        >>> build_upload_path("skill-evidence", "u1", "Cert 2024.pdf", 1700000000000)
        'skill-evidence/u1/1700000000000-cert-2024.pdf'
        >>> build_upload_path("skill-evidence", "u1", "cert.pdf", 1700000000000, "a1b2")
        'skill-evidence/u1/1700000000000-a1b2-cert.pdf'
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    stamp = f"{now_ms}-{token}" if token else str(now_ms)
    return f"{prefix}/{safe_file_name(user_id)}/{stamp}-{safe_file_name(file_name)}"


class EvidenceStore(ABC):
    """
    Interface of the blob store holding claim evidence.

    ``put`` returns a locator that is stored on the claim; ``resolve`` turns a
    locator into a URL a client can download from.
    """

    @abstractmethod
    async def put(self, path: str, data: bytes, content_type: str) -> str:
        """Persist ``data`` at ``path`` and return its locator."""

    @abstractmethod
    def resolve(self, locator: str) -> str:
        """Return a retrievable URL for ``locator``."""

    @abstractmethod
    async def delete(self, locator: str) -> None:
        """Remove the blob behind ``locator`` if it exists."""


class LocalEvidenceStore(EvidenceStore):
    """
    Evidence store backed by a directory on local disk.

    Locators are paths relative to ``root``; resolved URLs point at the
    API's evidence download endpoint.
    """

    def __init__(
        self,
        root: str | None = None,
        base_url: str | None = None,
        config: EvidenceConfig | None = None,
    ) -> None:
        """
        Initialize the local evidence store.

        Args:
            root: Directory uploads are written under (defaults to settings.evidence_root)
            base_url: URL prefix of the download endpoint
            config: Evidence configuration (uses defaults if not provided)
        """
        self.root = root or settings.evidence_root
        self.base_url = (base_url or f"{settings.api_prefix}/evidence").rstrip("/")
        self.config = config or EvidenceConfig()

    async def put(self, path: str, data: bytes, content_type: str) -> str:
        if len(data) > self.config.max_file_size_bytes:
            raise EvidenceStoreError(
                f"File exceeds the {self.config.max_file_size_bytes} byte upload limit"
            )
        try:
            await asyncio.to_thread(save_bytes, data, path, self.root)
        except (OSError, ValueError) as exc:
            raise EvidenceStoreError(str(exc)) from exc
        logger.debug("Stored evidence %s (%s, %d bytes)", path, content_type, len(data))
        return path

    def resolve(self, locator: str) -> str:
        return f"{self.base_url}/{locator}"

    async def delete(self, locator: str) -> None:
        try:
            self._check_locator(locator)
            await asyncio.to_thread(delete_file, locator, self.root)
        except (OSError, ValueError) as exc:
            raise EvidenceStoreError(str(exc)) from exc

    def exists(self, locator: str) -> bool:
        """Whether a blob is stored under ``locator``."""
        try:
            self._check_locator(locator)
            return file_exists(locator, self.root)
        except ValueError:
            return False

    def local_path(self, locator: str) -> str:
        """
        Absolute path of the blob behind ``locator``.

        Raises:
            ValueError: If the locator points outside the store root
        """
        self._check_locator(locator)
        return resolve_path(locator, self.root)

    @staticmethod
    def _check_locator(locator: str) -> None:
        if not locator or os.path.isabs(locator):
            raise ValueError(f"Invalid evidence locator: {locator!r}")
