from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlsplit

from amigo.domain.invariants.exceptions import CollaboratorError


logger = logging.getLogger(__name__)

TRANSFORM_KEYS = ("width", "height", "format", "quality")


class StorageError(CollaboratorError):
    pass


class ObjectStorage(ABC):
    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> str: ...

    @abstractmethod
    def get_public_url(self, path: str, transform: Optional[Dict[str, Any]] = None) -> str: ...

    @abstractmethod
    def delete(self, path: str) -> bool: ...

    @abstractmethod
    def path_from_url(self, url: str) -> Optional[str]: ...


class LocalObjectStorage(ObjectStorage):
    """
    Filesystem-backed bucket.

    Objects live under ``base_path/<bucket>/<path>`` and are served by the
    storage route, which applies transform query parameters on the fly.
    """

    def __init__(self, base_path: Path, base_url: str, bucket: str = "posts"):
        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self.base_path / self.bucket

    @property
    def url_prefix(self) -> str:
        return f"{self.base_url}/api/v1/storage/{self.bucket}/"

    def resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root.resolve() not in target.parents:
            raise StorageError(f"Invalid object path: {path}")
        return target

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        target = self.resolve(path)
        if target.exists():
            raise StorageError(f"Object already exists: {path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.error("Failed to store %s: %s", path, exc)
            raise StorageError(f"Upload failed: {exc}") from exc

        logger.info("Stored %s (%s, %d bytes)", path, content_type, len(data))
        return self.get_public_url(path)

    def read(self, path: str) -> bytes:
        target = self.resolve(path)
        if not target.is_file():
            raise FileNotFoundError(path)
        return target.read_bytes()

    def get_public_url(self, path: str, transform: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.url_prefix}{path.lstrip('/')}"
        if transform:
            unknown = set(transform) - set(TRANSFORM_KEYS)
            if unknown:
                raise StorageError(f"Unsupported transform options: {sorted(unknown)}")
            url = f"{url}?{urlencode(transform)}"
        return url

    def delete(self, path: str) -> bool:
        target = self.resolve(path)
        if target.exists():
            target.unlink()
            return True
        return False

    def path_from_url(self, url: str) -> Optional[str]:
        if not url or not url.startswith(self.url_prefix):
            return None
        path = urlsplit(url).path
        marker = f"/storage/{self.bucket}/"
        return path.split(marker, 1)[1] or None
