"""
Client-side style image intake.

Uploaded images are downscaled and re-encoded as JPEG under a size ceiling
before they are handed to object storage.
"""
from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from amigo.domain.invariants.exceptions import ValidationError


logger = logging.getLogger(__name__)

MAX_BYTES = 500 * 1024
MAX_DIMENSION = 1920
START_QUALITY = 80
QUALITY_STEP = 10
QUALITY_FLOOR = 30

UPLOAD_PREFIX = "post-images"


@dataclass
class CompressedImage:
    data: bytes
    width: int
    height: int
    quality: int
    attempts: int
    content_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.data)


def target_dimensions(width: int, height: int, max_dimension: int = MAX_DIMENSION) -> Tuple[int, int]:
    """Scale down only the overflowing side, keeping the aspect ratio."""
    if width > height:
        if width > max_dimension:
            return max_dimension, round(height * max_dimension / width)
    elif height > max_dimension:
        return round(width * max_dimension / height), max_dimension
    return width, height


def open_image(raw: Union[bytes, BinaryIO]) -> Image.Image:
    stream = io.BytesIO(raw) if isinstance(raw, (bytes, bytearray)) else raw
    try:
        image = Image.open(stream)
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError("Unsupported or corrupt image file", field="file") from exc
    return ImageOps.exif_transpose(image)


def _encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def compress_image(
    raw: Union[bytes, BinaryIO],
    *,
    max_bytes: int = MAX_BYTES,
    max_dimension: int = MAX_DIMENSION,
) -> CompressedImage:
    image = open_image(raw)
    if image.mode != "RGB":
        image = image.convert("RGB")

    width, height = target_dimensions(image.width, image.height, max_dimension)
    if (width, height) != image.size:
        image = image.resize((width, height), Image.Resampling.LANCZOS)

    quality = START_QUALITY
    attempts = 0
    while True:
        data = _encode_jpeg(image, quality)
        attempts += 1
        # Accept the floor result even when still over budget.
        if len(data) <= max_bytes or quality <= QUALITY_FLOOR:
            break
        quality -= QUALITY_STEP

    logger.debug(
        "Compressed image to %dx%d, %d bytes at quality %d after %d attempts",
        width, height, len(data), quality, attempts,
    )
    return CompressedImage(data=data, width=width, height=height, quality=quality, attempts=attempts)


def transform_image(data: bytes, *, width=None, height=None, format=None, quality=None) -> Tuple[bytes, str]:
    """Resize/re-encode a stored object for delivery. Returns (bytes, mimetype)."""
    image = open_image(data)
    fmt = (format or image.format or "JPEG").upper()
    if fmt == "JPG":
        fmt = "JPEG"

    if width or height:
        target_w = int(width) if width else image.width
        target_h = int(height) if height else image.height
        if width and not height:
            target_h = max(1, round(image.height * target_w / image.width))
        elif height and not width:
            target_w = max(1, round(image.width * target_h / image.height))
        # Downscale only; never enlarge either side
        fits = 0 < target_w <= image.width and 0 < target_h <= image.height
        if fits and (target_w, target_h) != image.size:
            image = image.resize((target_w, target_h), Image.Resampling.LANCZOS)

    if fmt == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=fmt, quality=int(quality or START_QUALITY))
    return buffer.getvalue(), Image.MIME.get(fmt, "application/octet-stream")


class ImageIntake:
    def __init__(self, storage, *, max_bytes: int = MAX_BYTES, max_dimension: int = MAX_DIMENSION):
        self.storage = storage
        self.max_bytes = max_bytes
        self.max_dimension = max_dimension

    @staticmethod
    def new_key() -> str:
        return f"{UPLOAD_PREFIX}/{uuid.uuid4().hex}.jpg"

    def upload(self, raw: Union[bytes, BinaryIO], key: Optional[str] = None) -> str:
        """Compress and store an image. Returns its public URL.

        Storage failures propagate as ``StorageError``; nothing is retried.
        """
        compressed = compress_image(raw, max_bytes=self.max_bytes, max_dimension=self.max_dimension)
        path = key or self.new_key()
        self.storage.upload(path, compressed.data, compressed.content_type)
        return self.storage.get_public_url(path)
