"""
Profile picture rules: entity validation, upload checks and cache headers.

Uploads are decoded with Pillow to prove they are images and to read their
dimensions and frame count. The bytes are stored as uploaded (no re-encoding).
"""

from __future__ import annotations

import io
import logging
import os
import re
import time
from dataclasses import dataclass
from urllib.parse import quote

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from auth import ownership
from core.db import Database
from core.errors import AuthorizationError, ValidationError
from core.params import is_valid_id

from . import repository

logger = logging.getLogger(__name__)

# Pillow reports corrupt or truncated data through any of these.
_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError)

ENTITY_TYPES = ("user", "baby")

DEFAULT_IMAGES = {
    "user": "/BlankProfilePictures/BlankUserPicture.avif",
    "baby": "/BlankProfilePictures/BlankBabyPicture.png",
}

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}

STATIC_MAX_AGE_S = 30 * 24 * 3600
ANIMATED_MAX_AGE_S = 24 * 3600
MAX_FILENAME_LENGTH = 255

_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>]')


def max_upload_bytes() -> int:
    raw = os.getenv("PROFILE_PICTURE_MAX_BYTES", "").strip()
    return int(raw) if raw.isdigit() else 5 * 1024 * 1024


@dataclass(frozen=True)
class PictureUpload:
    entity_type: str
    entity_id: int
    filename: str
    mime_type: str
    data: bytes
    width: int
    height: int
    frames: int = 1

    @property
    def is_animated(self) -> bool:
        return self.frames > 1


def parse_entity(entity_type: str | None, entity_id: str | None) -> tuple[str, int]:
    if entity_type not in ENTITY_TYPES:
        raise ValidationError("Invalid entity type")
    if not is_valid_id(entity_id):
        raise ValidationError("Invalid entity ID")
    return entity_type, int(str(entity_id).strip())


def sanitize_filename(filename: str) -> str:
    """
    Neutralise path and shell metacharacters, cap the length, and make sure
    an extension is present.
    """
    name = _UNSAFE_FILENAME_CHARS.sub("-", filename).replace("..", "-")
    name = name[:MAX_FILENAME_LENGTH]
    if "." not in name:
        name = f"{name}.png"
    return name


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def inspect_image(data: bytes) -> tuple[int, int, int]:
    """
    Decode `data` and return `(width, height, frames)`.

    `verify()` leaves the image unusable, so the size and frame count are read
    from a second open.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            frames = getattr(image, "n_frames", 1)
    except _DECODE_ERRORS as exc:
        logger.info("picture_rejected reason=%s", type(exc).__name__)
        raise ValidationError("Invalid image content") from exc

    if not width or not height:
        raise ValidationError("Invalid image dimensions")
    return width, height, frames


async def read_upload(
    entity_type: str | None,
    entity_id: str | None,
    upload: UploadFile | None,
) -> PictureUpload:
    if entity_type not in ENTITY_TYPES:
        raise ValidationError('Invalid entity type. Must be "user" or "baby".')
    if not (entity_id or "").strip():
        raise ValidationError("Entity ID is required.")
    if not is_valid_id(entity_id):
        raise ValidationError("Invalid entity ID")
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded.")

    extension = _extension(upload.filename)
    if extension not in MIME_TYPES:
        raise ValidationError(
            "Invalid file type. Allowed: " + ", ".join(sorted(MIME_TYPES))
        )

    limit = max_upload_bytes()
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(f"File too large. Maximum size is {limit // (1024 * 1024)}MB")
    if not data:
        raise ValidationError("No file uploaded.")
    width, height, frames = inspect_image(data)

    return PictureUpload(
        entity_type=entity_type,
        entity_id=int(entity_id.strip()),
        filename=sanitize_filename(upload.filename),
        mime_type=MIME_TYPES[extension],
        data=data,
        width=width,
        height=height,
        frames=frames,
    )


async def check_can_modify(db: Database, entity_type: str, entity_id: int, user_id: int) -> None:
    if entity_type == "baby":
        if not await ownership.baby_belongs_to_user(db, entity_id, user_id):
            raise AuthorizationError("Not authorized to modify this baby profile")
    elif entity_id != user_id:
        logger.warning("picture_forbidden user_id=%s entity_id=%s", user_id, entity_id)
        raise AuthorizationError("Not authorized to modify this user profile")


async def save_picture(db: Database, upload: PictureUpload) -> str:
    profile_url = (
        f"/v1/profile-picture/{upload.entity_type}/{upload.entity_id}"
        f"?v={int(time.time() * 1000)}"
    )
    async with db.transaction() as conn:
        await repository.upsert_image(
            conn,
            entity_type=upload.entity_type,
            entity_id=upload.entity_id,
            image_data=upload.data,
            mime_type=upload.mime_type,
            original_filename=upload.filename,
            width=upload.width,
            height=upload.height,
            is_animated=upload.is_animated,
        )
        await repository.set_profile_url(conn, upload.entity_type, upload.entity_id, profile_url)

    logger.info(
        "picture_saved entity_type=%s entity_id=%s bytes=%d size=%sx%s frames=%s",
        upload.entity_type,
        upload.entity_id,
        len(upload.data),
        upload.width,
        upload.height,
        upload.frames,
    )
    return profile_url


async def delete_picture(db: Database, entity_type: str, entity_id: int) -> str:
    default_url = DEFAULT_IMAGES[entity_type]
    async with db.transaction() as conn:
        await repository.delete_image(conn, entity_type, entity_id)
        await repository.set_profile_url(conn, entity_type, entity_id, default_url)
    logger.info("picture_deleted entity_type=%s entity_id=%s", entity_type, entity_id)
    return default_url


def etag_for(entity_type: str, entity_id: int, file_size: int) -> str:
    return f'"{entity_type}-{entity_id}-{file_size}"'


def image_headers(entity_type: str, entity_id: int, image: dict) -> dict[str, str]:
    max_age = ANIMATED_MAX_AGE_S if image.get("is_animated") else STATIC_MAX_AGE_S
    filename = image.get("original_filename") or "profile-picture"
    return {
        "Cache-Control": f"public, max-age={max_age}",
        "ETag": etag_for(entity_type, entity_id, int(image["file_size"])),
        "X-Image-Width": str(image.get("width") or 0),
        "X-Image-Height": str(image.get("height") or 0),
        "X-Image-Animated": "true" if image.get("is_animated") else "false",
        "Content-Disposition": f'inline; filename="{quote(filename)}"',
    }
