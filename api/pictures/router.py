"""
Profile picture API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Header, Request, Response, UploadFile
from fastapi.responses import RedirectResponse

from auth.dependencies import get_current_user_id
from core import envelope
from core.db import Database, get_db

from . import repository, service

router = APIRouter()


async def picture_upload(
    entity_type: str | None = Form(default=None, alias="entityType"),
    entity_id: str | None = Form(default=None, alias="entityId"),
    profile_picture: UploadFile | None = File(default=None, alias="profilePicture"),
) -> service.PictureUpload:
    return await service.read_upload(entity_type, entity_id, profile_picture)


async def picture_entity(request: Request) -> tuple[str, int]:
    return service.parse_entity(
        request.path_params.get("entityType"),
        request.path_params.get("entityId"),
    )


@router.post("/profile-picture/upload")
async def upload_picture(
    upload: service.PictureUpload = Depends(picture_upload),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    await service.check_can_modify(db, upload.entity_type, upload.entity_id, user_id)
    profile_url = await service.save_picture(db, upload)
    return envelope.ok(message="Profile picture uploaded successfully", profileUrl=profile_url)


@router.get("/profile-picture/{entityType}/{entityId}")
async def get_picture(
    entity: tuple[str, int] = Depends(picture_entity),
    if_none_match: str | None = Header(default=None),
    db: Database = Depends(get_db),
) -> Response:
    entity_type, entity_id = entity
    image = await repository.get_image(db, entity_type, entity_id)
    if image is None:
        return RedirectResponse(service.DEFAULT_IMAGES[entity_type], status_code=302)

    headers = service.image_headers(entity_type, entity_id, image)
    if if_none_match and if_none_match == headers["ETag"]:
        return Response(status_code=304, headers={"ETag": headers["ETag"]})
    return Response(content=bytes(image["image_data"]), media_type=image["mime_type"], headers=headers)


@router.delete("/profile-picture/{entityType}/{entityId}")
async def delete_picture(
    entity: tuple[str, int] = Depends(picture_entity),
    user_id: int = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> dict:
    entity_type, entity_id = entity
    await service.check_can_modify(db, entity_type, entity_id, user_id)
    default_url = await service.delete_picture(db, entity_type, entity_id)
    return envelope.ok(message="Profile picture deleted successfully", defaultImageUrl=default_url)
