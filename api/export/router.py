"""
Data export endpoints (CSV and PDF attachments).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from auth.dependencies import require_user
from core.db import Database, get_db
from core.errors import AuthenticationError
from core.params import query_flag
from core.pdf import PdfRenderer, get_pdf_renderer

from . import service

router = APIRouter()

export_user_id = require_user(missing_user=AuthenticationError, missing_user_message="Invalid user ID")


def section_flags(
    baby_info: str | None = Query(default=None, alias="babyInfo"),
    growth_records: str | None = Query(default=None, alias="growthRecords"),
    milestones: str | None = Query(default=None),
    feeding_schedule: str | None = Query(default=None, alias="feedingSchedule"),
    stool_records: str | None = Query(default=None, alias="stoolRecords"),
) -> dict[str, bool]:
    return {
        "babyInfo": query_flag(baby_info),
        "growthRecords": query_flag(growth_records),
        "milestones": query_flag(milestones),
        "feedingSchedule": query_flag(feeding_schedule),
        "stoolRecords": query_flag(stool_records),
    }


async def export_request(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    flags: dict[str, bool] = Depends(section_flags),
    user_id: int = Depends(export_user_id),
    db: Database = Depends(get_db),
) -> service.ExportRequest:
    return await service.resolve_request(
        db,
        user_id,
        start_date=start_date,
        end_date=end_date,
        flags=flags,
    )


def _attachment(file: service.ExportFile) -> Response:
    return Response(
        content=file.content,
        media_type=file.media_type,
        headers={
            "Content-Disposition": f"attachment; filename={file.filename}",
            "exportfilename": file.filename,
            "Access-Control-Expose-Headers": "Content-Disposition, exportfilename",
        },
    )


@router.get("/export/csv")
async def export_csv(
    request: service.ExportRequest = Depends(export_request),
    user_id: int = Depends(export_user_id),
    db: Database = Depends(get_db),
) -> Response:
    return _attachment(await service.export_csv(db, user_id, request))


@router.get("/export/pdf")
async def export_pdf(
    request: service.ExportRequest = Depends(export_request),
    user_id: int = Depends(export_user_id),
    db: Database = Depends(get_db),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
) -> Response:
    return _attachment(await service.export_pdf(db, renderer, user_id, request))
