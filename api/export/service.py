"""
Export assembly: collect each baby's records inside a date range and serialize
them as CSV text or as an HTML document rendered to PDF.

Layout (shared by both formats):
- one block per baby linked to the user, in `baby_id` order
- optional "Baby Information" table
- one section per enabled record type; a section with no rows in range shows
  its "No ... found" line under the section header
"""

from __future__ import annotations

import csv
import html
import io
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Awaitable, Callable

from core.db import Database
from core.errors import InternalError, NotFoundError, ValidationError
from core.pdf import PdfRenderError, PdfRenderer

from . import repository

logger = logging.getLogger(__name__)

BABY_SEPARATOR = "==========,==============,============,============,====================\n"
SECTION_SEPARATOR = "---------------------------,---------------------------,----------------------\n"

INFO_COLUMNS = ("ID", "First Name", "Last Name", "Gender", "Weight", "Created At")
INFO_FIELDS = ("baby_id", "first_name", "last_name", "gender", "weight", "created_at")

CSV_MEDIA_TYPE = "text/csv"
PDF_MEDIA_TYPE = "application/pdf"

_PDF_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; font-size: 12px; }
h2 { border-bottom: 2px solid #000; padding-bottom: 5px; font-size: 14px; }
h3 { margin-top: 30px; font-size: 14px; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #000; padding: 6px; text-align: left; font-size: 10px; }
.separator { margin: 40px 0; border-top: 4px solid #000; height: 10px; }
"""

Fetch = Callable[[Database, int, date, date], Awaitable[list[dict]]]


@dataclass(frozen=True)
class Section:
    flag: str
    file_tag: str
    title: str
    empty_message: str
    columns: tuple[str, ...]
    fields: tuple[str, ...]
    date_fields: tuple[str, ...]
    fetch: Fetch


SECTIONS: tuple[Section, ...] = (
    Section(
        flag="growthRecords",
        file_tag="Growth",
        title="Growth Records",
        empty_message="No growth records found",
        columns=("Growth ID", "Date", "Weight", "Height", "Notes"),
        fields=("growth_id", "date", "weight", "height", "notes"),
        date_fields=("date",),
        fetch=repository.growth_in_range,
    ),
    Section(
        flag="milestones",
        file_tag="Milestones",
        title="Milestones",
        empty_message="No milestones found",
        columns=("Milestone ID", "Date", "Title", "Details"),
        fields=("milestone_id", "date", "title", "details"),
        date_fields=("date",),
        fetch=repository.milestones_in_range,
    ),
    Section(
        flag="feedingSchedule",
        file_tag="Feeding",
        title="Feeding Schedule",
        empty_message="No feeding schedule records found",
        columns=("Schedule ID", "Date", "Time", "Meal", "Amount", "Type", "Issues", "Notes"),
        fields=("feeding_schedule_id", "date", "time", "meal", "amount", "type", "issues", "notes"),
        date_fields=("date",),
        fetch=repository.feedings_in_range,
    ),
    Section(
        flag="stoolRecords",
        file_tag="Stool",
        title="Stool Records",
        empty_message="No stool records found",
        columns=("Stool ID", "Timestamp", "Color", "Consistency", "Notes"),
        fields=("stool_id", "timestamp", "color", "consistency", "notes"),
        date_fields=("timestamp",),
        fetch=repository.stool_in_range,
    ),
)


@dataclass(frozen=True)
class ExportRequest:
    start: date
    end: date
    include_info: bool
    sections: tuple[Section, ...]


@dataclass(frozen=True)
class BabyExport:
    baby: dict
    sections: list[tuple[Section, list[dict]]]


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    filename: str
    media_type: str


def _parse_date(raw: str, name: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid {name} format. Use YYYY-MM-DD") from exc


async def resolve_request(
    db: Database,
    user_id: int,
    *,
    start_date: str | None,
    end_date: str | None,
    flags: dict[str, bool],
    today: date | None = None,
) -> ExportRequest:
    """
    Default range: the user's sign-up date through today.
    """
    today = today or date.today()

    if (start_date or "").strip():
        start = _parse_date(start_date, "startDate")
    else:
        created_on = await repository.user_created_on(db, user_id)
        start = date.fromisoformat(created_on) if created_on else today
    end = _parse_date(end_date, "endDate") if (end_date or "").strip() else today

    if start > end:
        raise ValidationError("startDate must be on or before endDate")

    return ExportRequest(
        start=start,
        end=end,
        include_info=flags.get("babyInfo", True),
        sections=tuple(section for section in SECTIONS if flags.get(section.flag, True)),
    )


def export_filename(request: ExportRequest, extension: str) -> str:
    parts = ["ExportedBabyData"]
    if request.include_info:
        parts.append("Info")
    parts.extend(section.file_tag for section in request.sections)
    parts.append(f"from{request.start.isoformat()}")
    parts.append(f"to{request.end.isoformat()}")
    return "_".join(parts) + f".{extension}"


async def collect(db: Database, user_id: int, request: ExportRequest) -> list[BabyExport]:
    babies = await repository.list_export_babies(db, user_id)
    if not babies:
        raise NotFoundError("No baby profiles found for this user")

    collected: list[BabyExport] = []
    for baby in babies:
        sections = []
        for section in request.sections:
            rows = await section.fetch(db, int(baby["baby_id"]), request.start, request.end)
            sections.append((section, rows))
        collected.append(BabyExport(baby=baby, sections=sections))
    return collected


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _us_date(value: Any) -> str:
    """
    `YYYY-MM-DD[ ...]` -> `MM/DD/YYYY`; anything unparseable is returned as-is.
    """
    text = _cell(value)
    try:
        parsed = date.fromisoformat(text[:10])
    except ValueError:
        return text
    return parsed.strftime("%m/%d/%Y")


def render_csv(babies: list[BabyExport], request: ExportRequest) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")

    for index, item in enumerate(babies):
        baby = item.baby
        if index > 0:
            out.write(BABY_SEPARATOR)
        writer.writerow([f"Baby: {_cell(baby.get('first_name'))} {_cell(baby.get('last_name'))}"])
        out.write("\n")

        if request.include_info:
            out.write("Baby Information\n")
            writer.writerow(INFO_COLUMNS)
            writer.writerow([_cell(baby.get(field)) for field in INFO_FIELDS])
            out.write("\n")

        for section, rows in item.sections:
            out.write(SECTION_SEPARATOR)
            out.write(f"{section.title}\n")
            if not rows:
                out.write(f"{section.empty_message}\n")
            else:
                writer.writerow(section.columns)
                for row in rows:
                    writer.writerow([_cell(row.get(field)) for field in section.fields])
            out.write("\n")

        out.write("\n\n")
    return out.getvalue()


def _html_table(columns: tuple[str, ...], rows: list[list[str]]) -> str:
    head = "".join(f"<th>{html.escape(column)}</th>" for column in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>" for row in rows
    )
    return f"<table><tr>{head}</tr>{body}</table>"


def render_html(babies: list[BabyExport], request: ExportRequest) -> str:
    parts = [f"<html><head><meta charset=\"utf-8\"><style>{_PDF_STYLE}</style></head><body>"]

    for index, item in enumerate(babies):
        baby = item.baby
        if index > 0:
            parts.append('<div class="separator"></div>')
        name = f"{_cell(baby.get('first_name'))} {_cell(baby.get('last_name'))}"
        parts.append(f"<h2>Baby: {html.escape(name)}</h2>")

        if request.include_info:
            info = [_cell(baby.get(field)) for field in INFO_FIELDS]
            info[-1] = _us_date(baby.get("created_at"))
            parts.append("<h3>Baby Information</h3>")
            parts.append(_html_table(INFO_COLUMNS, [info]))

        for section, rows in item.sections:
            parts.append(f"<h3>{html.escape(section.title)}</h3>")
            if not rows:
                parts.append(f"<p>{html.escape(section.empty_message)}</p>")
                continue
            cells = [
                [
                    _us_date(row.get(field)) if field in section.date_fields else _cell(row.get(field))
                    for field in section.fields
                ]
                for row in rows
            ]
            parts.append(_html_table(section.columns, cells))

    parts.append("</body></html>")
    return "".join(parts)


async def export_csv(db: Database, user_id: int, request: ExportRequest) -> ExportFile:
    babies = await collect(db, user_id, request)
    filename = export_filename(request, "csv")
    content = render_csv(babies, request).encode("utf-8")

    await repository.record_export(db, file_name=filename, file_format="csv")
    logger.info("export_created user_id=%s format=csv babies=%s", user_id, len(babies))
    return ExportFile(content=content, filename=filename, media_type=CSV_MEDIA_TYPE)


async def export_pdf(
    db: Database,
    renderer: PdfRenderer,
    user_id: int,
    request: ExportRequest,
) -> ExportFile:
    babies = await collect(db, user_id, request)
    filename = export_filename(request, "pdf")
    try:
        content = await renderer.render_html_to_pdf(render_html(babies, request))
    except PdfRenderError as exc:
        logger.warning("export_pdf_failed user_id=%s error=%s", user_id, exc)
        raise InternalError("Error generating PDF") from exc

    await repository.record_export(db, file_name=filename, file_format="pdf")
    logger.info("export_created user_id=%s format=pdf babies=%s", user_id, len(babies))
    return ExportFile(content=content, filename=filename, media_type=PDF_MEDIA_TYPE)
