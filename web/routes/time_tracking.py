from __future__ import annotations

import logging
from decimal import Decimal
from urllib.parse import quote

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel

from timebill.aggregation import month_total
from timebill.billing_calendar import is_workday, local_today, parse_date, resolve_billing_month
from timebill.exceptions import InvalidRequest
from timebill.models.billing import BillingMonth
from timebill.models.document import DocumentType, GeneratedDocument
from timebill.models.time_entry import TimeEntry
from timebill.pdf.layout import latin1
from web.deps import (
    get_current_user_id,
    get_document_service,
    get_download_service,
    get_time_entry_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/time-tracking")

INVALID_TYPE_MESSAGE = "Invalid type parameter. Use ?type=invoice or ?type=hours-log"


class TimeEntryIn(BaseModel):
    hours: Decimal
    description: str
    notes: str | None = None


def _billing_month(month: str | None) -> BillingMonth:
    if month:
        return BillingMonth.parse(month)
    return resolve_billing_month(local_today())


def _content_disposition(filename: str) -> str:
    # Header values must be single-line Latin-1 and the quoted form cannot carry '"'.
    fallback = " ".join(latin1(filename).replace('"', "'").split())
    value = f'attachment; filename="{fallback}"'
    if fallback != filename:
        value += f"; filename*=UTF-8''{quote(filename)}"
    return value


def _attachment(document: GeneratedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.content_type,
        headers={"Content-Disposition": _content_disposition(document.filename)},
    )


def _entry_json(entry: TimeEntry) -> dict:
    return {
        "id": entry.uuid,
        "date": entry.date.isoformat(),
        "hours": float(entry.hours),
        "description": entry.description,
        "notes": entry.notes,
    }


@router.get("/export")
async def export_csv(request: Request, month: str | None = None):
    user_id = get_current_user_id(request)
    billing_month = _billing_month(month)
    document = get_document_service(request).export_csv(user_id, billing_month)
    return _attachment(document)


@router.get("/generate-docs")
async def generate_docs(
    request: Request,
    doc_type: str | None = Query(None, alias="type"),
    month: str | None = None,
):
    try:
        document_type = DocumentType(doc_type or "")
    except ValueError:
        raise InvalidRequest(INVALID_TYPE_MESSAGE) from None
    user_id = get_current_user_id(request)
    billing_month = _billing_month(month)
    document = get_document_service(request).generate(user_id, billing_month, document_type)
    return _attachment(document)


@router.get("/download")
async def download_bundle(request: Request, month: str | None = None):
    user_id = get_current_user_id(request)
    billing_month = _billing_month(month)
    document = get_document_service(request).generate_bundle(user_id, billing_month)
    return _attachment(document)


@router.get("/status")
async def status(request: Request):
    user_id = get_current_user_id(request)
    today = local_today()
    reminder = get_download_service(request).reminder(user_id, today)
    entries = get_time_entry_service(request).list_for_month(user_id, BillingMonth.parse(reminder.billing_month))
    return {
        "today": today.isoformat(),
        "billing_month": reminder.billing_month,
        "billing_month_label": reminder.billing_month_label,
        "is_workday": is_workday(today),
        "in_download_window": reminder.in_download_window,
        "downloaded": reminder.downloaded,
        "show_reminder": reminder.show_reminder,
        "month_total": float(month_total(entries)),
    }


@router.post("/downloads")
async def mark_downloaded(request: Request, month: str | None = None):
    user_id = get_current_user_id(request)
    billing_month = _billing_month(month)
    get_download_service(request).mark_downloaded(user_id, billing_month.key)
    return {"billing_month": billing_month.key, "downloaded": True}


@router.get("/entries")
async def list_entries(request: Request, month: str | None = None):
    user_id = get_current_user_id(request)
    billing_month = _billing_month(month)
    entries = get_time_entry_service(request).list_for_month(user_id, billing_month)
    return {
        "billing_month": billing_month.key,
        "billing_month_label": billing_month.label,
        "entries": [_entry_json(e) for e in entries],
        "month_total": float(month_total(entries)),
    }


@router.put("/entries/{entry_date}")
async def upsert_entry(request: Request, entry_date: str, body: TimeEntryIn):
    user_id = get_current_user_id(request)
    entry = get_time_entry_service(request).upsert_entry(
        user_id,
        parse_date(entry_date),
        body.hours,
        body.description,
        body.notes,
    )
    return _entry_json(entry)


@router.delete("/entries/{entry_uuid}", status_code=204)
async def delete_entry(request: Request, entry_uuid: str):
    user_id = get_current_user_id(request)
    get_time_entry_service(request).delete_entry(user_id, entry_uuid)
    return Response(status_code=204)
