from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class DownloadRecord(BaseModel):
    id: int | None = None
    user_id: int
    billing_month: str  # 'YYYY-MM'
    downloaded_at: datetime | None = None
