from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class DocumentType(str, Enum):
    INVOICE = "invoice"
    HOURS_LOG = "hours-log"


class DocumentConfig(BaseModel):
    """Per-deployment values printed on the generated documents."""

    hourly_rate: Decimal
    client_name: str
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    title_prefix: str = ""

    @property
    def contact_line(self) -> str:
        parts = [self.contact_name, self.contact_phone, self.contact_email]
        return " - ".join(p for p in parts if p)


class GeneratedDocument(BaseModel):
    filename: str
    content_type: str
    content: bytes
