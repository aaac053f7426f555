import io

import pytest
from pypdf import PdfReader


def read_pdf(content: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(content))


def pdf_text(content: bytes) -> str:
    return "\n".join(page.extract_text() for page in read_pdf(content).pages)


@pytest.fixture()
def march_weeks(march_entries):
    from timebill.aggregation import group_entries_by_week

    return group_entries_by_week(march_entries)
