"""Page geometry and drawing helpers shared by the invoice and the hours log.

Both documents are laid out on US Letter in points with an explicit
baseline cursor measured from the top of the page, so positions are
deterministic and independent of fpdf2's flowing-cell logic.
"""

from __future__ import annotations

from collections.abc import Callable

from fpdf import FPDF

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
LEFT_MARGIN = 50
RIGHT_MARGIN = 562  # x coordinate of the right edge of the content area
TOP_MARGIN = 50
CONTENT_WIDTH = RIGHT_MARGIN - LEFT_MARGIN

FONT = "Helvetica"

BLACK = (0, 0, 0)
MUTED = (77, 77, 77)
HEADER_FILL = (242, 242, 242)

_TYPOGRAPHIC = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "“": '"',
        "”": '"',
        "–": "-",
        "—": "-",
        "…": "...",
        "•": "-",
        "\u00a0": " ",
    }
)


def latin1(text: str) -> str:
    """Core PDF fonts only cover Latin-1."""
    text = text.translate(_TYPOGRAPHIC)
    return text.encode("latin-1", "replace").decode("latin-1")


def new_document(title: str) -> FPDF:
    pdf = FPDF(orientation="P", unit="pt", format="letter")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(LEFT_MARGIN, TOP_MARGIN, PAGE_WIDTH - RIGHT_MARGIN)
    pdf.set_title(latin1(title))
    pdf.set_creator("timebill")
    pdf.add_page()
    return pdf


def draw_text(
    pdf: FPDF,
    x: float,
    y: float,
    text: str,
    size: float,
    style: str = "",
    color: tuple[int, int, int] = BLACK,
) -> float:
    """Draw ``text`` with its baseline at ``y``; return its width."""
    pdf.set_font(FONT, style, size)
    pdf.set_text_color(*color)
    text = latin1(text)
    pdf.text(x, y, text)
    return pdf.get_string_width(text)


def text_width(pdf: FPDF, text: str, size: float, style: str = "") -> float:
    pdf.set_font(FONT, style, size)
    return pdf.get_string_width(latin1(text))


def hline(pdf: FPDF, x1: float, x2: float, y: float, thickness: float = 1) -> None:
    pdf.set_draw_color(*BLACK)
    pdf.set_line_width(thickness)
    pdf.line(x1, y, x2, y)


def underline(pdf: FPDF, x: float, baseline: float, width: float, thickness: float = 1) -> None:
    hline(pdf, x, x + width, baseline + 2, thickness)


def bullet(pdf: FPDF, x: float, baseline: float, size: float) -> None:
    """Small filled dot centred on the x-height of a line of ``size`` points."""
    d = size * 0.3
    pdf.set_fill_color(*BLACK)
    pdf.ellipse(x, baseline - size * 0.35 - d / 2, d, d, style="F")


def wrap_words(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """Greedy word wrap. A line is closed when adding the next word would
    exceed ``max_width``; a single word longer than the width stays whole."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and measure(candidate) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
