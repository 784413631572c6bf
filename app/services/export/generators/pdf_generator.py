"""
PDF backend for the slide renderer.

Each slide becomes one landscape A4 page drawn directly on a reportlab
canvas.
"""
import io
from pathlib import Path
from typing import List, Optional

try:
    from reportlab.lib.colors import HexColor
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.lib.utils import simpleSplit
    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfgen import canvas
except ImportError as e:
    raise ImportError(
        f"Required packages not installed: {e}. "
        "Please install: pip install reportlab"
    )

from app.domain.schemas.presentation import PresentationData
from app.services.export.generators.base import (
    DOCUMENT_AUTHOR,
    LINE_HEIGHT,
    Box,
    SlideRenderer,
    TextAlign,
)
from app.services.export.themes import Theme

PAGE_WIDTH, PAGE_HEIGHT = landscape(A4)

# Bold variants of the standard PDF fonts
_BOLD_FONTS = {
    "Helvetica": "Helvetica-Bold",
    "Times-Roman": "Times-Bold",
    "Courier": "Courier-Bold",
}
FALLBACK_FONT = "Helvetica"


def resolve_font(name: str, bold: bool = False) -> str:
    """Map a theme font onto a font reportlab can draw with."""
    if name not in pdfmetrics.getRegisteredFontNames() and name not in pdfmetrics.standardFonts:
        name = FALLBACK_FONT
    if bold:
        return _BOLD_FONTS.get(name, name)
    return name


class PDFGenerator(SlideRenderer):
    """Document renderer built on the reportlab canvas."""

    extension = "pdf"
    page_width = PAGE_WIDTH
    page_height = PAGE_HEIGHT

    def __init__(self, output_dir):
        super().__init__(output_dir)
        self.canvas: Optional[canvas.Canvas] = None

    def _begin(self, data: PresentationData, theme: Theme) -> None:
        # Draw into memory; _save writes the finished bytes
        self.canvas = canvas.Canvas(io.BytesIO(), pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
        self.canvas.setTitle(data.title)
        self.canvas.setSubject(data.title)
        self.canvas.setAuthor(DOCUMENT_AUTHOR)

    def _start_page(self, theme: Theme) -> None:
        self.canvas.setFillColor(HexColor(f"#{theme.background_color}"))
        self.canvas.rect(0, 0, PAGE_WIDTH, PAGE_HEIGHT, stroke=0, fill=1)

    def _finish_page(self) -> None:
        self.canvas.showPage()

    def _wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        return simpleSplit(text, font, size, width) or [""]

    def _count_lines(self, text: str, font: str, size: float, width: float) -> int:
        return len(self._wrap(text, resolve_font(font), size, width))

    def _draw_text(
        self,
        text: str,
        box: Box,
        font: str,
        size: float,
        color: str,
        align: TextAlign = TextAlign.LEFT,
        bold: bool = False,
        middle: bool = False,
    ) -> None:
        font_name = resolve_font(font, bold)
        lines = self._wrap(text, font_name, size, box.width)
        leading = size * LINE_HEIGHT

        if middle:
            top = box.center_y - leading * len(lines) / 2
        else:
            top = box.y

        self.canvas.setFillColor(HexColor(f"#{color}"))
        self.canvas.setFont(font_name, size)

        for index, line in enumerate(lines):
            # Baseline sits one font size below the top of its line box
            baseline = top + index * leading + size
            y = PAGE_HEIGHT - baseline
            if align is TextAlign.CENTER:
                self.canvas.drawCentredString(box.center_x, y, line)
            else:
                self.canvas.drawString(box.x, y, line)

    def _draw_marker(self, cx: float, cy: float, radius: float, color: str) -> None:
        self.canvas.setFillColor(HexColor(f"#{color}"))
        self.canvas.circle(cx, PAGE_HEIGHT - cy, radius, stroke=0, fill=1)

    def _save(self, path: Path) -> None:
        pdf_bytes = self.canvas.getpdfdata()
        with open(path, "wb") as f:
            f.write(pdf_bytes)
