"""
PowerPoint/PPTX backend for the slide renderer.
"""
from pathlib import Path
from typing import Optional

try:
    from pptx import Presentation
    from pptx.dml.color import RGBColor
    from pptx.enum.shapes import MSO_SHAPE
    from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
    from pptx.slide import Slide
    from pptx.util import Emu, Pt
except ImportError as e:
    raise ImportError(
        f"Required packages not installed: {e}. "
        "Please install: pip install python-pptx"
    )

from app.domain.schemas.presentation import PresentationData
from app.services.export.generators.base import DOCUMENT_AUTHOR, Box, SlideRenderer, TextAlign
from app.services.export.themes import Theme

# 16:9 slide, 13.333in x 7.5in
SLIDE_WIDTH_PT = 960.0
SLIDE_HEIGHT_PT = 540.0
BLANK_LAYOUT_INDEX = 6

_ALIGNMENT = {
    TextAlign.LEFT: PP_ALIGN.LEFT,
    TextAlign.CENTER: PP_ALIGN.CENTER,
}


class PPTXGenerator(SlideRenderer):
    """Editable deck renderer built on python-pptx."""

    extension = "pptx"
    page_width = SLIDE_WIDTH_PT
    page_height = SLIDE_HEIGHT_PT

    def __init__(self, output_dir):
        super().__init__(output_dir)
        self.presentation = None
        self._slide: Optional[Slide] = None

    def _begin(self, data: PresentationData, theme: Theme) -> None:
        self.presentation = Presentation()
        self.presentation.slide_width = Pt(SLIDE_WIDTH_PT)
        self.presentation.slide_height = Pt(SLIDE_HEIGHT_PT)

        properties = self.presentation.core_properties
        properties.title = data.title
        properties.subject = data.title
        properties.author = DOCUMENT_AUTHOR

    def _start_page(self, theme: Theme) -> None:
        layout = self.presentation.slide_layouts[BLANK_LAYOUT_INDEX]
        self._slide = self.presentation.slides.add_slide(layout)

        fill = self._slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(theme.background_color)

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
        shape = self._slide.shapes.add_textbox(
            Pt(box.x), Pt(box.y), Pt(box.width), Pt(box.height)
        )
        text_frame = shape.text_frame
        text_frame.word_wrap = True
        text_frame.auto_size = MSO_AUTO_SIZE.NONE
        text_frame.margin_left = text_frame.margin_right = Emu(0)
        text_frame.margin_top = text_frame.margin_bottom = Emu(0)
        text_frame.vertical_anchor = MSO_ANCHOR.MIDDLE if middle else MSO_ANCHOR.TOP

        paragraph = text_frame.paragraphs[0]
        paragraph.alignment = _ALIGNMENT[align]
        run = paragraph.add_run()
        run.text = text
        run.font.name = font
        run.font.size = Pt(size)
        run.font.bold = bold
        run.font.color.rgb = RGBColor.from_string(color)

    def _draw_marker(self, cx: float, cy: float, radius: float, color: str) -> None:
        marker = self._slide.shapes.add_shape(
            MSO_SHAPE.OVAL,
            Pt(cx - radius), Pt(cy - radius), Pt(radius * 2), Pt(radius * 2),
        )
        marker.fill.solid()
        marker.fill.fore_color.rgb = RGBColor.from_string(color)
        marker.line.fill.background()

    def _save(self, path: Path) -> None:
        self.presentation.save(str(path))
