"""
Shared slide layout for the document and deck renderers.

Layout is computed here in points with a top-left origin. Backends only
implement the drawing primitives.
"""
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from app.core.exceptions import RenderError
from app.core.logging import get_logger
from app.domain.schemas.presentation import PresentationData, Slide, SlideType
from app.services.export.themes import Theme

CONTENT_MARGIN = 40.0
HEADER_GAP = 20.0
BULLET_SPACING = 12.0
BULLET_INDENT = 16.0
MARKER_RADIUS = 3.0
LINE_HEIGHT = 1.2

DOCUMENT_AUTHOR = "AI Presentation Generator"


class TextAlign(Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class Box:
    """Rectangle in points, origin at the top-left corner of the page."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


def build_filename(extension: str, timestamp_ms: Optional[int] = None) -> str:
    """presentation_<millisecond timestamp>.<extension>"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"presentation_{timestamp_ms}.{extension}"


def reserve_output_path(output_dir: Path, extension: str) -> Path:
    """
    Claim an unused artifact path by creating it empty.

    The timestamp is bumped a millisecond at a time while the name is taken,
    so renders finishing in the same millisecond never share a file.
    """
    timestamp_ms = int(time.time() * 1000)
    while True:
        path = output_dir / build_filename(extension, timestamp_ms)
        try:
            path.open("x").close()
        except FileExistsError:
            timestamp_ms += 1
            continue
        return path


class SlideRenderer(ABC):
    """
    Renders PresentationData into a file in the output directory.

    Subclasses set the page size and file extension and implement the
    drawing primitives.
    """

    extension: str = ""
    page_width: float = 0.0
    page_height: float = 0.0

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.logger = get_logger(self.__class__.__name__)

    def render(self, data: PresentationData, theme: Theme) -> str:
        """
        Render a presentation and write it to the output directory.

        Returns:
            Name of the written file

        Raises:
            RenderError: If the artifact cannot be produced or written
        """
        output_path = self.output_dir / build_filename(self.extension)
        reserved = False

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            output_path = reserve_output_path(self.output_dir, self.extension)
            reserved = True
            self._begin(data, theme)

            for slide in data.slides:
                self._start_page(theme)
                if slide.type == SlideType.TITLE:
                    self._layout_title_slide(slide, theme)
                elif slide.type == SlideType.CONTENT:
                    self._layout_content_slide(slide, theme)
                # Visual elements are not drawn yet
                self._finish_page()

            self._save(output_path)
        except Exception as e:
            if reserved:
                output_path.unlink(missing_ok=True)
            if isinstance(e, RenderError):
                raise
            self.logger.error("render_failed", path=str(output_path), error=str(e))
            raise RenderError(f"Failed to render {self.extension} presentation: {e}", path=str(output_path)) from e

        self.logger.info("presentation_rendered", path=str(output_path), slides=len(data.slides))
        return output_path.name

    # Layout

    def title_box(self, theme: Theme) -> Box:
        """Title block centered on the middle of the page."""
        return Box(0, self.page_height / 2 - theme.title_size, self.page_width, theme.title_size * 2)

    def subtitle_box(self, theme: Theme) -> Box:
        return Box(0, self.page_height / 2 + theme.title_size, self.page_width, theme.subtitle_size * 2)

    def header_box(self, theme: Theme) -> Box:
        return Box(
            CONTENT_MARGIN,
            CONTENT_MARGIN,
            self.page_width - CONTENT_MARGIN * 2,
            theme.header_size * LINE_HEIGHT,
        )

    def bullets_top(self, theme: Theme) -> float:
        return CONTENT_MARGIN + theme.header_size + HEADER_GAP

    def bullet_text_width(self) -> float:
        return self.page_width - CONTENT_MARGIN * 2 - BULLET_INDENT

    def _layout_title_slide(self, slide: Slide, theme: Theme) -> None:
        self._draw_text(
            slide.title,
            self.title_box(theme),
            font=theme.font,
            size=theme.title_size,
            color=theme.title_color,
            align=TextAlign.CENTER,
            bold=True,
            middle=True,
        )

        if slide.subtitle:
            self._draw_text(
                slide.subtitle,
                self.subtitle_box(theme),
                font=theme.font,
                size=theme.subtitle_size,
                color=theme.text_color,
                align=TextAlign.CENTER,
                middle=True,
            )

    def _layout_content_slide(self, slide: Slide, theme: Theme) -> None:
        self._draw_text(
            slide.title,
            self.header_box(theme),
            font=theme.font,
            size=theme.header_size,
            color=theme.title_color,
            align=TextAlign.LEFT,
            bold=True,
        )

        current_y = self.bullets_top(theme)
        text_width = self.bullet_text_width()

        for point in slide.bullet_points or []:
            lines = max(1, self._count_lines(point, theme.font, theme.body_size, text_width))

            self._draw_marker(
                CONTENT_MARGIN + 6,
                current_y + theme.body_size / 3,
                MARKER_RADIUS,
                theme.text_color,
            )
            self._draw_text(
                point,
                Box(
                    CONTENT_MARGIN + BULLET_INDENT,
                    current_y,
                    text_width,
                    theme.body_size * LINE_HEIGHT * lines,
                ),
                font=theme.font,
                size=theme.body_size,
                color=theme.text_color,
                align=TextAlign.LEFT,
            )

            # Wrapped items push the next one down by one body line each
            current_y += theme.body_size * lines + BULLET_SPACING

    def _count_lines(self, text: str, font: str, size: float, width: float) -> int:
        """Rough line count assuming an average glyph width of half the font size."""
        chars_per_line = max(1, int(width / (size * 0.5)))
        return max(1, math.ceil(len(text) / chars_per_line))

    # Drawing primitives

    @abstractmethod
    def _begin(self, data: PresentationData, theme: Theme) -> None:
        """Create the underlying document and set its metadata."""

    @abstractmethod
    def _start_page(self, theme: Theme) -> None:
        """Start a new page with the theme background."""

    def _finish_page(self) -> None:
        pass

    @abstractmethod
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
        """Draw text inside box; middle centers it vertically."""

    @abstractmethod
    def _draw_marker(self, cx: float, cy: float, radius: float, color: str) -> None:
        """Draw a filled bullet marker."""

    @abstractmethod
    def _save(self, path: Path) -> None:
        """Write the document to path."""
