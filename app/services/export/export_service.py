"""
Export service for rendered presentation formats.

Selects the renderer for an output format, resolves the theme for that
medium and writes the artifact to the output directory.
"""
import asyncio
import re
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.domain.schemas.presentation import OutputFormat, PresentationData
from app.services.export.generators.base import SlideRenderer
from app.services.export.generators.pdf_generator import PDFGenerator
from app.services.export.generators.pptx_generator import PPTXGenerator
from app.services.export.themes import ThemeMedium, resolve_theme

logger = get_logger(__name__)

RendererFactory = Callable[[Path], SlideRenderer]

_SAFE_FILENAME = re.compile(r'^[A-Za-z0-9_.-]+$')


class ExportService:
    """
    Service for exporting presentations in the supported formats.

    A fresh renderer is created for every export, so concurrent exports never
    share drawing state.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        renderers: Optional[Dict[OutputFormat, RendererFactory]] = None,
    ):
        self.output_dir = Path(output_dir)
        self.logger = get_logger(self.__class__.__name__)
        self._renderers: Dict[OutputFormat, RendererFactory] = renderers or {
            OutputFormat.DOCUMENT: PDFGenerator,
            OutputFormat.DECK: PPTXGenerator,
        }

    def export_presentation(
        self,
        data: PresentationData,
        format: OutputFormat,
        style: str = "default",
    ) -> str:
        """
        Render a presentation synchronously.

        Returns:
            Filename of the artifact inside the output directory

        Raises:
            RenderError: If the artifact cannot be written
        """
        format = OutputFormat.parse(format)
        medium = ThemeMedium.DOCUMENT if format is OutputFormat.DOCUMENT else ThemeMedium.DECK
        theme = resolve_theme(style, medium)

        renderer = self._renderers[format](self.output_dir)
        self.logger.info(
            "export_started",
            format=format.value,
            theme=theme.name,
            slides=len(data.slides),
        )
        return renderer.render(data, theme)

    async def export(
        self,
        data: PresentationData,
        format: OutputFormat,
        style: str = "default",
    ) -> str:
        """Render in a worker thread so the event loop stays responsive."""
        return await asyncio.to_thread(self.export_presentation, data, format, style)

    def resolve_artifact(self, filename: str) -> Path:
        """
        Locate a previously rendered artifact.

        Raises:
            NotFoundError: For unknown files or names that escape the output directory
        """
        if not _SAFE_FILENAME.match(filename) or filename.startswith("."):
            raise NotFoundError("File", filename)

        path = self.output_dir / filename
        if not path.is_file():
            raise NotFoundError("File", filename)
        return path

    @staticmethod
    def media_type_for(filename: str) -> str:
        if Path(filename).suffix.lower() == ".pdf":
            return OutputFormat.DOCUMENT.media_type
        return OutputFormat.DECK.media_type
