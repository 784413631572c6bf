"""
Presentation generation use case: content generation followed by rendering.
"""
from typing import Any, Mapping

from app.core.logging import get_logger
from app.domain.schemas.presentation import GenerationResult, apply_defaults
from app.services.ai.content_generator import ContentGenerator
from app.services.export.export_service import ExportService

logger = get_logger(__name__)


class PresentationService:
    """Turns raw request parameters into a downloadable presentation."""

    def __init__(
        self,
        content_generator: ContentGenerator,
        export_service: ExportService,
        download_prefix: str = "/api/v1/presentations/download",
    ):
        self.content_generator = content_generator
        self.export_service = export_service
        self.download_prefix = download_prefix.rstrip("/")

    async def create_presentation(self, raw_request: Mapping[str, Any]) -> GenerationResult:
        """
        Generate and render a presentation.

        Raises:
            ValidationError: If the request has no theme or invalid fields
            GenerationError: If content generation fails
            RenderError: If the artifact cannot be written
        """
        request = apply_defaults(raw_request)
        logger.info(
            "presentation_requested",
            theme=request.theme,
            slide_count=request.slide_count,
            format=request.format.value,
            style=request.style,
        )

        data = await self.content_generator.generate(request)
        filename = await self.export_service.export(data, request.format, request.style)

        return GenerationResult(
            filename=filename,
            download_url=f"{self.download_prefix}/{filename}",
            presentation_title=data.title,
        )
