"""
Presentation generation and download endpoints.
"""
from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.dependencies import get_export_service, get_presentation_service
from app.core.logging import get_logger
from app.domain.schemas.presentation import GenerationResult
from app.services.export.export_service import ExportService
from app.services.presentation_service import PresentationService

logger = get_logger(__name__)
router = APIRouter()


class GeneratePresentationRequest(BaseModel):
    """Request body; only the theme is required, and it is checked by the service."""
    model_config = ConfigDict(populate_by_name=True)

    theme: Optional[str] = None
    slide_count: Optional[Union[int, str]] = Field(default=None, alias="slideCount")
    audience: Optional[str] = None
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")
    style: Optional[str] = None
    format: Optional[str] = None


@router.post("/generate", response_model=GenerationResult, response_model_by_alias=True)
async def generate_presentation(
    body: GeneratePresentationRequest,
    service: PresentationService = Depends(get_presentation_service),
) -> GenerationResult:
    """
    Generate a presentation and return its download link.
    """
    logger.info("generate_presentation_request", theme=body.theme)
    return await service.create_presentation(body.model_dump(exclude_none=True))


@router.get("/download/{filename}")
async def download_presentation(
    filename: str,
    export_service: ExportService = Depends(get_export_service),
) -> FileResponse:
    """
    Download a rendered presentation.
    """
    path = export_service.resolve_artifact(filename)
    return FileResponse(
        path,
        media_type=export_service.media_type_for(filename),
        filename=filename,
    )
