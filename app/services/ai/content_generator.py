"""
AI-powered presentation content generation.
"""
import time
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import DeckGenException, GenerationError, ParseError, StorageError
from app.domain.schemas.presentation import (
    PresentationData,
    PresentationRequest,
    Slide,
)
from app.infrastructure.cache.base import CacheStore, derive_cache_key
from app.services.ai.base import AIProviderBase
from app.services.ai.image_enricher import ImageEnricher
from app.services.ai.prompt_manager import PromptManager
from app.services.ai.response_parser import ResponseParser
from app.services.ai.retry import call_with_retry
from app.services.ai.text_normalizer import normalize_text

logger = structlog.get_logger(__name__)


class ContentGenerator:
    """
    Produces normalized PresentationData for a request.

    Pipeline: cache lookup, prompt, retried completion + parse + validate,
    text normalization, image enrichment, cache write.
    """

    def __init__(
        self,
        provider: AIProviderBase,
        cache: CacheStore,
        image_enricher: Optional[ImageEnricher] = None,
        prompt_manager: Optional[PromptManager] = None,
        parser: Optional[ResponseParser] = None,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2500,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self.provider = provider
        self.cache = cache
        self.image_enricher = image_enricher
        self.prompt_manager = prompt_manager or PromptManager()
        self.parser = parser or ResponseParser()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_attempts = max_attempts
        self.retry_base_delay = retry_base_delay

    async def generate(self, request: PresentationRequest) -> PresentationData:
        """
        Generate presentation content for a request.

        Raises:
            GenerationError: If no usable content could be produced
        """
        cache_key = derive_cache_key(request)

        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.info("content_cache_hit", theme=request.theme, cache_key=cache_key)
            return cached

        start_time = time.time()
        logger.info(
            "content_generation_started",
            theme=request.theme,
            slide_count=request.slide_count,
            cache_key=cache_key,
        )

        try:
            prompt = self.prompt_manager.build_content_prompt(request)

            async def attempt() -> PresentationData:
                response = await self.provider.generate(
                    prompt=prompt,
                    system=self.prompt_manager.system_prompt,
                    model=self.model,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                )
                return self._to_presentation(self.parser.extract(response.content))

            data = await call_with_retry(
                attempt,
                max_attempts=self.max_attempts,
                base_delay=self.retry_base_delay,
                operation="content_generation",
            )

            data = self.normalize(data)

            if self.image_enricher is not None:
                data = await self.image_enricher.enrich_presentation(data)
        except GenerationError:
            raise
        except DeckGenException as e:
            raise GenerationError(f"Failed to generate presentation content: {e.message}", last_error=e) from e
        except Exception as e:
            logger.error("content_generation_error", error_type=type(e).__name__, error=str(e))
            raise GenerationError(f"Failed to generate presentation content: {e}", last_error=e) from e

        try:
            await self.cache.put(cache_key, data)
        except StorageError as e:
            logger.error("content_cache_write_failed", cache_key=cache_key, error=e.message)

        logger.info(
            "content_generation_complete",
            theme=request.theme,
            slides=len(data.slides),
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return data

    @staticmethod
    def _to_presentation(payload: dict) -> PresentationData:
        """Validate parsed JSON as PresentationData. Runs inside the retried unit."""
        try:
            return PresentationData.model_validate(payload)
        except PydanticValidationError as e:
            raise ParseError(
                "Model response does not describe a presentation",
                raw_text=str(payload)[:1000],
                reasons=[err["msg"] for err in e.errors()],
            ) from e

    @staticmethod
    def normalize(data: PresentationData) -> PresentationData:
        """Normalize the deck title and every slide's text fields."""
        title = normalize_text(data.title)
        slides = []

        for index, slide in enumerate(data.slides, start=1):
            slide_title = normalize_text(slide.title)
            if not slide_title:
                # Every rendered slide needs a header
                slide_title = title if slide.is_title and title else f"Slide {index}"

            slides.append(
                Slide(
                    type=slide.type,
                    title=slide_title,
                    subtitle=normalize_text(slide.subtitle) if slide.subtitle else None,
                    bullet_points=(
                        [normalize_text(point) for point in slide.bullet_points]
                        if slide.bullet_points is not None
                        else None
                    ),
                    visual_elements=(
                        [element.model_copy() for element in slide.visual_elements]
                        if slide.visual_elements is not None
                        else None
                    ),
                )
            )

        return PresentationData(title=title, slides=slides)
