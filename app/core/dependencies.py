"""
Service wiring and dependency injection for FastAPI.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from app.core.config import Settings
from app.core.logging import get_logger
from app.infrastructure.cache import CacheStore, FileCacheStore, InMemoryCacheStore, RedisCacheStore
from app.services.ai.base import AIProviderBase, ImageProviderBase
from app.services.ai.content_generator import ContentGenerator
from app.services.ai.image_enricher import ImageEnricher
from app.services.ai.openai_provider import OpenAIImageProvider, OpenAIProvider
from app.services.export.export_service import ExportService
from app.services.presentation_service import PresentationService

logger = get_logger(__name__)


def build_cache_store(settings: Settings) -> CacheStore:
    if settings.CACHE_BACKEND == "memory":
        return InMemoryCacheStore()
    if settings.CACHE_BACKEND == "redis":
        if not settings.REDIS_URL:
            raise ValueError("REDIS_URL must be set when CACHE_BACKEND=redis")
        return RedisCacheStore.from_url(str(settings.REDIS_URL), prefix=settings.CACHE_KEY_PREFIX)
    return FileCacheStore(settings.CACHE_DIR)


@dataclass
class ServiceContainer:
    """
    Process-wide services, created once at startup and closed at shutdown.
    """
    settings: Settings
    llm_provider: AIProviderBase
    cache: CacheStore
    content_generator: ContentGenerator
    export_service: ExportService
    presentation_service: PresentationService
    image_provider: Optional[ImageProviderBase] = None
    image_enricher: Optional[ImageEnricher] = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        llm_provider: Optional[AIProviderBase] = None,
        image_provider: Optional[ImageProviderBase] = None,
        cache: Optional[CacheStore] = None,
    ) -> "ServiceContainer":
        llm_provider = llm_provider or OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            default_model=settings.OPENAI_MODEL,
        )
        if cache is None:
            cache = build_cache_store(settings)

        image_enricher = None
        if settings.IMAGE_GENERATION_ENABLED:
            image_provider = image_provider or OpenAIImageProvider(
                api_key=settings.OPENAI_API_KEY,
                model=settings.OPENAI_IMAGE_MODEL,
                size=settings.OPENAI_IMAGE_SIZE,
            )
            image_enricher = ImageEnricher(
                image_provider,
                images_dir=settings.IMAGES_DIR,
                download_timeout=settings.IMAGE_DOWNLOAD_TIMEOUT_SECONDS,
            )

        content_generator = ContentGenerator(
            provider=llm_provider,
            cache=cache,
            image_enricher=image_enricher,
            model=settings.OPENAI_MODEL,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
            max_attempts=settings.AI_MAX_RETRIES,
            retry_base_delay=settings.retry_base_delay_seconds,
        )
        export_service = ExportService(settings.OUTPUT_DIR)
        presentation_service = PresentationService(
            content_generator,
            export_service,
            download_prefix=f"{settings.API_V1_PREFIX}/presentations/download",
        )

        logger.info(
            "services_initialized",
            cache_backend=settings.CACHE_BACKEND,
            model=settings.OPENAI_MODEL,
            images_enabled=image_enricher is not None,
        )

        return cls(
            settings=settings,
            llm_provider=llm_provider,
            cache=cache,
            content_generator=content_generator,
            export_service=export_service,
            presentation_service=presentation_service,
            image_provider=image_provider,
            image_enricher=image_enricher,
        )

    async def close(self) -> None:
        if self.image_enricher is not None:
            await self.image_enricher.close()
        if self.image_provider is not None:
            await self.image_provider.close()
        await self.llm_provider.close()
        await self.cache.close()
        logger.info("services_closed")


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_presentation_service(request: Request) -> PresentationService:
    return get_services(request).presentation_service


def get_export_service(request: Request) -> ExportService:
    return get_services(request).export_service
