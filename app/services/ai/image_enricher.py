"""
Slide illustration through an image generation provider.
"""
import asyncio
import time
import uuid
from pathlib import Path
from typing import List, Optional, Union

import aiofiles
import aiohttp
import structlog

from app.core.exceptions import ImageError
from app.domain.schemas.presentation import PresentationData, VisualElement
from app.services.ai.base import ImageProviderBase

logger = structlog.get_logger(__name__)

IMAGE_ELEMENT_TYPE = "image"


class ImageEnricher:
    """
    Generates, downloads and stores images for slide visual elements.

    Failures never propagate: the element simply keeps no path.
    """

    def __init__(
        self,
        provider: ImageProviderBase,
        images_dir: Union[str, Path],
        public_prefix: str = "/images",
        download_timeout: int = 60,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.provider = provider
        self.images_dir = Path(images_dir)
        self.images_dir.mkdir(parents=True, exist_ok=True)
        self.public_prefix = public_prefix.rstrip("/")
        self.download_timeout = download_timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.download_timeout)
            )
            self._owns_session = True
        return self._session

    @staticmethod
    def _new_filename() -> str:
        return f"image_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.png"

    async def enrich(self, description: str) -> Optional[str]:
        """
        Generate an image for a description and store it locally.

        Returns:
            Public path of the stored image, or None if anything failed
        """
        try:
            return await self._generate_and_store(description)
        except ImageError as e:
            logger.warning("image_enrichment_skipped", description=description[:100], reason=e.message)
        except Exception as e:
            logger.error(
                "image_enrichment_failed",
                description=description[:100],
                error_type=type(e).__name__,
                error=str(e),
            )
        return None

    async def _generate_and_store(self, description: str) -> str:
        if not description or not description.strip():
            raise ImageError("Empty image description")

        logger.info("image_generation_started", description=description[:100])
        image_url = await self.provider.generate_image(description)
        if not image_url:
            raise ImageError("Image provider returned no image", description=description)

        content = await self._download(image_url)

        filename = self._new_filename()
        path = self.images_dir / filename
        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

        logger.info("image_saved", path=str(path), size=len(content))
        return f"{self.public_prefix}/{filename}"

    async def _download(self, url: str) -> bytes:
        session = self._get_session()
        async with session.get(url) as response:
            if response.status != 200:
                raise ImageError(f"Image download failed with HTTP {response.status}")
            content = await response.read()
        if not content:
            raise ImageError("Downloaded image is empty")
        return content

    async def _enrich_element(self, element: VisualElement) -> None:
        element.path = await self.enrich(element.description)

    async def enrich_presentation(self, data: PresentationData) -> PresentationData:
        """
        Illustrate every image element across all slides concurrently.

        Each result is written back into its own element, so completion order
        does not matter.
        """
        elements: List[VisualElement] = [
            element
            for slide in data.slides
            for element in (slide.visual_elements or [])
            if element.type == IMAGE_ELEMENT_TYPE
        ]
        if not elements:
            return data

        await asyncio.gather(*(self._enrich_element(element) for element in elements))

        enriched = sum(1 for element in elements if element.path)
        logger.info("presentation_images_enriched", requested=len(elements), enriched=enriched)
        return data

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
