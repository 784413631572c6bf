"""
OpenAI provider implementations for chat completions and image generation.
"""
import time
from typing import Optional

import structlog
from openai import AsyncOpenAI

from app.services.ai.base import (
    AIProvider,
    AIProviderBase,
    AIProviderError,
    AIResponse,
    EmptyResponseError,
    ImageProviderBase,
    RateLimitError,
    TokenUsage,
)

logger = structlog.get_logger(__name__)


class OpenAIProvider(AIProviderBase):
    """OpenAI GPT provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gpt-3.5-turbo",
        client: Optional[AsyncOpenAI] = None,
    ):
        super().__init__(api_key)
        self.provider = AIProvider.OPENAI
        self.client = client or AsyncOpenAI(api_key=self.api_key)
        self.default_model = default_model

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.7,
        **kwargs
    ) -> AIResponse:
        """Generate text completion using GPT."""
        model = model or self.default_model
        max_tokens = max_tokens or 2500

        try:
            start_time = time.time()

            messages = []
            if system:
                messages.append({"role": "system", "content": system})
            messages.append({"role": "user", "content": prompt})

            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs
            )
        except Exception as e:
            if "rate_limit" in str(e).lower():
                logger.error("openai_rate_limit", error=str(e))
                raise RateLimitError(f"OpenAI rate limit exceeded: {e}") from e
            logger.error("openai_generation_error", error=str(e))
            raise AIProviderError(f"OpenAI completion failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.choices or not response.choices[0].message.content:
            raise EmptyResponseError("OpenAI returned an empty completion")
        content = response.choices[0].message.content

        usage = None
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        logger.info(
            "openai_generation_complete",
            model=model,
            tokens=usage.total_tokens if usage else None,
            latency_ms=latency_ms,
        )

        return AIResponse(
            content=content,
            provider=self.provider,
            model=model,
            usage=usage,
            latency_ms=latency_ms,
            metadata={
                "completion_id": response.id,
                "finish_reason": response.choices[0].finish_reason
            }
        )

    async def close(self) -> None:
        await self.client.close()


class OpenAIImageProvider(ImageProviderBase):
    """DALL-E image generation through the OpenAI images endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "dall-e-2",
        size: str = "1024x1024",
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.size = size

    async def generate_image(self, description: str) -> Optional[str]:
        """Return the URL of a generated image, or None if nothing came back."""
        response = await self.client.images.generate(
            model=self.model,
            prompt=description,
            n=1,
            size=self.size,
        )

        if not response.data:
            logger.warning("openai_image_empty_response", description=description[:100])
            return None

        return response.data[0].url

    async def close(self) -> None:
        await self.client.close()
