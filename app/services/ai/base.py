"""
Base AI provider interfaces for text and image generation.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class AIProvider(str, Enum):
    """Available AI providers."""
    OPENAI = "openai"


@dataclass
class TokenUsage:
    """Token usage tracking."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class AIResponse:
    """Standard AI response format."""
    content: str
    provider: AIProvider
    model: str
    usage: Optional[TokenUsage]
    latency_ms: int
    metadata: Optional[Dict[str, Any]] = None


class AIProviderBase(ABC):
    """Base class for text completion providers."""

    def __init__(self, api_key: Optional[str], **kwargs):
        self.api_key = api_key
        self.provider = AIProvider.OPENAI  # Override in subclasses
        self.default_model: str = ""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.7,
        **kwargs
    ) -> AIResponse:
        """Generate text completion."""
        pass

    async def close(self) -> None:
        """Release network resources held by the provider."""
        pass


class ImageProviderBase(ABC):
    """Base class for image generation providers."""

    @abstractmethod
    async def generate_image(self, description: str) -> Optional[str]:
        """Generate an image and return a URL it can be downloaded from."""
        pass

    async def close(self) -> None:
        pass


class AIProviderError(Exception):
    """Base exception for AI provider errors."""
    pass


class RateLimitError(AIProviderError):
    """Raised when rate limit is hit."""
    pass


class EmptyResponseError(AIProviderError):
    """Raised when the provider returns no content."""
    pass
