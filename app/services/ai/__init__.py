"""
AI service module for DeckGen presentation content generation.
"""
from .base import (
    AIProvider,
    AIProviderBase,
    AIProviderError,
    AIResponse,
    ImageProviderBase,
    RateLimitError,
    TokenUsage,
)
from .content_generator import ContentGenerator
from .image_enricher import ImageEnricher
from .prompt_manager import PromptManager, PromptTemplate
from .response_parser import ResponseParser
from .retry import call_with_retry, exponential_backoff
from .text_normalizer import normalize_text

__all__ = [
    # Base classes
    "AIProvider",
    "AIProviderBase",
    "AIProviderError",
    "AIResponse",
    "ImageProviderBase",
    "RateLimitError",
    "TokenUsage",
    # Core services
    "ContentGenerator",
    "ImageEnricher",
    "PromptManager",
    "PromptTemplate",
    "ResponseParser",
    "call_with_retry",
    "exponential_backoff",
    "normalize_text",
]
