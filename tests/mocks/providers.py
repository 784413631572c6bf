"""
Fake AI providers for tests.
"""
from typing import Dict, List, Optional

from app.services.ai.base import (
    AIProvider,
    AIProviderBase,
    AIResponse,
    ImageProviderBase,
)


class FakeLLMProvider(AIProviderBase):
    """Returns queued responses in order; queued exceptions are raised."""

    def __init__(self, responses: List):
        super().__init__(api_key="test-key")
        self.responses = list(responses)
        self.calls: List[Dict] = []

    async def generate(self, prompt, system=None, model=None, max_tokens=None, temperature=0.7, **kwargs):
        self.calls.append({
            "prompt": prompt,
            "system": system,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return AIResponse(
            content=item,
            provider=AIProvider.OPENAI,
            model=model or "test-model",
            usage=None,
            latency_ms=1,
        )


class FakeImageProvider(ImageProviderBase):
    """Returns a URL per description; descriptions in `failing` raise."""

    def __init__(self, failing: Optional[set] = None):
        self.failing = failing or set()
        self.descriptions: List[str] = []

    async def generate_image(self, description: str) -> Optional[str]:
        self.descriptions.append(description)
        if description in self.failing:
            raise RuntimeError(f"image service rejected: {description}")
        return f"https://images.example.com/{len(self.descriptions)}.png"
