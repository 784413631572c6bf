"""
Tests for AI service components.
"""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.schemas.presentation import apply_defaults
from app.services.ai.base import AIProviderError, EmptyResponseError, RateLimitError
from app.services.ai.openai_provider import OpenAIImageProvider, OpenAIProvider
from app.services.ai.prompt_manager import PromptManager, PromptTemplate


def completion(content, finish_reason="stop"):
    return SimpleNamespace(
        id="cmpl-1",
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=100, completion_tokens=50, total_tokens=150),
    )


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.images.generate = AsyncMock()
    client.close = AsyncMock()
    return client


class TestPromptManager:
    """Test prompt construction."""

    def test_content_prompt_includes_request(self):
        request = apply_defaults({
            "theme": "Renewable energy",
            "slideCount": 7,
            "audience": "Engineers",
            "additionalInfo": "Mention storage",
        })

        prompt = PromptManager().build_content_prompt(request)

        assert '"Renewable energy"' in prompt
        assert "Number of slides: 7" in prompt
        assert "Audience: Engineers" in prompt
        assert "Additional information: Mention storage" in prompt

    def test_schema_example_keeps_braces(self):
        prompt = PromptManager().build_content_prompt(apply_defaults({"theme": "AI"}))

        assert '"bulletPoints"' in prompt
        assert '{"type": "title"' in prompt

    def test_custom_template(self):
        template = PromptTemplate(
            name="short",
            template="{theme}/{slide_count}/{audience}/{additional_info}",
            variables=["theme", "slide_count", "audience", "additional_info"],
        )
        manager = PromptManager(content_template=template, system_prompt="Be brief")

        prompt = manager.build_content_prompt(apply_defaults({"theme": "AI", "slideCount": 3}))

        assert prompt == "AI/3/General audience/"
        assert manager.system_prompt == "Be brief"


class TestOpenAIProvider:
    """Test the chat completion provider with a mocked client."""

    @pytest.mark.asyncio
    async def test_generate(self, openai_client):
        openai_client.chat.completions.create.return_value = completion(json.dumps({"title": "T"}))
        provider = OpenAIProvider(api_key="sk-test", client=openai_client)

        response = await provider.generate("Make slides", system="You design decks", temperature=0.5)

        kwargs = openai_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo"
        assert kwargs["messages"] == [
            {"role": "system", "content": "You design decks"},
            {"role": "user", "content": "Make slides"},
        ]
        assert kwargs["temperature"] == 0.5
        assert response.content == '{"title": "T"}'
        assert response.usage.total_tokens == 150

    @pytest.mark.asyncio
    async def test_empty_completion(self, openai_client):
        openai_client.chat.completions.create.return_value = completion(None)
        provider = OpenAIProvider(api_key="sk-test", client=openai_client)

        with pytest.raises(EmptyResponseError):
            await provider.generate("Make slides")

    @pytest.mark.asyncio
    async def test_rate_limit(self, openai_client):
        openai_client.chat.completions.create.side_effect = Exception("rate_limit_exceeded")
        provider = OpenAIProvider(api_key="sk-test", client=openai_client)

        with pytest.raises(RateLimitError):
            await provider.generate("Make slides")

    @pytest.mark.asyncio
    async def test_other_errors_are_wrapped(self, openai_client):
        openai_client.chat.completions.create.side_effect = Exception("connection reset")
        provider = OpenAIProvider(api_key="sk-test", client=openai_client)

        with pytest.raises(AIProviderError):
            await provider.generate("Make slides")

    @pytest.mark.asyncio
    async def test_explicit_model_and_missing_usage(self, openai_client):
        reply = completion("{}")
        reply.usage = None
        openai_client.chat.completions.create.return_value = reply
        provider = OpenAIProvider(api_key="sk-test", default_model="gpt-4o-mini", client=openai_client)

        response = await provider.generate("Make slides", model="gpt-4o")

        assert openai_client.chat.completions.create.await_args.kwargs["model"] == "gpt-4o"
        assert response.model == "gpt-4o"
        assert response.usage is None
        assert response.metadata["finish_reason"] == "stop"


class TestOpenAIImageProvider:
    """Test the image provider with a mocked client."""

    @pytest.mark.asyncio
    async def test_returns_first_url(self, openai_client):
        openai_client.images.generate.return_value = SimpleNamespace(
            data=[SimpleNamespace(url="https://cdn.example.com/a.png")]
        )
        provider = OpenAIImageProvider(api_key="sk-test", client=openai_client)

        url = await provider.generate_image("A lighthouse")

        assert url == "https://cdn.example.com/a.png"
        kwargs = openai_client.images.generate.await_args.kwargs
        assert kwargs["n"] == 1
        assert kwargs["model"] == "dall-e-2"
        assert kwargs["size"] == "1024x1024"

    @pytest.mark.asyncio
    async def test_empty_data(self, openai_client):
        openai_client.images.generate.return_value = SimpleNamespace(data=[])
        provider = OpenAIImageProvider(api_key="sk-test", client=openai_client)

        assert await provider.generate_image("A lighthouse") is None

    @pytest.mark.asyncio
    async def test_close(self, openai_client):
        await OpenAIImageProvider(client=openai_client).close()

        openai_client.close.assert_awaited_once()
