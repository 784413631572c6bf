"""
Tests for JSON extraction from model responses.
"""
import pytest

from app.core.exceptions import ParseError
from app.services.ai.response_parser import (
    ResponseParser,
    parse_fenced_block,
    parse_outermost_braces,
    parse_whole_text,
)

PAYLOAD = '{"title":"T","slides":[]}'
EXPECTED = {"title": "T", "slides": []}


class TestResponseParser:
    """Test the ordered extraction strategies."""

    @pytest.fixture
    def parser(self):
        return ResponseParser()

    def test_plain_json(self, parser):
        assert parser.extract(PAYLOAD) == EXPECTED

    def test_fenced_json_block(self, parser):
        assert parser.extract(f"```json\n{PAYLOAD}\n```") == EXPECTED

    def test_json_inside_prose(self, parser):
        text = f"Sure! Here is the deck you asked for: {PAYLOAD} Let me know if you need changes."
        assert parser.extract(text) == EXPECTED

    def test_all_positions_yield_equal_result(self, parser):
        results = [
            parser.extract(PAYLOAD),
            parser.extract(f"```json\n{PAYLOAD}\n```"),
            parser.extract(f"The result is {PAYLOAD} as requested."),
        ]
        assert results[0] == results[1] == results[2]

    def test_untagged_fence_with_stray_braces_outside(self, parser):
        # Greedy brace span covers the stray text, so only the fence parses
        text = "Use {curly} notes.\n```\n" + PAYLOAD + "\n```\nDone {here}"
        assert parser.extract(text) == EXPECTED

    @pytest.mark.parametrize("garbage", [
        "not json at all",
        "```json\nstill not json\n```",
        "prose with {broken: json, here} inside",
        "",
    ])
    def test_garbage_raises_parse_error(self, parser, garbage):
        with pytest.raises(ParseError) as exc_info:
            parser.extract(garbage)

        assert exc_info.value.raw_text == garbage
        assert len(exc_info.value.reasons) == 3

    def test_json_array_is_not_accepted(self, parser):
        with pytest.raises(ParseError):
            parser.extract("[1, 2, 3]")

    def test_custom_strategy_order(self):
        parser = ResponseParser(strategies=[parse_fenced_block])
        with pytest.raises(ParseError):
            parser.extract(PAYLOAD)


class TestStrategies:
    """Test individual strategies report failures instead of raising."""

    def test_whole_text_failure(self):
        attempt = parse_whole_text("nope")
        assert not attempt.ok
        assert "invalid JSON" in attempt.error

    def test_braces_missing(self):
        attempt = parse_outermost_braces("no braces")
        assert not attempt.ok
        assert attempt.error == "no braces found"

    def test_fence_missing(self):
        attempt = parse_fenced_block(PAYLOAD)
        assert not attempt.ok
        assert attempt.error == "no fenced block found"

    def test_fence_success(self):
        attempt = parse_fenced_block(f"```\n{PAYLOAD}\n```")
        assert attempt.ok
        assert attempt.strategy == "fenced_block"
        assert attempt.data == EXPECTED
