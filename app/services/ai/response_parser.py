"""
Extraction of JSON documents from free-form model responses.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import structlog

from app.core.exceptions import ParseError

logger = structlog.get_logger(__name__)


@dataclass
class ParseAttempt:
    """Outcome of a single extraction strategy."""
    strategy: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def _load_object(candidate: str, strategy: str) -> ParseAttempt:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        return ParseAttempt(strategy, error=f"invalid JSON: {e.msg} at position {e.pos}")
    if not isinstance(data, dict):
        return ParseAttempt(strategy, error=f"expected a JSON object, got {type(data).__name__}")
    return ParseAttempt(strategy, data=data)


def parse_whole_text(text: str) -> ParseAttempt:
    """Treat the entire response as JSON."""
    return _load_object(text, "whole_text")


_OUTERMOST_BRACES = re.compile(r'({[\s\S]*})')


def parse_outermost_braces(text: str) -> ParseAttempt:
    """Parse the span from the first '{' to the last '}'."""
    match = _OUTERMOST_BRACES.search(text)
    if not match:
        return ParseAttempt("outermost_braces", error="no braces found")
    return _load_object(match.group(1), "outermost_braces")


_FENCED_BLOCK = re.compile(r'```(?:json)?\s*([\s\S]*?)\s*```')


def parse_fenced_block(text: str) -> ParseAttempt:
    """Parse the first ``` fenced block, optionally tagged json."""
    match = _FENCED_BLOCK.search(text)
    if not match:
        return ParseAttempt("fenced_block", error="no fenced block found")
    return _load_object(match.group(1), "fenced_block")


Strategy = Callable[[str], ParseAttempt]

DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (
    parse_whole_text,
    parse_outermost_braces,
    parse_fenced_block,
)


class ResponseParser:
    """Runs extraction strategies in order until one yields a JSON object."""

    def __init__(self, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES):
        self.strategies = tuple(strategies)

    def extract(self, raw_text: str) -> Dict[str, Any]:
        """
        Extract a JSON object from a model response.

        Args:
            raw_text: Response text as returned by the model

        Returns:
            Parsed JSON object

        Raises:
            ParseError: If no strategy succeeds
        """
        text = raw_text or ""
        attempts: List[ParseAttempt] = []

        for strategy in self.strategies:
            attempt = strategy(text)
            if attempt.ok:
                logger.debug("response_parsed", strategy=attempt.strategy)
                return attempt.data
            attempts.append(attempt)

        reasons = [f"{a.strategy}: {a.error}" for a in attempts]
        logger.error(
            "response_parse_failed",
            reasons=reasons,
            response_preview=text[:500],
        )
        raise ParseError(
            "Failed to extract valid JSON from model response",
            raw_text=text,
            reasons=reasons,
        )
