"""
Shared fixtures for DeckGen tests.
"""
import json
from typing import Dict

import pytest

from app.domain.schemas.presentation import PresentationData, Slide, VisualElement


@pytest.fixture
def sample_presentation() -> PresentationData:
    return PresentationData(
        title="Climate Change",
        slides=[
            Slide(type="title", title="Climate Change", subtitle="Causes and consequences"),
            Slide(
                type="content",
                title="Key Facts",
                bullet_points=[
                    "Global temperatures have risen by about 1.1 degrees",
                    "Sea levels are rising",
                    "Extreme weather is more frequent",
                ],
                visual_elements=[VisualElement(type="chart", description="Temperature trend")],
            ),
        ],
    )


@pytest.fixture
def model_payload() -> Dict:
    return {
        "title": "ClimateChange",
        "slides": [
            {"type": "title", "title": "ClimateChange", "subtitle": "A  short   overview"},
            {
                "type": "content",
                "title": "Main facts",
                "bulletPoints": ["Temperatures rise ,fast", "Ice melts"],
                "visualElements": [
                    {"type": "image", "description": "Melting glacier"},
                    {"type": "chart", "description": "CO2 levels"},
                ],
            },
        ],
    }


@pytest.fixture
def model_response(model_payload) -> str:
    return "Here is your presentation:\n```json\n" + json.dumps(model_payload) + "\n```"
