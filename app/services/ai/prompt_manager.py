"""
Prompt templates for presentation content generation.
"""
from typing import List

import structlog
from pydantic import BaseModel

from app.domain.schemas.presentation import PresentationRequest

logger = structlog.get_logger(__name__)


class PromptTemplate(BaseModel):
    """Prompt template structure."""
    name: str
    template: str
    variables: List[str]
    version: int = 1

    def format(self, **kwargs) -> str:
        """Format template with provided variables."""
        return self.template.format(**kwargs)


SYSTEM_PROMPT = (
    "You are a professional presentation designer. Create the structure and "
    "content of a presentation, writing text with correct spacing between words."
)

PRESENTATION_CONTENT_TEMPLATE = PromptTemplate(
    name="presentation_content",
    variables=["theme", "slide_count", "audience", "additional_info"],
    template="""Create the structure and content for a presentation on the topic "{theme}".
Number of slides: {slide_count}
Audience: {audience}
Additional information: {additional_info}

For each slide provide:
1. A title
2. The main text or key points (as a bulleted list)
3. A description of the visual elements it needs (charts, diagrams, images)

The presentation must include:
- A title slide
- An introduction/overview
- The main content, split into logical sections
- A conclusion/summary

Respond with JSON only, using this structure:
{{
  "title": "Presentation title",
  "slides": [
    {{"type": "title", "title": "...", "subtitle": "..."}},
    {{
      "type": "content",
      "title": "...",
      "bulletPoints": ["...", "..."],
      "visualElements": [{{"type": "image", "description": "..."}}]
    }}
  ]
}}""",
)


class PromptManager:
    """Builds the prompts sent to the completion model."""

    def __init__(
        self,
        content_template: PromptTemplate = PRESENTATION_CONTENT_TEMPLATE,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.content_template = content_template
        self.system_prompt = system_prompt

    def build_content_prompt(self, request: PresentationRequest) -> str:
        prompt = self.content_template.format(
            theme=request.theme,
            slide_count=request.slide_count,
            audience=request.audience,
            additional_info=request.additional_info,
        )
        logger.debug(
            "prompt_built",
            template=self.content_template.name,
            version=self.content_template.version,
            length=len(prompt),
        )
        return prompt
