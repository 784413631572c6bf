"""
Schemas for presentation requests and generated presentation content.
"""
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

DEFAULT_SLIDE_COUNT = 10
DEFAULT_AUDIENCE = "General audience"
DEFAULT_STYLE = "default"


class OutputFormat(str, Enum):
    """Rendered artifact formats."""
    DOCUMENT = "document"
    DECK = "deck"

    @property
    def extension(self) -> str:
        return "pdf" if self is OutputFormat.DOCUMENT else "pptx"

    @property
    def media_type(self) -> str:
        if self is OutputFormat.DOCUMENT:
            return "application/pdf"
        return "application/vnd.openxmlformats-officedocument.presentationml.presentation"

    @classmethod
    def parse(cls, value: Any) -> "OutputFormat":
        """Accept either the format name or its file extension."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in ("document", "pdf"):
            return cls.DOCUMENT
        # Everything else falls back to an editable deck
        return cls.DECK


class SlideType(str, Enum):
    """Slide kinds the renderers know how to lay out."""
    TITLE = "title"
    CONTENT = "content"


class VisualElement(BaseModel):
    """Visual element suggested by the model for a slide."""
    model_config = ConfigDict(extra="ignore")

    type: str = "image"
    description: str = ""
    path: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        return str(v or "image").strip().lower()

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        return "" if v is None else str(v)


def _coerce_visual_element(item: Any) -> Optional[Mapping[str, Any]]:
    """Bare strings become image descriptions; anything else that is not a mapping is dropped."""
    if isinstance(item, VisualElement):
        return item.model_dump()
    if isinstance(item, str):
        return {"type": "image", "description": item}
    if isinstance(item, Mapping):
        return item
    return None


class Slide(BaseModel):
    """A single slide of generated content."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = SlideType.CONTENT.value
    title: str = ""
    subtitle: Optional[str] = None
    bullet_points: Optional[List[str]] = Field(default=None, alias="bulletPoints")
    visual_elements: Optional[List[VisualElement]] = Field(default=None, alias="visualElements")

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        if isinstance(v, Enum):
            return v.value
        return str(v or SlideType.CONTENT.value).strip().lower()

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("bullet_points", mode="before")
    @classmethod
    def coerce_bullets(cls, v: Any) -> Optional[List[str]]:
        if v is None:
            return None
        if isinstance(v, str):
            return [v]
        return [str(item) for item in v if item is not None]

    @field_validator("visual_elements", mode="before")
    @classmethod
    def coerce_visual_elements(cls, v: Any) -> Optional[List[Mapping[str, Any]]]:
        # Elements are hints only, so malformed ones must not reject the slide
        if v is None:
            return None
        if isinstance(v, (str, Mapping)):
            v = [v]
        elif not isinstance(v, (list, tuple)):
            return None
        return [element for element in map(_coerce_visual_element, v) if element is not None]

    @property
    def is_title(self) -> bool:
        return self.type == SlideType.TITLE


class PresentationData(BaseModel):
    """Structured presentation content produced by the generator."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    slides: List[Slide] = Field(default_factory=list)

    def to_cache_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PresentationRequest(BaseModel):
    """
    Fully-populated, immutable generation request.

    Build instances with ``apply_defaults`` so partially supplied input is
    merged with defaults before any service sees it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    theme: str = Field(..., min_length=1)
    slide_count: int = Field(default=DEFAULT_SLIDE_COUNT, ge=1, le=100, alias="slideCount")
    audience: str = DEFAULT_AUDIENCE
    additional_info: str = Field(default="", alias="additionalInfo")
    style: str = DEFAULT_STYLE
    format: OutputFormat = OutputFormat.DECK

    @field_validator("format", mode="before")
    @classmethod
    def parse_format(cls, v: Any) -> OutputFormat:
        return OutputFormat.parse(v)


_FIELD_ALIASES = {
    "theme": ("theme",),
    "slide_count": ("slide_count", "slideCount"),
    "audience": ("audience",),
    "additional_info": ("additional_info", "additionalInfo"),
    "style": ("style",),
    "format": ("format",),
}

_DEFAULTS = {
    "slide_count": DEFAULT_SLIDE_COUNT,
    "audience": DEFAULT_AUDIENCE,
    "additional_info": "",
    "style": DEFAULT_STYLE,
    "format": OutputFormat.DECK,
}


def apply_defaults(raw: Mapping[str, Any]) -> PresentationRequest:
    """
    Merge user-supplied fields with defaults into a PresentationRequest.

    Missing, ``None`` and empty values take the default, as does a slide
    count of zero. The theme is the only required field.

    Raises:
        ValidationError: If the theme is missing or a field has an invalid value
    """
    values = {}
    for field_name, keys in _FIELD_ALIASES.items():
        value = next((raw[key] for key in keys if key in raw), None)
        if isinstance(value, str):
            value = value.strip()
        if value in (None, "") or (field_name == "slide_count" and value in (0, "0")):
            if field_name in _DEFAULTS:
                values[field_name] = _DEFAULTS[field_name]
            continue
        values[field_name] = value

    if not values.get("theme"):
        raise ValidationError("Presentation theme is required", field="theme")

    try:
        return PresentationRequest(**values)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ()))
        raise ValidationError(error.get("msg", str(e)), field=field or None) from e


class GenerationResult(BaseModel):
    """Outcome of a generate-and-render request."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Presentation created successfully"
    filename: str = Field(exclude=True)
    download_url: str = Field(alias="downloadUrl")
    presentation_title: str = Field(alias="presentationTitle")
