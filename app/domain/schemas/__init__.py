"""
Domain schemas for DeckGen application.
"""

from .presentation import *

__all__ = [
    "OutputFormat",
    "SlideType",
    "VisualElement",
    "Slide",
    "PresentationData",
    "PresentationRequest",
    "GenerationResult",
    "apply_defaults",
]
