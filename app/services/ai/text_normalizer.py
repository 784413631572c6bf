"""
Cleanup of spacing artifacts in model-generated text.
"""
import re
from typing import Optional

# Latin and Cyrillic lowercase letter directly followed by an uppercase one
_GLUED_WORDS = re.compile(r'([a-zа-яё])([A-ZА-ЯЁ])')
_WHITESPACE_RUN = re.compile(r'\s+')
_SPACE_BEFORE_PUNCTUATION = re.compile(r'\s+([.,!?:;])')
_PUNCTUATION_WITHOUT_SPACE = re.compile(r'([.,!?:;])(\S)')


def normalize_text(text: Optional[str]) -> str:
    """
    Fix concatenated words and irregular spacing.

    The transformation is idempotent: normalizing already normalized text
    returns it unchanged.
    """
    if not text:
        return ""

    text = _GLUED_WORDS.sub(r'\1 \2', text)
    text = _WHITESPACE_RUN.sub(' ', text)
    text = _SPACE_BEFORE_PUNCTUATION.sub(r'\1', text)
    text = _PUNCTUATION_WITHOUT_SPACE.sub(r'\1 \2', text)
    return text.strip()
