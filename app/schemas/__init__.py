"""
Pydantic schemas for API request/response models.
"""
from app.schemas.spellcheck import (
    SpellCheckProvider,
    DaumSpellingIssue,
    PnuSpellingIssue,
    SpellingIssue,
    SpellCheckRequest,
    SpellCheckResponse,
    ErrorResponse,
)

__all__ = [
    "SpellCheckProvider",
    "DaumSpellingIssue",
    "PnuSpellingIssue",
    "SpellingIssue",
    "SpellCheckRequest",
    "SpellCheckResponse",
    "ErrorResponse",
]
