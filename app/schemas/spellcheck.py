"""
Pydantic schemas for spell-check functionality.
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class SpellCheckProvider(str, Enum):
    """Provider selection for a spell-check request."""
    DAUM = "daum"
    PNU = "pnu"
    ALL = "all"


class DaumSpellingIssue(BaseModel):
    """A spelling issue reported by the Daum grammar checker."""

    source: Literal["daum"] = "daum"
    token: str = Field(description="Flagged substring as it appears in the text")
    suggestions: List[str] = Field(description="Suggested corrections ordered by relevance")
    type: str = Field(default="", description="Daum error-type label (e.g. 'space', 'spell')")
    context: str = Field(default="", description="Text surrounding the flagged token")


class PnuSpellingIssue(BaseModel):
    """A spelling issue reported by the PNU speller."""

    source: Literal["pnu"] = "pnu"
    token: str = Field(description="Flagged substring as it appears in the text")
    suggestions: List[str] = Field(description="Suggested corrections ordered by relevance")
    info: str = Field(default="", description="Plain-text explanation of the error")


SpellingIssue = Annotated[
    Union[DaumSpellingIssue, PnuSpellingIssue],
    Field(discriminator="source"),
]


class SpellCheckRequest(BaseModel):
    """Request body for the spell-check endpoint."""

    text: str = Field(description="Text to check")
    provider: Optional[SpellCheckProvider] = Field(
        default=None,
        description="Backend to use: daum, pnu or all (defaults to the configured provider)"
    )

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must not be blank")
        return v


class SpellCheckResponse(BaseModel):
    """Successful spell-check response."""

    ok: Literal[True] = True
    provider: SpellCheckProvider
    text: str
    results: List[SpellingIssue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "ok": True,
                "provider": "daum",
                "text": "아버지가방에들어가신다.",
                "results": [
                    {
                        "source": "daum",
                        "token": "아버지가방에들어가신다",
                        "suggestions": ["아버지가 방에 들어가신다"],
                        "type": "space",
                        "context": "아버지가방에들어가신다."
                    }
                ],
                "warnings": []
            }
        }


class ErrorResponse(BaseModel):
    """Error response shared by all spell-check endpoints."""

    ok: Literal[False] = False
    error: str


class CorrectionSpanSchema(BaseModel):
    """A located replacement applied in the corrected preview."""

    start: int
    end: int
    token: str
    suggestion: str
    issue_index: int = Field(description="Index of the issue in the submitted results")


class PreviewRequest(BaseModel):
    """Request body for building a corrected preview."""

    text: str
    results: List[SpellingIssue] = Field(default_factory=list)


class PreviewResponse(BaseModel):
    """Text with each issue's top suggestion applied."""

    ok: Literal[True] = True
    text: str
    corrected_text: str
    corrections: List[CorrectionSpanSchema]


class ApplyRequest(BaseModel):
    """Request body for replacing every occurrence of a token."""

    text: str
    token: str = Field(min_length=1)
    replacement: str


class ApplyResponse(BaseModel):
    """Result of a replace-all operation."""

    ok: Literal[True] = True
    text: str
    replacements: int


class ProviderInfo(BaseModel):
    """A spell-check backend and whether it is configured."""

    id: str
    description: str
    configured: bool


class ProvidersResponse(BaseModel):
    """Available spell-check providers and chunking parameters."""

    default_provider: SpellCheckProvider
    providers: List[ProviderInfo]
    selections: List[SpellCheckProvider]
    chunk_max_chars: int
    timeout_seconds: float


class HealthResponse(BaseModel):
    """Schema for health check endpoint response."""
    status: str
    providers: List[str]
    timestamp: datetime
