"""
API routes for Korean spell-checking.
"""
from typing import List

from fastapi import APIRouter, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.schemas.spellcheck import (
    ApplyRequest,
    ApplyResponse,
    CorrectionSpanSchema,
    ErrorResponse,
    PreviewRequest,
    PreviewResponse,
    ProviderInfo,
    ProvidersResponse,
    SpellCheckProvider,
    SpellCheckRequest,
    SpellCheckResponse,
)
from app.services.provider_registry import (
    SPELLCHECK_PROVIDERS,
    get_effective_spellcheck_provider,
    is_spellcheck_provider_configured,
)
from app.services.spellcheck import run_spellcheck
from app.utils.correction import (
    find_correction_spans,
    render_corrected_text,
    replace_all,
    top_suggestion,
)
from app.utils.logger import get_logger

logger = get_logger("routes.spellcheck")

router = APIRouter(prefix="/api/spellcheck", tags=["Spell-check"])

GENERIC_ERROR_MESSAGE = "서버 처리 중 오류가 발생했습니다."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request body"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


def describe_validation_errors(errors: List[dict]) -> str:
    """
    Turn pydantic validation errors into a single user-facing message.

    Args:
        errors: Output of RequestValidationError.errors()

    Returns:
        Message naming the first offending field
    """
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if error.get("type") == "json_invalid":
            return "요청 본문이 올바른 JSON이 아닙니다."
        if "text" in loc:
            return "유효한 'text'가 필요합니다."
        if "provider" in loc:
            options = ", ".join(p.value for p in SpellCheckProvider)
            return f"'provider'는 {options} 중 하나여야 합니다."
        if "token" in loc:
            return "유효한 'token'이 필요합니다."

    if errors:
        first = errors[0]
        field_name = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        return f"잘못된 요청입니다: {field_name} {first.get('msg', '')}".strip()
    return "잘못된 요청입니다."


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return request validation failures as 400 {ok: false, error}."""
    message = describe_validation_errors(exc.errors())
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        error=message,
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


@router.post(
    "",
    response_model=SpellCheckResponse,
    summary="Check Korean text",
    responses=ERROR_RESPONSES,
)
async def check_spelling(payload: SpellCheckRequest):
    """
    Check text with the selected provider(s).

    The text is split into chunks that are checked concurrently. Chunks that
    fail are reported in `warnings`; the request still succeeds with the
    issues from the remaining chunks.

    Returns:
        SpellCheckResponse with merged issues and warnings
    """
    try:
        selection = get_effective_spellcheck_provider(payload.provider)
        outcome = await run_spellcheck(payload.text, selection)

    except Exception as e:
        logger.error(
            "Spell-check request failed",
            provider=payload.provider.value if payload.provider else None,
            error=str(e),
            exc_info=True
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or GENERIC_ERROR_MESSAGE)

    if outcome.warnings:
        logger.warning(
            "Spell-check completed with warnings",
            provider=selection.value,
            warning_count=len(outcome.warnings),
        )

    return SpellCheckResponse(
        provider=selection,
        text=payload.text,
        results=outcome.issues,
        warnings=outcome.warnings,
    )


@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Build corrected preview",
    responses=ERROR_RESPONSES,
)
async def preview_corrections(payload: PreviewRequest) -> PreviewResponse:
    """
    Apply each issue's top suggestion to every occurrence of its token.

    Occurrences overlapping a correction from an earlier issue are left alone.
    """
    spans = find_correction_spans(
        payload.text,
        [(issue.token, top_suggestion(issue.suggestions)) for issue in payload.results]
    )

    return PreviewResponse(
        text=payload.text,
        corrected_text=render_corrected_text(payload.text, spans),
        corrections=[
            CorrectionSpanSchema(
                start=span.start,
                end=span.end,
                token=span.token,
                suggestion=span.suggestion,
                issue_index=span.issue_index,
            )
            for span in spans
        ],
    )


@router.post(
    "/apply",
    response_model=ApplyResponse,
    summary="Replace every occurrence of a token",
    responses=ERROR_RESPONSES,
)
async def apply_replacement(payload: ApplyRequest) -> ApplyResponse:
    """Replace every occurrence of `token` in `text` with `replacement`."""
    updated, count = replace_all(payload.text, payload.token, payload.replacement)
    logger.debug("Replacement applied", replacements=count)
    return ApplyResponse(text=updated, replacements=count)


@router.get(
    "/providers",
    response_model=ProvidersResponse,
    summary="List spell-check providers",
    responses={500: ERROR_RESPONSES[500]},
)
async def list_providers():
    """
    List backends, the default selection and chunking parameters.

    **No authentication required** - this endpoint is public.
    """
    try:
        default_provider = get_effective_spellcheck_provider(None)
    except ValueError as e:
        logger.error("Default spell-check provider unavailable", error=str(e))
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or GENERIC_ERROR_MESSAGE)

    return ProvidersResponse(
        default_provider=default_provider,
        providers=[
            ProviderInfo(
                id=name,
                description=config["description"],
                configured=is_spellcheck_provider_configured(name),
            )
            for name, config in SPELLCHECK_PROVIDERS.items()
        ],
        selections=list(SpellCheckProvider),
        chunk_max_chars=settings.SPELLCHECK_CHUNK_MAX_CHARS,
        timeout_seconds=settings.SPELLCHECK_TIMEOUT_SECONDS,
    )
