"""
Spell-check aggregation: fan a text out to one or both backends chunk by chunk
and merge whatever comes back.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

from app.config import settings
from app.schemas.spellcheck import SpellCheckProvider, SpellingIssue
from app.services.provider_registry import (
    get_spellcheck_service_for_provider,
    resolve_backends,
)
from app.services.spellcheck_base import SpellCheckError, SpellCheckService
from app.utils.logger import get_logger
from app.utils.text_chunking import split_into_chunks

logger = get_logger("services.spellcheck")


@dataclass
class ProviderCheckResult:
    """Merged outcome of checking every chunk with one backend."""
    provider: str
    issues: List[SpellingIssue] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    total_chunks: int = 0
    failed_chunks: List[int] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return self.total_chunks > 0 and len(self.failed_chunks) == self.total_chunks


@dataclass
class SpellCheckOutcome:
    """Merged outcome across all selected backends."""
    issues: List[SpellingIssue] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def format_chunk_warning(display_name: str, index: int, total: int, error: BaseException) -> str:
    """Build the user-facing warning for a failed chunk."""
    reason = str(error) or type(error).__name__
    return f"{display_name} 청크 {index + 1}/{total} 처리 실패: {reason}"


async def check_chunks(service: SpellCheckService, chunks: List[str]) -> ProviderCheckResult:
    """
    Check all chunks with one backend concurrently.

    Every call is awaited to completion; a failed chunk adds one warning and
    does not affect the others. Issues are concatenated in chunk order.

    Args:
        service: Backend to call
        chunks: Text chunks to check

    Returns:
        ProviderCheckResult with issues and per-chunk warnings
    """
    result = ProviderCheckResult(
        provider=service.get_provider_name(),
        total_chunks=len(chunks),
    )

    outcomes = await asyncio.gather(
        *(service.check_text(chunk) for chunk in chunks),
        return_exceptions=True
    )

    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, Exception):
            logger.warning(
                "Chunk check failed",
                provider=result.provider,
                chunk_index=index,
                chunk_count=len(chunks),
                error=str(outcome),
            )
            result.failed_chunks.append(index)
            result.warnings.append(
                format_chunk_warning(service.get_display_name(), index, len(chunks), outcome)
            )
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            result.issues.extend(outcome)

    logger.info(
        "Provider check completed",
        provider=result.provider,
        chunk_count=len(chunks),
        failed_chunks=len(result.failed_chunks),
        issue_count=len(result.issues),
    )

    return result


async def run_spellcheck(
    text: str,
    provider: SpellCheckProvider,
    max_chars: Optional[int] = None
) -> SpellCheckOutcome:
    """
    Check text with the selected provider(s).

    Args:
        text: Text to check
        provider: Provider selection (daum, pnu or all)
        max_chars: Chunk budget (default from config)

    Returns:
        SpellCheckOutcome with issues and warnings, ordered by backend

    Raises:
        SpellCheckError: If every backend call failed
        ValueError: If a selected backend is not configured
    """
    chunks = split_into_chunks(text, max_chars or settings.SPELLCHECK_CHUNK_MAX_CHARS)
    services = [get_spellcheck_service_for_provider(name) for name in resolve_backends(provider)]

    logger.info(
        "Spell-check started",
        provider=provider.value,
        backends=",".join(s.get_provider_name() for s in services),
        chunk_count=len(chunks),
        chars=len(text),
    )

    results = await asyncio.gather(*(check_chunks(service, chunks) for service in services))

    if all(r.all_failed for r in results):
        warnings = [w for r in results for w in r.warnings]
        logger.error(
            "All spell-check requests failed",
            provider=provider.value,
            chunk_count=len(chunks),
        )
        raise SpellCheckError(
            "모든 맞춤법 검사 요청이 실패했습니다: " + "; ".join(warnings),
            provider=provider.value
        )

    outcome = SpellCheckOutcome()
    for r in results:
        outcome.issues.extend(r.issues)
        outcome.warnings.extend(r.warnings)

    return outcome
