"""
PNU (Pusan National University) speller backend.

The speller answers a form post with an HTML page that embeds its results
as a JavaScript literal: `data = [{"str": ..., "errInfo": [...]}];`.
"""
import html
import json
import re
from typing import Any, Dict, List, Optional

from app.schemas.spellcheck import PnuSpellingIssue
from app.services.spellcheck_base import HttpSpellCheckService, SpellCheckError
from app.utils.logger import get_logger

logger = get_logger("services.spellcheck_pnu")

# `data = [...];` at the end of a line; absent when the text has no errors
PNU_DATA_PATTERN = re.compile(r"\bdata\s*=\s*(\[.*?\]);\s*$", re.DOTALL | re.MULTILINE)

PNU_LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
PNU_TAG_PATTERN = re.compile(r"<[^<>]+>")


def _clean_help(help_html: str) -> str:
    """Convert the HTML help text to plain text."""
    text = PNU_LINE_BREAK_PATTERN.sub("\n", help_html or "")
    text = PNU_TAG_PATTERN.sub("", text)
    return html.unescape(text).strip()


def _parse_error(err: Dict[str, Any]) -> Optional[PnuSpellingIssue]:
    token = err.get("orgStr") or ""
    if not token:
        return None

    candidates = err.get("candWord") or ""
    return PnuSpellingIssue(
        token=token,
        suggestions=[c.strip() for c in candidates.split("|") if c.strip()],
        info=_clean_help(err.get("help", "")),
    )


def parse_pnu_response(page: str) -> List[PnuSpellingIssue]:
    """
    Extract spelling issues from a PNU speller result page.

    Args:
        page: HTML returned by the speller

    Returns:
        Issues in page order (empty if the page carries no data block)

    Raises:
        SpellCheckError: If the page is empty or its data block is not valid JSON
    """
    if not page or "<" not in page:
        raise SpellCheckError("PNU returned an empty or non-HTML response", provider="pnu")

    match = PNU_DATA_PATTERN.search(page)
    if match is None:
        return []

    try:
        entries = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise SpellCheckError(f"PNU result data is not valid JSON: {e}", provider="pnu") from e

    issues = []
    for entry in entries:
        for err in entry.get("errInfo") or []:
            issue = _parse_error(err)
            if issue is not None:
                issues.append(issue)

    return issues


class PnuSpellCheckService(HttpSpellCheckService):
    """Spell-check backend using the PNU Korean speller."""

    PROVIDER_NAME = "pnu"
    DISPLAY_NAME = "PNU"

    def __init__(self, url: str, timeout: float = 12.0, user_agent: Optional[str] = None):
        super().__init__(url=url, timeout=timeout, user_agent=user_agent)
        logger.debug("PnuSpellCheckService initialized", url=url, timeout=timeout)

    def _build_form(self, text: str) -> Dict[str, str]:
        return {"text1": text}

    def _parse_response(self, page: str) -> List[PnuSpellingIssue]:
        return parse_pnu_response(page)
