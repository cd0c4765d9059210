"""
Daum grammar checker backend.

The checker answers a form post with an HTML page in which every flagged
token is an element carrying data-error-* attributes.
"""
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from app.schemas.spellcheck import DaumSpellingIssue
from app.services.spellcheck_base import HttpSpellCheckService, SpellCheckError
from app.utils.logger import get_logger

logger = get_logger("services.spellcheck_daum")

# Attribute present on every element that marks an error
DAUM_ERROR_MARKER = "data-error-input"


def parse_daum_response(page: str) -> List[DaumSpellingIssue]:
    """
    Extract spelling issues from a Daum grammar checker result page.

    Args:
        page: HTML returned by the checker

    Returns:
        Issues in page order (empty if the text has no errors)

    Raises:
        SpellCheckError: If the page is empty or not HTML
    """
    if not page or "<" not in page:
        raise SpellCheckError("DAUM returned an empty or non-HTML response", provider="daum")

    soup = BeautifulSoup(page, "html.parser")

    issues = []
    for element in soup.find_all(attrs={DAUM_ERROR_MARKER: True}):
        token = element.get(DAUM_ERROR_MARKER, "")
        if not token:
            continue

        output = element.get("data-error-output", "")
        issues.append(DaumSpellingIssue(
            token=token,
            suggestions=[output] if output else [],
            type=element.get("data-error-type", ""),
            context=element.get("data-error-context", ""),
        ))

    return issues


class DaumSpellCheckService(HttpSpellCheckService):
    """Spell-check backend using the Daum dictionary grammar checker."""

    PROVIDER_NAME = "daum"
    DISPLAY_NAME = "DAUM"

    def __init__(self, url: str, timeout: float = 12.0, user_agent: Optional[str] = None):
        super().__init__(url=url, timeout=timeout, user_agent=user_agent)
        logger.debug("DaumSpellCheckService initialized", url=url, timeout=timeout)

    def _build_form(self, text: str) -> Dict[str, str]:
        return {"sentence": text}

    def _parse_response(self, page: str) -> List[DaumSpellingIssue]:
        return parse_daum_response(page)
