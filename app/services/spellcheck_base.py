"""
Abstract base class for spell-check services.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx

from app.schemas.spellcheck import SpellingIssue
from app.utils.logger import get_logger

logger = get_logger("services.spellcheck_base")


class SpellCheckError(Exception):
    """
    Raised when a spell-check backend cannot produce a result.

    Attributes:
        message: Error message
        provider: Provider name the failure belongs to (if known)
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class SpellCheckService(ABC):
    """
    Abstract base class for remote spell-check backends.

    Implementations submit a single chunk of text to their backend and
    translate the response into SpellingIssue objects tagged with their
    provider name.
    """

    @abstractmethod
    async def check_text(self, text: str) -> List[SpellingIssue]:
        """
        Check one chunk of text for spelling issues.

        Args:
            text: Text to check (already within the backend's size limit)

        Returns:
            Issues in the order the backend reported them

        Raises:
            SpellCheckError: If the backend call fails or its response is unusable
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name used in the `source` field (e.g., 'daum')."""
        pass

    @abstractmethod
    def get_display_name(self) -> str:
        """Get the provider name shown in warnings (e.g., 'DAUM')."""
        pass


class HttpSpellCheckService(SpellCheckService):
    """
    Base for backends reached by posting a form to a web page.

    Subclasses provide the form payload and parse the returned HTML.
    """

    PROVIDER_NAME = ""
    DISPLAY_NAME = ""

    def __init__(self, url: str, timeout: float = 12.0, user_agent: Optional[str] = None):
        if not url:
            raise ValueError(f"url is required for {self.DISPLAY_NAME} provider")

        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    async def check_text(self, text: str) -> List[SpellingIssue]:
        html = await self._post_form(self._build_form(text))
        try:
            issues = self._parse_response(html)
        except SpellCheckError:
            raise
        except Exception as e:
            raise SpellCheckError(
                f"{self.DISPLAY_NAME} response could not be parsed: {e}",
                provider=self.PROVIDER_NAME
            ) from e

        logger.debug(
            "Chunk checked",
            provider=self.PROVIDER_NAME,
            chars=len(text),
            issue_count=len(issues),
        )
        return issues

    @abstractmethod
    def _build_form(self, text: str) -> Dict[str, str]:
        """Build the form fields submitted to the backend."""
        pass

    @abstractmethod
    def _parse_response(self, html: str) -> List[SpellingIssue]:
        """Translate the backend's HTML page into issues."""
        pass

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "text/html,application/xhtml+xml"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    async def _post_form(self, form: Dict[str, str]) -> str:
        """
        POST the form and return the response body.

        Raises:
            SpellCheckError: On timeout, transport error or non-2xx status
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.post(self.url, data=form, headers=self._get_headers())
                response.raise_for_status()
                return response.text

        except httpx.TimeoutException as e:
            raise SpellCheckError(
                f"{self.DISPLAY_NAME} request timed out after {self.timeout}s",
                provider=self.PROVIDER_NAME
            ) from e

        except httpx.HTTPStatusError as e:
            raise SpellCheckError(
                f"{self.DISPLAY_NAME} request failed: {e.response.status_code}",
                provider=self.PROVIDER_NAME
            ) from e

        except httpx.HTTPError as e:
            raise SpellCheckError(
                f"{self.DISPLAY_NAME} request failed: {e}",
                provider=self.PROVIDER_NAME
            ) from e

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME

    def get_display_name(self) -> str:
        return self.DISPLAY_NAME
