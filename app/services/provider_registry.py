"""
Provider Registry for spell-check backends.

Provides centralized validation and factory functions for per-request provider selection.
"""
from typing import Optional, Dict, Any, List

from app.config import settings
from app.schemas.spellcheck import SpellCheckProvider
from app.services.spellcheck_base import SpellCheckService
from app.services.spellcheck_daum import DaumSpellCheckService
from app.services.spellcheck_pnu import PnuSpellCheckService
from app.utils.logger import get_logger


logger = get_logger("services.provider_registry")


# Backend definitions with required settings
SPELLCHECK_PROVIDERS: Dict[str, Dict[str, Any]] = {
    "daum": {
        "required_settings": ["DAUM_SPELLCHECK_URL"],
        "description": "Daum grammar checker"
    },
    "pnu": {
        "required_settings": ["PNU_SPELLCHECK_URL"],
        "description": "PNU (Pusan National University) Korean speller"
    },
}


def _check_settings_configured(required_settings: List[str]) -> bool:
    """
    Check if all required settings have non-empty values.

    Args:
        required_settings: List of setting names to check

    Returns:
        True if all settings are configured, False otherwise
    """
    for setting_name in required_settings:
        value = getattr(settings, setting_name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            return False
    return True


def is_spellcheck_provider_configured(provider: str) -> bool:
    """
    Check if a spell-check backend has all required settings configured.

    Args:
        provider: Backend name (e.g., "daum", "pnu")

    Returns:
        True if provider is known and configured, False otherwise
    """
    provider = provider.lower()

    if provider not in SPELLCHECK_PROVIDERS:
        return False

    return _check_settings_configured(SPELLCHECK_PROVIDERS[provider]["required_settings"])


def get_missing_settings_for_spellcheck_provider(provider: str) -> List[str]:
    """
    Get list of missing settings for a spell-check backend.

    Args:
        provider: Backend name

    Returns:
        List of missing setting names (empty if all configured or provider unknown)
    """
    provider = provider.lower()

    if provider not in SPELLCHECK_PROVIDERS:
        return []

    return [
        setting_name
        for setting_name in SPELLCHECK_PROVIDERS[provider]["required_settings"]
        if not _check_settings_configured([setting_name])
    ]


def get_available_spellcheck_providers() -> List[str]:
    """
    Get list of configured spell-check backends.

    Returns:
        Backend names whose required settings are present
    """
    return [
        provider for provider in SPELLCHECK_PROVIDERS
        if is_spellcheck_provider_configured(provider)
    ]


def resolve_backends(selection: SpellCheckProvider) -> List[str]:
    """
    Map a provider selection to the backend names it covers.

    Args:
        selection: Requested provider mode

    Returns:
        Backend names in result order

    Raises:
        ValueError: If the selection is not handled
    """
    if selection is SpellCheckProvider.DAUM:
        return ["daum"]
    if selection is SpellCheckProvider.PNU:
        return ["pnu"]
    if selection is SpellCheckProvider.ALL:
        return ["daum", "pnu"]
    raise ValueError(f"Unhandled provider selection: {selection}")


def get_spellcheck_service_for_provider(provider: str) -> SpellCheckService:
    """
    Create a spell-check service for the given backend.

    Args:
        provider: Backend name ("daum" or "pnu")

    Returns:
        SpellCheckService instance

    Raises:
        ValueError: If provider is unknown or not configured
    """
    provider = provider.lower()

    if provider not in SPELLCHECK_PROVIDERS:
        raise ValueError(
            f"Unknown spell-check provider: '{provider}'. "
            f"Valid providers: {list(SPELLCHECK_PROVIDERS.keys())}"
        )

    if not is_spellcheck_provider_configured(provider):
        missing = get_missing_settings_for_spellcheck_provider(provider)
        raise ValueError(
            f"Spell-check provider '{provider}' is not configured. "
            f"Missing settings: {missing}"
        )

    if provider == "daum":
        return DaumSpellCheckService(
            url=settings.DAUM_SPELLCHECK_URL,
            timeout=settings.SPELLCHECK_TIMEOUT_SECONDS,
            user_agent=settings.SPELLCHECK_USER_AGENT,
        )
    if provider == "pnu":
        return PnuSpellCheckService(
            url=settings.PNU_SPELLCHECK_URL,
            timeout=settings.SPELLCHECK_TIMEOUT_SECONDS,
            user_agent=settings.SPELLCHECK_USER_AGENT,
        )

    raise ValueError(f"Unsupported provider: {provider}")


def get_effective_spellcheck_provider(requested_provider: Optional[SpellCheckProvider]) -> SpellCheckProvider:
    """
    Determine which provider selection to use for a request.

    Args:
        requested_provider: Selection from the request, or None for the default

    Returns:
        Provider selection whose backends are all configured

    Raises:
        ValueError: If the default is not a valid selection, or a needed backend is not configured
    """
    if requested_provider is None:
        try:
            selection = SpellCheckProvider(settings.DEFAULT_SPELLCHECK_PROVIDER.lower())
        except ValueError as e:
            raise ValueError(
                f"Default spell-check provider '{settings.DEFAULT_SPELLCHECK_PROVIDER}' is invalid. "
                f"Valid providers: {[p.value for p in SpellCheckProvider]}"
            ) from e
    else:
        selection = requested_provider

    for backend in resolve_backends(selection):
        if not is_spellcheck_provider_configured(backend):
            missing = get_missing_settings_for_spellcheck_provider(backend)
            raise ValueError(
                f"Spell-check provider '{backend}' is not configured. "
                f"Missing settings: {missing}"
            )

    return selection
