# table_agent/provider.py
from enum import Enum
from typing import Optional

import groq

from table_agent.errors import FailureKind, ProviderFailure

PLACEHOLDER_KEYS = {"your_groq_api_key_here", "changeme"}

BILLING_URL = "https://console.groq.com/settings/billing"

# lowercase fragments that mark a provider error as usage-limit related
QUOTA_MARKERS = ("quota", "billing", "rate limit", "rate_limit", "too many requests")


class ProviderStatus(str, Enum):
    NOT_CONFIGURED = "not_configured"
    CONFIGURED = "configured"
    QUOTA_EXCEEDED = "quota_exceeded"


def has_credentials(api_key: Optional[str]) -> bool:
    return bool(api_key and api_key.strip() and api_key.strip() not in PLACEHOLDER_KEYS)


def initial_status(api_key: Optional[str]) -> ProviderStatus:
    return ProviderStatus.CONFIGURED if has_credentials(api_key) else ProviderStatus.NOT_CONFIGURED


def next_status(status: ProviderStatus, failure: Optional[ProviderFailure]) -> ProviderStatus:
    """Only a quota failure moves the state, and only out of CONFIGURED."""
    if status is ProviderStatus.CONFIGURED and failure is not None and failure.is_quota:
        return ProviderStatus.QUOTA_EXCEEDED
    return status


def classify_provider_error(error: BaseException) -> ProviderFailure:
    """
    Map a transport error from the completion client onto the failure taxonomy.
    HTTP 429, the SDK's RateLimitError, or quota/billing wording -> QUOTA_EXCEEDED;
    anything else -> UNAVAILABLE.
    """
    if isinstance(error, ProviderFailure):
        return error
    if isinstance(error, groq.RateLimitError):
        return ProviderFailure(FailureKind.QUOTA_EXCEEDED, str(error))

    status_code = getattr(error, "status_code", None)
    if status_code is None:
        response = getattr(error, "response", None)
        status_code = getattr(response, "status_code", None)
    if status_code == 429:
        return ProviderFailure(FailureKind.QUOTA_EXCEEDED, str(error))

    text = str(error).lower()
    body = getattr(error, "body", None)
    if body:
        text = f"{text} {body}".lower()
    if any(marker in text for marker in QUOTA_MARKERS):
        return ProviderFailure(FailureKind.QUOTA_EXCEEDED, str(error))
    return ProviderFailure(FailureKind.UNAVAILABLE, str(error) or type(error).__name__)


def status_banner(status: ProviderStatus) -> str:
    if status is ProviderStatus.CONFIGURED:
        return "✅ Groq API configured - Enhanced AI available!"
    if status is ProviderStatus.QUOTA_EXCEEDED:
        return f"⚠️ Groq API quota exceeded - Check your billing at {BILLING_URL}"
    return "⚠️ Groq API not configured - Add GROQ_API_KEY to your .env file for enhanced AI."


def status_hint(status: ProviderStatus) -> str:
    if status is ProviderStatus.QUOTA_EXCEEDED:
        return " (Groq quota exceeded - check billing)"
    if status is ProviderStatus.NOT_CONFIGURED:
        return " (Configure GROQ_API_KEY for better natural language understanding)"
    return ""
