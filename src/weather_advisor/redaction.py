"""Helpers for keeping API keys out of logs and error messages."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

REDACTED = "[REDACTED]"

# Literal secrets shorter than this are not redacted.
MIN_SECRET_LENGTH = 4

_SENSITIVE_HEADER_RE = re.compile(r"(authorization|api[_-]?key|token|secret)", re.IGNORECASE)
_BEARER_RE = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*")
_KEY_VALUE_RE = re.compile(
    r"""(?ix)
    \b
    (
      authorization|
      x-api-key|
      api[_-]?key|
      token|
      secret
    )
    (["']?\s*[:=]\s*["']?)
    ([^\s,;"']+)
    """
)


def sanitize_text(text: str, secrets: Iterable[str | None] = ()) -> str:
    """Redact bearer tokens, ``key=value`` credentials and any literal ``secrets``."""
    sanitized = text
    for secret in secrets:
        if secret and len(secret) >= MIN_SECRET_LENGTH:
            sanitized = sanitized.replace(secret, REDACTED)
    sanitized = _BEARER_RE.sub(rf"\1 {REDACTED}", sanitized)
    return _KEY_VALUE_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", sanitized)


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of outbound request headers with credential values masked."""
    return {
        key: REDACTED if _SENSITIVE_HEADER_RE.search(key) else value
        for key, value in headers.items()
    }
