"""Redaction of CDA form payloads for DEBUG logs.

CDA requests carry free-form ``param*`` values, some of which are
credentials.  Long values (inline query definitions, id lists) are truncated.
"""

from __future__ import annotations

from collections.abc import Mapping

_SENSITIVE_NAMES: frozenset[str] = frozenset({"password", "userid", "username", "token", "authorization"})


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    if lowered.startswith("param"):
        lowered = lowered[len("param") :]
    return lowered in _SENSITIVE_NAMES or lowered.endswith("password")


def redact_for_log(data: Mapping[str, str], *, max_string: int = 200) -> dict[str, str]:
    """Return a copy of *data* with credentials masked and long values cut."""
    redacted: dict[str, str] = {}
    for key, value in data.items():
        if _is_sensitive(key):
            redacted[key] = "<redacted>"
        elif len(value) > max_string:
            redacted[key] = f"{value[:max_string]}…<truncated>"
        else:
            redacted[key] = value
    return redacted
