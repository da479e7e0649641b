"""
Process configuration for US Legal Search MCP.

Settings are read once at startup (``LegalSearchSettings.from_env()``) and
passed to every source client. Clients never read the environment directly,
so each one can be tested with injected credentials.

Environment variables:
    CONGRESS_API_KEY          Congress.gov API key (bills work without; votes/committees need it)
    REGULATIONS_GOV_API_KEY   Regulations.gov API key (public comments)
    COURT_LISTENER_API_KEY    CourtListener token (optional, higher rate limits)
    US_LEGAL_REQUEST_TIMEOUT  Timeout ceiling for every outbound request (seconds, default 20)
    US_LEGAL_US_CODE_TIMEOUT  Timeout for US Code searches (seconds, default 30)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

CONGRESS_API_BASE = "https://api.congress.gov/v3"
FEDERAL_REGISTER_API_BASE = "https://www.federalregister.gov/api/v1"
US_CODE_API_BASE = "https://uscode.house.gov/api"
REGULATIONS_GOV_API_BASE = "https://api.regulations.gov/v4"
COURT_LISTENER_API_BASE = "https://www.courtlistener.com/api/rest/v3"

DEFAULT_REQUEST_TIMEOUT = 20.0
DEFAULT_US_CODE_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "us-legal-search-mcp/1.0"

CredentialedSource = Literal["congress", "regulations_gov", "court_listener"]


@dataclass(frozen=True)
class LegalSearchSettings:
    """
    Read-only settings shared by all source clients.

    Every credential is optional: a client without its key still works,
    with reduced capability (fewer endpoints or lower rate limits).
    """

    congress_api_key: str | None = None
    regulations_gov_api_key: str | None = None
    court_listener_api_key: str | None = None

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    us_code_timeout: float = DEFAULT_US_CODE_TIMEOUT

    congress_base_url: str = CONGRESS_API_BASE
    federal_register_base_url: str = FEDERAL_REGISTER_API_BASE
    us_code_base_url: str = US_CODE_API_BASE
    regulations_gov_base_url: str = REGULATIONS_GOV_API_BASE
    court_listener_base_url: str = COURT_LISTENER_API_BASE

    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LegalSearchSettings:
        """Build settings from environment variables (blank values count as unset)."""
        env = os.environ if environ is None else environ

        return cls(
            congress_api_key=_clean(env.get("CONGRESS_API_KEY")),
            regulations_gov_api_key=_clean(env.get("REGULATIONS_GOV_API_KEY")),
            court_listener_api_key=_clean(env.get("COURT_LISTENER_API_KEY")),
            request_timeout=_parse_timeout(
                env.get("US_LEGAL_REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT, "US_LEGAL_REQUEST_TIMEOUT"
            ),
            us_code_timeout=_parse_timeout(
                env.get("US_LEGAL_US_CODE_TIMEOUT"), DEFAULT_US_CODE_TIMEOUT, "US_LEGAL_US_CODE_TIMEOUT"
            ),
        )

    def has_credential(self, source: CredentialedSource) -> bool:
        """Check whether the credential for a source is configured."""
        return bool(getattr(self, f"{source}_api_key"))

    def credential_summary(self) -> dict[str, bool]:
        """Credential presence per source, safe to log (never the key itself)."""
        return {
            "congress": self.has_credential("congress"),
            "regulations_gov": self.has_credential("regulations_gov"),
            "court_listener": self.has_credential("court_listener"),
        }


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_timeout(raw: str | None, default: float, name: str) -> float:
    raw = _clean(raw)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}s")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}s")
        return default
    return value
