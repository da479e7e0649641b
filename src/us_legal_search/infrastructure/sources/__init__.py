"""
Source clients for US legal data APIs.

Each client normalizes one upstream into canonical records and never raises
on upstream failure: a failed call logs a diagnostic and yields an empty
result.

- CongressClient: bills, votes, committees (Congress.gov)
- FederalRegisterClient: rules, proposed rules, notices
- USCodeClient: US Code sections
- RegulationsGovClient: public comments
- CourtListenerClient: court opinions
"""

from .base_client import BaseAPIClient, SourceAdapter
from .congress import CongressClient
from .court_listener import CourtListenerClient
from .federal_register import FederalRegisterClient
from .regulations_gov import RegulationsGovClient
from .us_code import USCodeClient

__all__ = [
    "BaseAPIClient",
    "CongressClient",
    "CourtListenerClient",
    "FederalRegisterClient",
    "RegulationsGovClient",
    "SourceAdapter",
    "USCodeClient",
]
