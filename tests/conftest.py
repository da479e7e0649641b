"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import pytest

from payloads import make_bill, make_document

from us_legal_search.config import LegalSearchSettings

# ============================================================
# Settings Fixtures
# ============================================================


@pytest.fixture
def settings():
    """Settings with every credential configured."""
    return LegalSearchSettings(
        congress_api_key="congress-test-key",
        regulations_gov_api_key="regs-test-key",
        court_listener_api_key="cl-test-token",
    )


@pytest.fixture
def anonymous_settings():
    """Settings with no credentials at all."""
    return LegalSearchSettings()


# ============================================================
# Mock Upstream Payloads
# ============================================================


@pytest.fixture
def mock_bill_data():
    """A fully populated Congress.gov bill."""
    return make_bill(
        815,
        "Clean Water Infrastructure Act",
        shortTitle="Clean Water Act",
        introducedDate="2023-02-02",
        summary={"text": "Funds drinking water infrastructure."},
        latestAction={"actionDate": "2023-02-10", "text": "Referred to committee."},
        subjects=[{"name": "Water quality"}, {"name": "Infrastructure"}],
        sponsors=[
            {
                "bioguideId": "S000001",
                "firstName": "Jane",
                "lastName": "Smith",
                "party": "D",
                "state": "CA",
            }
        ],
    )


@pytest.fixture
def mock_document_data():
    """A Federal Register document with agencies and sections."""
    return make_document(
        "2024-01234",
        "Clean Water Act Section 401 Certification Rule",
        abstract="EPA updates water quality certification procedures.",
        effective_on="2024-04-01",
        agencies=[{"name": "Environmental Protection Agency", "id": 145}],
        pdf_url="https://www.govinfo.gov/content/pkg/FR-2024-03-01/pdf/2024-01234.pdf",
        sections=[{"title": "Background", "content": "Section 401 of the Clean Water Act..."}],
    )


@pytest.fixture
def mock_opinion_snake():
    """A snake_case CourtListener record carrying its own case name."""
    return {
        "id": 42,
        "case_name": "Doe v. Roe",
        "absolute_url": "/opinion/42/doe-v-roe/",
        "court_id": "ca9",
        "date_filed": "2020-05-01",
        "citation_count": 0,
        "precedential_status": "Published",
        "judges": "Smith, Jones",
    }
