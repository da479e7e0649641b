"""
Tests for canonical records: identity keys and serialization.

Serialization must only carry fields the upstream populated.
"""

from __future__ import annotations

from us_legal_search.domain.entities import (
    CourtOpinion,
    LatestAction,
    LegislativeBill,
    PublicComment,
    RegulatoryDocument,
    SearchAllResult,
    Sponsor,
    StatutoryProvision,
)
from us_legal_search.infrastructure.sources.congress import normalize_bill
from us_legal_search.infrastructure.sources.federal_register import normalize_document


class TestLegislativeBill:
    """Tests for bill records."""

    def test_minimal_to_dict_has_no_optional_keys(self):
        bill = LegislativeBill(congress=118, bill_type="HR", number="815", title="Clean Water Act")
        assert bill.to_dict() == {"congress": 118, "type": "HR", "number": "815", "title": "Clean Water Act"}

    def test_key_normalizes_type_case(self):
        a = LegislativeBill(congress=118, bill_type="hr", number="1", title="A")
        b = LegislativeBill(congress=118, bill_type="HR", number="1", title="B")
        assert a.key == b.key

    def test_display_helpers(self):
        bill = LegislativeBill(
            congress=118,
            bill_type="S",
            number="12",
            title="T",
            latest_action=LatestAction(action_date="2024-01-01", text="Passed Senate."),
        )
        assert bill.display_id == "S 12"
        assert bill.latest_action_text == "Passed Senate."

    def test_round_trip_keeps_populated_fields(self, mock_bill_data):
        bill = normalize_bill(mock_bill_data)
        data = bill.to_dict()
        assert data["title"] == mock_bill_data["title"]
        assert data["short_title"] == mock_bill_data["shortTitle"]
        assert data["summary"] == "Funds drinking water infrastructure."
        assert data["latest_action"] == {"action_date": "2023-02-10", "text": "Referred to committee."}
        assert data["subjects"] == ["Water quality", "Infrastructure"]
        assert data["sponsors"][0]["last_name"] == "Smith"

    def test_round_trip_adds_nothing(self):
        raw = {"type": "HR", "number": "1", "title": "Only Title"}
        assert set(normalize_bill(raw).to_dict()) == {"type", "number", "title"}


class TestOtherRecords:
    """Tests for the remaining record kinds."""

    def test_sponsor_display_name(self):
        assert Sponsor(first_name="Jane", last_name="Smith", party="D", state="CA").display_name == "Jane Smith (D-CA)"
        assert Sponsor().display_name == "Unknown"

    def test_document_primary_agency(self, mock_document_data):
        doc = normalize_document(mock_document_data)
        assert doc.primary_agency == "Environmental Protection Agency"
        assert RegulatoryDocument(document_number="1", title="T").primary_agency is None

    def test_document_round_trip(self, mock_document_data):
        data = normalize_document(mock_document_data).to_dict()
        assert data["effective_date"] == "2024-04-01"
        assert data["document_type"] == "Rule"
        assert data["sections"] == [{"title": "Background", "content": "Section 401 of the Clean Water Act..."}]
        assert "json_url" not in data

    def test_provision_citation(self):
        provision = StatutoryProvision(title=42, section="300gg-11")
        assert provision.citation == "42 U.S.C. § 300gg-11"
        assert provision.key == (42, "300gg-11")
        assert provision.to_dict() == {"title": 42, "section": "300gg-11"}

    def test_comment_key(self):
        comment = PublicComment(id="EPA-HQ-2024-0001-0002")
        assert comment.key == "EPA-HQ-2024-0001-0002"
        assert comment.to_dict() == {"id": "EPA-HQ-2024-0001-0002"}

    def test_opinion_keeps_zero_citation_count(self):
        opinion = CourtOpinion(id=1, case_name="A v. B", url="https://example.org", citation_count=0)
        assert opinion.to_dict()["citation_count"] == 0


class TestSearchAllResult:
    """Tests for the aggregate result shape."""

    def test_empty_has_exactly_four_keys(self):
        assert SearchAllResult().to_dict() == {
            "bills": [],
            "regulations": [],
            "code_sections": [],
            "comments": [],
        }

    def test_counts_and_total(self):
        result = SearchAllResult(
            bills=(LegislativeBill(congress=118, bill_type="HR", number="1", title="T"),),
            comments=(PublicComment(id="c1"), PublicComment(id="c2")),
        )
        assert result.total == 3
        assert result.counts() == {"bills": 1, "regulations": 0, "code_sections": 0, "comments": 2}
