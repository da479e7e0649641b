"""
Tests for the CourtListener client.

Search results use camelCase field names, REST resources use snake_case;
both must normalize to the same record.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from payloads import make_cluster, make_opinion, make_opinion_resource

from us_legal_search.infrastructure.sources.court_listener import (
    COURT_LISTENER_SITE,
    CourtListenerClient,
    cluster_id,
    merge_cluster,
    normalize_opinion,
    opinion_url,
)


@pytest.fixture
async def client(settings):
    court_listener = CourtListenerClient(settings)
    yield court_listener
    await court_listener.close()


# =============================================================================
# Normalization
# =============================================================================


class TestOpinionUrl:
    """Tests for public opinion URLs."""

    def test_relative_url_prefixed(self):
        assert opinion_url("/opinion/1/a-v-b/", 1) == f"{COURT_LISTENER_SITE}/opinion/1/a-v-b/"

    def test_absolute_url_kept(self):
        assert opinion_url("https://example.org/o/1", 1) == "https://example.org/o/1"

    def test_missing_url_synthesized(self):
        assert opinion_url(None, 7) == f"{COURT_LISTENER_SITE}/opinion/7/"


class TestNormalizeOpinion:
    """Tests for opinion normalization across naming conventions."""

    def test_snake_case(self, mock_opinion_snake):
        opinion = normalize_opinion(mock_opinion_snake)
        assert opinion.case_name == "Doe v. Roe"
        assert opinion.court_id == "ca9"
        assert opinion.url == f"{COURT_LISTENER_SITE}/opinion/42/doe-v-roe/"
        assert opinion.citation_count == 0
        assert opinion.judges == ("Smith", "Jones")

    def test_camel_case(self):
        opinion = normalize_opinion(
            make_opinion(
                9,
                "Roe v. Wade",
                dateFiled="1973-01-22",
                courtId="scotus",
                citation=["410 U.S. 113", "93 S. Ct. 705"],
                citeCount=5000,
            )
        )
        assert opinion.date_filed == "1973-01-22"
        assert opinion.citation == "410 U.S. 113; 93 S. Ct. 705"
        assert opinion.citation_count == 5000

    def test_camel_case_preferred(self):
        raw = make_opinion(1, "Camel v. Case", case_name="snake v. case")
        assert normalize_opinion(raw).case_name == "Camel v. Case"

    def test_full_name_not_copied_into_case_name(self):
        assert normalize_opinion({"id": 3, "caseNameFull": "Full v. Name"}) is None

    def test_round_trip_adds_only_url(self):
        raw = make_opinion(5, "A v. B", dateFiled="2001-01-01")
        assert set(normalize_opinion(raw).to_dict()) == {"id", "case_name", "date_filed", "url"}

    def test_requires_id_and_name(self):
        assert normalize_opinion({"caseName": "No id"}) is None
        assert normalize_opinion({"id": 1}) is None

    def test_judges_list(self):
        assert normalize_opinion(make_opinion(1, "A v. B", judges=["Kagan", ""])).judges == ("Kagan",)


# =============================================================================
# CourtListenerClient
# =============================================================================


class TestSearchOpinions:
    """Tests for CourtListenerClient.search_opinions."""

    async def test_params(self, client):
        client._make_request = AsyncMock(return_value={"results": []})
        await client.search_opinions("qualified immunity", court="scotus", limit=20)

        call = client._make_request.call_args
        assert call.args[0] == "/search/"
        assert call.kwargs["params"] == {
            "q": "qualified immunity",
            "type": "o",
            "page_size": 60,
            "court": "scotus",
        }

    async def test_ranked(self, client):
        client._make_request = AsyncMock(
            return_value={
                "results": [
                    make_opinion(1, "United States v. Jones"),
                    make_opinion(2, "Pearson v. Callahan", snippet="qualified immunity"),
                    make_opinion(3, "Harlow v. Fitzgerald Qualified Immunity"),
                ]
            }
        )
        opinions = await client.search_opinions("qualified immunity", limit=1)
        assert [o.id for o in opinions] == [3]

    async def test_failure_returns_empty(self, client):
        client._make_request = AsyncMock(return_value=None)
        assert await client.search_opinions("immunity") == []


class TestOtherOperations:
    """Tests for recent opinions and detail lookup."""

    async def test_recent(self, client):
        client._make_request = AsyncMock(
            return_value={"results": [make_opinion(n, f"Case {n}") for n in range(1, 4)]}
        )
        opinions = await client.get_recent_opinions(court="ca9", limit=2)
        params = client._make_request.call_args.kwargs["params"]
        assert params["order_by"] == "dateFiled desc"
        assert params["page_size"] == 2
        assert params["court"] == "ca9"
        assert [o.id for o in opinions] == [1, 2]

    async def test_get_opinion_with_case_name(self, client, mock_opinion_snake):
        client._make_request = AsyncMock(return_value=mock_opinion_snake)
        opinion = await client.get_opinion(42)
        assert client._make_request.await_count == 1
        assert client._make_request.call_args.args[0] == "/opinions/42/"
        assert opinion.id == 42

    async def test_get_opinion_resolves_cluster(self, client):
        client._make_request = AsyncMock(
            side_effect=[make_opinion_resource(108713, 108713), make_cluster(108713, "Roe v. Wade")]
        )
        opinion = await client.get_opinion(108713)

        paths = [call.args[0] for call in client._make_request.call_args_list]
        assert paths == ["/opinions/108713/", "/clusters/108713/"]
        assert opinion.id == 108713
        assert opinion.case_name == "Roe v. Wade"
        assert opinion.date_filed == "1973-01-22"
        assert opinion.judges == ("Blackmun", "Burger", "Douglas")
        assert opinion.url == f"{COURT_LISTENER_SITE}/opinion/108713/roe-v-wade/"

    async def test_get_opinion_cluster_unavailable(self, client):
        client._make_request = AsyncMock(side_effect=[make_opinion_resource(7, 8), None])
        assert await client.get_opinion(7) is None

    async def test_get_opinion_without_cluster_link(self, client):
        client._make_request = AsyncMock(return_value={"id": 42})
        assert await client.get_opinion(42) is None
        assert client._make_request.await_count == 1

    async def test_get_opinion_over_http(self, settings):
        def handler(request):
            if request.url.path.endswith("/opinions/108713/"):
                return httpx.Response(200, json=make_opinion_resource(108713, 108713))
            if request.url.path.endswith("/clusters/108713/"):
                return httpx.Response(200, json=make_cluster(108713, "Roe v. Wade"))
            return httpx.Response(404)

        async with CourtListenerClient(settings, transport=httpx.MockTransport(handler)) as court_listener:
            opinion = await court_listener.get_opinion(108713)

        assert opinion is not None
        assert opinion.case_name == "Roe v. Wade"
        assert opinion.precedential_status == "Published"


class TestClusterHelpers:
    """Tests for resolving an opinion's cluster."""

    def test_cluster_id_from_url(self):
        assert cluster_id("https://www.courtlistener.com/api/rest/v3/clusters/108713/") == 108713

    def test_cluster_id_bare(self):
        assert cluster_id(55) == 55
        assert cluster_id("55") == 55

    def test_cluster_id_missing(self):
        assert cluster_id(None) is None
        assert cluster_id("https://example.org/dockets/1/") is None

    def test_merge_keeps_opinion_values(self):
        merged = merge_cluster(
            {"id": 1, "absolute_url": "/opinion/1/a/", "plain_text": ""},
            {"id": 2, "absolute_url": "/opinion/2/b/", "plain_text": "cluster", "case_name": "A v. B"},
        )
        assert merged["id"] == 1
        assert merged["absolute_url"] == "/opinion/1/a/"
        assert merged["plain_text"] == "cluster"
        assert merged["case_name"] == "A v. B"


class TestCredentials:
    """Tests for token handling."""

    def test_token_header(self, client):
        assert client._client.headers["Authorization"] == "Token cl-test-token"
        assert client.has_api_key is True

    async def test_anonymous(self, anonymous_settings):
        async with CourtListenerClient(anonymous_settings) as anonymous:
            assert "Authorization" not in anonymous._client.headers
            assert anonymous.has_api_key is False
