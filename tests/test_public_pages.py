"""Tests for the public render path: live + bundled merge, lookup, miss policy.

Outbound HTTP to the collection endpoints is replaced with AsyncMocks so
the tests never touch the network.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
from fastapi.testclient import TestClient

from visacms.data.static_news import STATIC_NEWS
from visacms.main import app
from visacms.services import catalog

client = TestClient(app)

_LIVE_STORY = {
    "slug": "canada-pr-update",
    "title": "Canada PR Update!!",
    "summary": "Fresh from the database.",
    "content": "<p>Live content</p>",
    "createdAt": "2026-10-01T09:00:00",
}


def _live(records):
    return patch("visacms.services.catalog.fetch_live_records", new=AsyncMock(return_value=records))


# ---------------------------------------------------------------------------
# /latest-news/{slug}
# ---------------------------------------------------------------------------

class TestNewsPage:
    def test_live_story_found_by_slugified_title(self):
        with _live([_LIVE_STORY]):
            resp = client.get("/latest-news/canada-pr-update")

        assert resp.status_code == 200
        data = resp.json()
        assert data["story"]["content"] == "<p>Live content</p>"
        assert data["metadata"]["title"] == "Canada PR Update!! | VJC Overseas"
        assert data["metadata"]["description"] == "Fresh from the database."

    def test_other_stories_exclude_the_match(self):
        with _live([_LIVE_STORY]):
            data = client.get("/latest-news/canada-pr-update").json()

        assert "other_stories" not in data
        titles = [s["title"] for s in data["otherStories"]]
        assert "Canada PR Update!!" not in titles
        assert len(titles) == len(STATIC_NEWS)

    def test_live_entry_takes_precedence_over_static(self):
        shadow = {**STATIC_NEWS[0], "summary": "Live copy"}
        with _live([shadow]):
            data = client.get(f"/latest-news/{catalog.news_key(STATIC_NEWS[0])}").json()

        assert data["story"]["summary"] == "Live copy"

    def test_static_story_served_when_live_is_empty(self):
        with _live([]):
            resp = client.get("/latest-news/germany-opportunity-card-what-indian-applicants-need-to-know")

        assert resp.status_code == 200
        # falls back to the description when the story has no summary
        assert resp.json()["metadata"]["description"].startswith("A points-based job-seeker card")

    def test_unknown_slug_is_not_found(self):
        with _live([_LIVE_STORY]):
            resp = client.get("/latest-news/does-not-exist")

        assert resp.status_code == 404
        assert resp.json() == {"error": "News article not found"}


class TestNewsIndex:
    def test_lists_live_before_static(self):
        with _live([_LIVE_STORY]):
            data = client.get("/latest-news").json()

        assert data["items"][0]["title"] == "Canada PR Update!!"
        assert len(data["items"]) == len(STATIC_NEWS) + 1
        assert data["paths"][0] == "canada-pr-update"


# ---------------------------------------------------------------------------
# /visa/{slug}
# ---------------------------------------------------------------------------

class TestVisaPage:
    def test_static_visa_uses_meta_fields(self):
        with _live([]):
            data = client.get("/visa/canada-pr-visa").json()

        assert data["metadata"]["title"] == "Canada PR Visa for Indians | Express Entry Guide"
        assert data["metadata"]["keywords"] == "canada pr, express entry, crs score"

    def test_visa_without_meta_title_uses_name(self):
        with _live([]):
            data = client.get("/visa/germany-job-seeker-visa").json()

        assert data["metadata"]["title"] == "Germany Job Seeker Visa | VJC Overseas"
        assert data["metadata"]["keywords"] is None

    def test_live_visa_found(self):
        live = {"slug": "uk-skilled-worker", "name": "UK Skilled Worker", "description": "Sponsored work route."}
        with _live([live]):
            data = client.get("/visa/uk-skilled-worker").json()

        assert data["visa"]["name"] == "UK Skilled Worker"
        assert data["metadata"]["description"] == "Sponsored work route."

    def test_unknown_visa_is_not_found(self):
        with _live([]):
            resp = client.get("/visa/atlantis-golden-visa")

        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# fetch_live_records degradation
# ---------------------------------------------------------------------------

class TestFetchLiveRecords:
    def test_connection_error_degrades_to_empty(self):
        with patch(
            "visacms.services.catalog.httpx.AsyncClient.get",
            new=AsyncMock(side_effect=httpx.ConnectError("refused")),
        ):
            assert asyncio.run(catalog.fetch_live_records("/api/news")) == []

    def test_error_status_degrades_to_empty(self):
        request = httpx.Request("GET", "http://testserver/api/news")
        response = httpx.Response(500, json={"error": "db down"}, request=request)
        with patch("visacms.services.catalog.httpx.AsyncClient.get", new=AsyncMock(return_value=response)):
            assert asyncio.run(catalog.fetch_live_records("/api/news")) == []

    def test_non_list_payload_degrades_to_empty(self):
        request = httpx.Request("GET", "http://testserver/api/news")
        response = httpx.Response(200, json={"unexpected": True}, request=request)
        with patch("visacms.services.catalog.httpx.AsyncClient.get", new=AsyncMock(return_value=response)):
            assert asyncio.run(catalog.fetch_live_records("/api/news")) == []

    def test_returns_live_list(self):
        request = httpx.Request("GET", "http://testserver/api/news")
        response = httpx.Response(200, json=[_LIVE_STORY], request=request)
        with patch("visacms.services.catalog.httpx.AsyncClient.get", new=AsyncMock(return_value=response)):
            assert asyncio.run(catalog.fetch_live_records("/api/news")) == [_LIVE_STORY]

    def test_page_survives_live_failure(self):
        with patch(
            "visacms.services.catalog.httpx.AsyncClient.get",
            new=AsyncMock(side_effect=httpx.ConnectError("refused")),
        ):
            resp = client.get("/latest-news/canada-express-entry-draw-invites-5-000-candidates")

        assert resp.status_code == 200
