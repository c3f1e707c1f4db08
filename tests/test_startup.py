"""Tests for application startup and the uvicorn entry point."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from visacms import __main__ as entry
from visacms.main import app


class TestStartup:
    def test_unreachable_store_does_not_block_public_pages(self):
        exc = OperationalError("CREATE TABLE", {}, Exception("unable to open database file"))
        with (
            patch("visacms.main.init_schema", side_effect=exc),
            patch("visacms.services.catalog.fetch_live_records", new=AsyncMock(return_value=[])),
            TestClient(app) as started,
        ):
            resp = started.get("/latest-news/canada-express-entry-draw-invites-5-000-candidates")

        assert resp.status_code == 200
        assert resp.json()["story"]["tag"] == "Canada"

    def test_startup_initialises_schema(self):
        with patch("visacms.main.init_schema") as init, TestClient(app):
            pass

        init.assert_called_once_with()


class TestEntryPoint:
    def test_main_runs_uvicorn(self, monkeypatch):
        monkeypatch.setenv("PORT", "9001")
        with patch("visacms.__main__.uvicorn.run") as run:
            entry.main()

        run.assert_called_once_with("visacms.main:app", host="127.0.0.1", port=9001)
