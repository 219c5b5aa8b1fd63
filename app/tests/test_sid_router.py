"""Tests for the /sid API router."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import app


@pytest.fixture
def sources_root(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setattr(settings, "SOURCES_ROOT", str(tmp_path))
    (tmp_path / "game").mkdir()
    (tmp_path / "game" / "main.c").write_text('foo(SID( "hello" ));\n')
    (tmp_path / "game" / "bad.c").write_text("SID( 42 )\n")
    return tmp_path


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client: TestClient):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
        assert r.json()["hashes"] == ["djb2", "fnv1a"]


class TestHashEndpoint:

    def test_default_hash(self, client: TestClient):
        r = client.post("/sid/hash", json={"text": "hello"})
        assert r.status_code == 200
        body = r.json()
        assert body["hex"] == "0x0f923099"
        assert body["value"] == 0x0F923099
        assert body["token"] == '0x0f923099 /* "hello" */'

    def test_fnv(self, client: TestClient):
        r = client.post("/sid/hash", json={"text": "a", "hash_name": "fnv1a"})
        assert r.json()["hex"] == "0xe40c292c"

    def test_unknown_hash(self, client: TestClient):
        r = client.post("/sid/hash", json={"text": "a", "hash_name": "md5"})
        assert r.status_code == 400


class TestRunEndpoint:

    def test_run_directory(self, client: TestClient, sources_root: Path):
        r = client.post("/sid/run", json={"path": "game"})
        assert r.status_code == 200
        body = r.json()
        assert body["counts"]["modified"] == 1
        assert body["counts"]["failed"] == 1
        assert (sources_root / "game" / "main.c").read_text() == (
            'foo(0x0f923099 /* "hello" */);\n'
        )
        assert (sources_root / "game" / "bad.c").read_text() == "SID( 42 )\n"

    def test_dry_run(self, client: TestClient, sources_root: Path):
        r = client.post("/sid/run", json={"path": "game/main.c", "dry_run": True})
        assert r.status_code == 200
        assert r.json()["files"][0]["reasons"] == ["DRY_RUN"]
        assert "SID(" in (sources_root / "game" / "main.c").read_text()

    def test_missing_path(self, client: TestClient, sources_root: Path):
        r = client.post("/sid/run", json={"path": "nope"})
        assert r.status_code == 404

    def test_escape_root(self, client: TestClient, sources_root: Path):
        r = client.post("/sid/run", json={"path": "../"})
        assert r.status_code == 400

    def test_bad_marker(self, client: TestClient, sources_root: Path):
        r = client.post("/sid/run", json={"path": "game", "marker": "(oops"})
        assert r.status_code == 400
