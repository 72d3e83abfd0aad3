"""Tests for the HTTP API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from roadmap.backends.memory import MemoryBackend
from roadmap.backends.sqlite import SqliteBackend
from roadmap.diagnostics import ListDiagnostics
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.roadmap_graph import Roadmap
from roadmap.models.status import PersistedStatus
from roadmap.utils.identifiers import utc_timestamp
from roadmap_server.app import create_app


def _roadmap() -> Roadmap:
    return Roadmap.model_validate({
        "roadmap_id": "test",
        "name": "Test roadmap",
        "nodes": [
            {"id": "phase-1", "data": {"label": "Basics", "type": "phase"}},
            {"id": "html", "data": {"label": "HTML", "type": "required", "isPrincipal": True}},
            {"id": "css", "data": {"label": "CSS", "type": "required"}},
            {"id": "typescript", "data": {"label": "TypeScript", "type": "optional"}},
        ],
        "edges": [{"id": "e1", "source": "html", "target": "css"}],
    })


@pytest.fixture
def backend():
    return MemoryBackend(
        records=[ProgressRecord(id="html", status="completado", updated_at=utc_timestamp())],
        diagnostics=ListDiagnostics(),
    )


@pytest.fixture
def client(backend):
    with TestClient(create_app(backend=backend, roadmap=_roadmap())) as test_client:
        yield test_client


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "/api/roadmap" in response.json()["endpoints"].values()


class TestRoadmapRoutes:
    """Test the presentation-facing routes."""

    def test_roadmap_has_loaded_status(self, client):
        """Statuses from storage are applied at startup."""
        data = client.get("/api/roadmap").json()
        nodes = {n["id"]: n for n in data["nodes"]}
        assert nodes["html"]["data"]["status"] == "completed"
        assert nodes["html"]["data"]["isPrincipal"] is True
        assert nodes["css"]["data"]["status"] == "pending"
        assert data["edges"][0]["source"] == "html"

    def test_stats(self, client):
        stats = client.get("/api/roadmap/stats").json()
        assert stats["completed"] == 1
        assert stats["total"] == 3
        assert stats["progressPercentage"] == pytest.approx(100 / 3)
        assert stats["requiredCompleted"] == 1

    def test_get_node(self, client):
        assert client.get("/api/roadmap/nodes/css").json()["data"]["label"] == "CSS"
        assert client.get("/api/roadmap/nodes/ghost").status_code == 404

    def test_update_status(self, client):
        response = client.put("/api/roadmap/nodes/css/status", json={"status": "in-progress"})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "in-progress"
        assert client.get("/api/roadmap/stats").json()["inProgress"] == 1

    def test_update_unknown_node(self, client):
        response = client.put("/api/roadmap/nodes/ghost/status", json={"status": "completed"})
        assert response.status_code == 404

    def test_update_phase_node(self, client):
        response = client.put("/api/roadmap/nodes/phase-1/status", json={"status": "completed"})
        assert response.status_code == 409

    def test_update_invalid_status(self, client):
        response = client.put("/api/roadmap/nodes/css/status", json={"status": "done"})
        assert response.status_code == 422

    def test_update_is_persisted(self, backend):
        """Writes scheduled by a request are stored once the app shuts down."""
        with TestClient(create_app(backend=backend, roadmap=_roadmap())) as client:
            client.put("/api/roadmap/nodes/typescript/status", json={"status": "skipped"})
        assert backend.records["typescript"].status == PersistedStatus.omitida

    def test_reset(self, backend):
        with TestClient(create_app(backend=backend, roadmap=_roadmap())) as client:
            stats = client.post("/api/roadmap/reset").json()
            assert stats["completed"] == 0
            assert stats["pending"] == 3
        assert {r.status for r in backend.records.values()} == {PersistedStatus.pendiente}
        assert sorted(backend.records) == ["css", "html", "typescript"]

    def test_selection(self, client):
        assert client.get("/api/roadmap/selection").json() == {"node_id": None}
        assert client.put("/api/roadmap/selection", json={"node_id": "css"}).json() == {
            "node_id": "css"
        }
        assert client.put("/api/roadmap/selection", json={"node_id": "ghost"}).status_code == 404
        assert client.put("/api/roadmap/selection", json={"node_id": None}).json() == {
            "node_id": None
        }

    def test_user_profile(self, client):
        assert client.get("/api/user").json() == {"user_name": "", "is_first_time": True}
        response = client.put("/api/user", json={"user_name": "Ana"})
        assert response.json() == {"user_name": "Ana", "is_first_time": False}


class TestProgressRoutes:
    """Test the raw record routes."""

    def test_initialize(self, client):
        assert client.post("/api/progress/initialize").json() == {"initialized": True}

    def test_list_and_get(self, client):
        records = client.get("/api/progress").json()
        assert [r["id"] for r in records] == ["html"]
        assert client.get("/api/progress/html").json()["status"] == "completado"
        assert client.get("/api/progress/css").status_code == 404

    def test_upsert(self, client):
        response = client.put("/api/progress/css", json={"status": "en-progreso"})
        assert response.json() == {"updated": True}
        assert client.get("/api/progress/css").json()["status"] == "en-progreso"

    def test_encoded_ids_keep_their_identity(self, client):
        """Percent-encoded '#' and '/' address their own records."""
        assert client.put("/api/progress/c%23", json={"status": "completado"}).json() == {
            "updated": True
        }
        assert client.put("/api/progress/a%2Fb", json={"status": "omitida"}).json() == {
            "updated": True
        }
        assert client.get("/api/progress/c%23").json()["id"] == "c#"
        assert client.get("/api/progress/a%2Fb").json()["status"] == "omitida"
        assert client.get("/api/progress/c").status_code == 404

    def test_upsert_rejects_memory_vocabulary(self, client):
        response = client.put("/api/progress/css", json={"status": "in-progress"})
        assert response.status_code == 422

    def test_delete_all(self, client):
        assert client.delete("/api/progress").json() == {"reset": True}
        assert client.get("/api/progress").json() == []

    def test_unavailable_storage_degrades(self, backend, client):
        backend.available = False
        assert client.get("/api/progress").json() == []
        assert client.put("/api/progress/css", json={"status": "completado"}).json() == {
            "updated": False
        }
        assert client.delete("/api/progress").json() == {"reset": False}


class TestSqliteConfiguredApp:
    """Test the app with its default sqlite storage."""

    def test_uses_db_path_from_environment(self, tmp_path, monkeypatch):
        db_path = tmp_path / "progress.db"
        monkeypatch.setenv("ROADMAP_DB_PATH", str(db_path))

        with TestClient(create_app(roadmap=_roadmap())) as client:
            client.put("/api/roadmap/nodes/css/status", json={"status": "completed"})
            assert client.get("/").json()["progress_db"] == str(db_path)

        record = asyncio.run(SqliteBackend(db_path).get_one("css"))
        assert record.status == PersistedStatus.completado
