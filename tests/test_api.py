"""
API tests for node editing endpoints
"""
import json

import pytest
from fastapi.testclient import TestClient

from node_editor.api import routes_node
from node_editor.main import app
from node_editor.services import json_io


@pytest.fixture
def client(test_db, tmp_path, monkeypatch):
    """Client whose store, seed file and export dir live in tmp_path"""
    monkeypatch.setattr(routes_node, "db", test_db)
    monkeypatch.setattr(routes_node, "DATA_DIR", tmp_path)
    monkeypatch.setattr(json_io, "DOCUMENT_SEED_PATH", tmp_path / "seed.json")
    return TestClient(app)


@pytest.fixture
def fruit_doc_id(client, fruit_document):
    client.put("/api/documents/fruits", json={"text": json.dumps(fruit_document, indent=2)})
    return "fruits"


def test_root_and_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert "docs" in client.get("/").json()


def test_normalize_endpoint(client):
    rows = [
        {"key": "name", "type": "string", "value": "Apple"},
        {"key": "details", "type": "object", "value": '{"type": "Pome"}'},
        {"key": "", "type": "string", "value": "skipped"},
    ]
    response = client.post("/api/node/normalize", json={"rows": rows})

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"name": "Apple", "details": {"type": "Pome"}}
    assert json.loads(body["json"]) == body["data"]


def test_normalize_endpoint_without_rows(client):
    response = client.post("/api/node/normalize", json={})
    assert response.json() == {"json": "{}", "data": {}}


def test_path_endpoint(client):
    response = client.post("/api/node/path", json={"path": ["customer", 0, "name"]})
    assert response.json() == {"path": '$["customer"][0]["name"]'}
    assert client.post("/api/node/path", json={}).json() == {"path": "$"}


def test_first_access_seeds_from_file(client, tmp_path):
    (tmp_path / "seed.json").write_text('{"seeded": true}', encoding="utf-8")

    body = client.get("/api/documents/new-doc").json()

    assert body["version"] == 1
    assert json.loads(body["text"]) == {"seeded": True}


def test_save_node_with_data(client, fruit_doc_id, tmp_path):
    response = client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", 0], "data": {"color": "green", "details": {"type": "Malus"}}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["version"] == 2
    assert body["node_path"] == '$["fruits"][0]'
    apple = json.loads(body["text"])["fruits"][0]
    assert apple["name"] == "Apple"
    assert apple["color"] == "green"
    assert apple["details"] == {"type": "Malus", "season": "Fall"}

    exported = (tmp_path / f"{fruit_doc_id}.json").read_text(encoding="utf-8")
    assert exported == body["text"]


def test_save_node_with_rows(client, fruit_doc_id):
    rows = [
        {"key": "color", "type": "string", "value": "brown"},
        {"key": "nutrients", "type": "object", "value": '{"calories": 105}'},
    ]
    response = client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", 1], "rows": rows},
    )

    banana = json.loads(response.json()["text"])["fruits"][1]
    assert banana == {"name": "Banana", "color": "brown", "nutrients": {"calories": 105}}


def test_save_node_requires_data_or_rows(client, fruit_doc_id):
    response = client.post(f"/api/documents/{fruit_doc_id}/node", json={"path": ["fruits", 0]})
    assert response.status_code == 400


def test_save_node_with_explicit_null(client, fruit_doc_id):
    response = client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", 1], "data": None},
    )
    assert json.loads(response.json()["text"])["fruits"][1] is None


def test_save_node_on_invalid_document_is_rejected(client, test_db):
    client.put("/api/documents/broken", json={"text": "{not valid json"})

    response = client.post("/api/documents/broken/node", json={"path": [], "data": {}})

    assert response.status_code == 422
    assert "not valid JSON" in response.json()["detail"]
    assert test_db.get_current_version("broken").data == "{not valid json"


def test_save_node_path_conflict_is_rejected(client, fruit_doc_id, test_db):
    response = client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", "first"], "data": {"name": "Kiwi"}},
    )

    assert response.status_code == 422
    assert test_db.get_current_version(fruit_doc_id).version == 1


def test_string_index_segment_stays_a_key(client):
    client.put("/api/documents/keys", json={"text": '{"0": {"a": 1}}'})

    response = client.post("/api/documents/keys/node", json={"path": ["0"], "data": {"b": 2}})

    assert json.loads(response.json()["text"]) == {"0": {"a": 1, "b": 2}}


def test_history_versions_and_reset(client, fruit_doc_id):
    client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", 0, "color"], "data": "green"},
    )

    history = client.get(f"/api/documents/{fruit_doc_id}/history").json()
    assert [h["version"] for h in history] == [1, 2]
    assert history[1]["summary"] == 'Edit node $["fruits"][0]["color"]'

    first = client.get(f"/api/documents/{fruit_doc_id}/versions/1").json()
    assert json.loads(first["text"])["fruits"][0]["color"] == "red"

    reset = client.post(f"/api/documents/{fruit_doc_id}/reset/1").json()
    assert reset["version"] == 3
    assert reset["text"] == first["text"]

    listing = client.get("/api/documents").json()
    assert listing[0]["document_id"] == fruit_doc_id


def test_missing_history_and_versions(client):
    assert client.get("/api/documents/nope/history").status_code == 404
    assert client.get("/api/documents/nope/versions/1").status_code == 404
    assert client.post("/api/documents/nope/reset/1").status_code == 404


def test_view_selected_node(client):
    node = {
        "path": ["fruits", 0],
        "text": [
            {"key": "name", "type": "string", "value": "Apple"},
            {"key": "details", "type": "object", "value": "{broken"},
        ],
    }
    body = client.post("/api/node/view", json=node).json()

    assert body["path"] == '$["fruits"][0]'
    assert json.loads(body["content"]) == {"name": "Apple", "details": {}}


def test_save_node_index_past_end_is_rejected(client, fruit_doc_id, test_db):
    response = client.post(
        f"/api/documents/{fruit_doc_id}/node",
        json={"path": ["fruits", 1000000], "data": {"name": "Kiwi"}},
    )

    assert response.status_code == 422
    assert "past the end" in response.json()["detail"]
    assert test_db.get_current_version(fruit_doc_id).version == 1
