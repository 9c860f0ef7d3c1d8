"""HTTP API: operations bound to routes, error kinds mapped to status codes."""

import pytest

from app import create_app
from src.grid import ClampPolicy
from evaluation_app.session import EvaluationSession
from evaluation_app.store import BlobStore


@pytest.fixture
def client(tmp_path):
    session = EvaluationSession(BlobStore(tmp_path / "data"), clamp=ClampPolicy(0, 10))
    app = create_app(session)
    app.config["TESTING"] = True
    return app.test_client()


def test_get_grid(client):
    resp = client.get("/api/grid")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["subjects"] == ["Teacher 1", "Teacher 2"]
    assert body["column_averages"]["Engagement"] == 0


def test_scenario_over_http(client):
    client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "Teaching Quality", "value": 8})
    resp = client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "Communication", "value": "7"})
    assert resp.status_code == 200
    assert resp.get_json()["row_total"] == 15

    assert client.post("/api/criteria", json={"name": "Punctuality"}).status_code == 201
    resp = client.post("/api/subjects", json={"name": "Teacher 1"})
    assert resp.status_code == 409
    assert resp.get_json() == {
        "error": "Subject already exists: 'Teacher 1'",
        "code": "DUPLICATE_NAME",
        "name": "Teacher 1",
    }

    body = client.delete("/api/criteria/Communication").get_json()
    assert body["row_totals"]["Teacher 1"] == 8
    assert body["column_averages"]["Teaching Quality"] == 4.0


def test_rename_routes(client):
    body = client.patch("/api/subjects/Teacher%202", json={"name": "Mr. Lee"}).get_json()
    assert body["subjects"] == ["Teacher 1", "Mr. Lee"]
    body = client.patch("/api/criteria/Engagement", json={"name": "Participation"}).get_json()
    assert body["criteria"][-1] == "Participation"
    assert client.patch("/api/subjects/Nobody", json={"name": "X"}).status_code == 404
    assert client.patch("/api/subjects/Teacher%201", json={}).status_code == 400


def test_error_status_codes(client):
    assert client.post("/api/subjects", json={"name": "  "}).status_code == 400
    assert client.delete("/api/subjects/Nobody").status_code == 404
    resp = client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "Engagement", "value": "abc"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_SCORE"
    resp = client.put("/api/scores", json={"subject": "Nobody", "criterion": "Engagement", "value": 1})
    assert resp.status_code == 404
    assert resp.get_json()["name"] == "Nobody"


def test_score_clamped_and_blank_is_zero(client):
    resp = client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "Engagement", "value": 12})
    assert resp.get_json()["value"] == 10
    resp = client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "Engagement", "value": ""})
    assert resp.get_json()["value"] == 0


def test_save_load_round_trip(client):
    assert client.post("/api/load").status_code == 404
    client.post("/api/subjects", json={"name": "Teacher 3"})
    assert client.post("/api/save").get_json()["saved"] is True
    client.post("/api/reset")
    assert "Teacher 3" not in client.get("/api/grid").get_json()["subjects"]
    body = client.post("/api/load").get_json()
    assert body["subjects"][-1] == "Teacher 3"


def test_export_import(client):
    client.put("/api/scores", json={"subject": "Teacher 2", "criterion": "Engagement", "value": 4})
    blob = client.get("/api/export").get_data(as_text=True)
    client.post("/api/reset")
    assert client.post("/api/import", json={"blob": blob}).status_code == 200
    assert client.get("/api/grid").get_json()["row_totals"]["Teacher 2"] == 4
    resp = client.post("/api/import", json={"blob": "{nope"})
    assert resp.status_code == 422
    assert resp.get_json()["code"] == "MALFORMED_BLOB"
    assert client.post("/api/import", json={}).status_code == 400


def test_charts_and_pdf(client):
    charts = client.get("/api/charts").get_json()
    assert [r["name"] for r in charts["totals"]] == ["Teacher 1", "Teacher 2"]
    resp = client.get("/api/report.pdf")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


def test_charts_with_criterion_named_name(client):
    assert client.post("/api/criteria", json={"name": "name"}).status_code == 201
    client.put("/api/scores", json={"subject": "Teacher 1", "criterion": "name", "value": 6})
    charts = client.get("/api/charts").get_json()
    key = charts["label_key"]
    assert key != "name"
    assert [r[key] for r in charts["by_subject"]] == ["Teacher 1", "Teacher 2"]
    assert charts["by_subject"][0]["name"] == 6
    assert [r[key] for r in charts["totals"]] == ["Teacher 1", "Teacher 2"]


@pytest.mark.parametrize(
    "method,url",
    [
        ("post", "/api/subjects"),
        ("post", "/api/criteria"),
        ("patch", "/api/subjects/Teacher%201"),
        ("patch", "/api/criteria/Engagement"),
        ("put", "/api/scores"),
        ("post", "/api/import"),
    ],
)
def test_non_object_body_rejected(client, method, url):
    resp = getattr(client, method)(url, json=["A"])
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_BODY"


def test_non_string_names_in_score_body(client):
    resp = client.put("/api/scores", json={"subject": ["x"], "criterion": "Engagement", "value": 1})
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "NOT_FOUND"
    resp = client.put("/api/scores", json={"subject": "Teacher 1", "criterion": {"c": 1}, "value": 1})
    assert resp.status_code == 404
    resp = client.post("/api/subjects", json={"name": ["A"]})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_NAME"


def test_import_rejects_non_finite_scores(client):
    blob = '{"subjects": ["A"], "criteria": ["X"], "scores": {"A": {"X": NaN}}}'
    resp = client.post("/api/import", json={"blob": blob})
    assert resp.status_code == 422
    assert client.get("/api/grid").get_json()["subjects"] == ["Teacher 1", "Teacher 2"]
