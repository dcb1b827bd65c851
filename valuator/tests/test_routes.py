import pytest
from fastapi.testclient import TestClient

from valuator.api.dependencies import get_db_service, get_pipeline
from valuator.main import app
from valuator.pipeline.orchestrator import ValuationPipeline


@pytest.fixture
def client(mock_llm, mock_db):
    app.dependency_overrides[get_db_service] = lambda: mock_db
    app.dependency_overrides[get_pipeline] = lambda: ValuationPipeline(mock_llm, mock_db)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _body(**overrides) -> dict:
    body = {
        "company_name": "Acme",
        "industry": "Technology",
        "company_stage": "Growth",
        "revenue": 1_000_000,
        "ebitda": 200_000,
        "growth_rate": 15,
        "employees": 50,
    }
    body.update(overrides)
    return body


def test_create_and_fetch_valuation(client):
    resp = client.post("/api/valuations", json=_body())
    assert resp.status_code == 200
    report = resp.json()
    assert report["results"]["valuation_range"] == "$2.1M - $2.8M"
    assert report["results"]["key_metrics"]["pe_ratio"] == 21.0

    fetched = client.get(f"/api/valuations/{report['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["company_name"] == "Acme"

    listing = client.get("/api/valuations").json()
    assert listing[0]["id"] == report["id"]


def test_zero_ebitda_rejected(client):
    resp = client.post("/api/valuations", json=_body(ebitda=0))
    assert resp.status_code == 400
    assert "EBITDA" in resp.json()["detail"]
    assert client.get("/api/valuations").json() == []


def test_overflowing_revenue_rejected(client):
    resp = client.post("/api/valuations", json=_body(revenue=1e308))
    assert resp.status_code == 400
    assert "input magnitude" in resp.json()["detail"]
    assert client.get("/api/valuations").json() == []


def test_invalid_body(client):
    assert client.post("/api/valuations", json=_body(selected_methods=[])).status_code == 422
    assert client.post("/api/valuations", json=_body(employees=-1)).status_code == 422
    assert client.post("/api/valuations", json=_body(company_stage="Seed")).status_code == 422


def test_get_missing_valuation(client):
    assert client.get("/api/valuations/12345").status_code == 404
    assert client.delete("/api/valuations/12345").status_code == 404


def test_delete_valuation(client):
    report_id = client.post("/api/valuations", json=_body()).json()["id"]
    assert client.delete(f"/api/valuations/{report_id}").json() == {"status": "deleted"}
    assert client.get(f"/api/valuations/{report_id}").status_code == 404


def test_audit_log(client):
    report_id = client.post("/api/valuations", json=_body()).json()["id"]
    log = client.get(f"/api/valuations/{report_id}/audit-log").json()
    assert [s["step_name"] for s in log["pipeline_steps"]] == ["validate", "valuate", "narrate"]


def test_quick_calculator(client):
    resp = client.post("/api/quick-calculator", json={"revenue": 2_000_000, "ebitda": 400_000, "industry": "Retail"})
    assert resp.status_code == 200
    assert resp.json() == {
        "revenue_multiple": "1.4x",
        "ebitda_multiple": "7.8x",
        "quick_estimate": "$2.5M - $3.4M",
    }


def test_quick_calculator_requires_inputs(client):
    resp = client.post("/api/quick-calculator", json={"revenue": 2_000_000})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Revenue and EBITDA are required"


def test_industries(client):
    industries = client.get("/api/industries").json()
    assert len(industries) == 6
    tech = next(i for i in industries if i["industry"] == "Technology")
    assert tech["revenue_multiple"] == 4.2
