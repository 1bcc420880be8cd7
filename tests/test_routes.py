from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from report_engine.main import create_application

GENERATED_AT = "2024-01-15T10:30:00Z"


@pytest.fixture
def client():
    return TestClient(create_application())


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_reports(client):
    response = client.get("/api/v1/reports/")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["reports"]) == 16
    assert body["formats"] == ["csv", "xlsx"]


def test_preview(client, sample_data):
    response = client.post(
        "/api/v1/reports/at_risk_users/preview",
        json={"data": sample_data, "generated_at": GENERATED_AT},
    )
    assert response.status_code == 200
    table = response.json()["table"]
    assert table["metadata_rows"][0] == "AT-RISK USERS"
    assert table["columns"][4] == {
        "index": 4,
        "label": "Days Inactive",
        "key": "days_inactive",
        "format": "INTEGER",
        "decimals": 0,
        "number_format": "0",
    }
    assert table["rows"][0][:2] == [5, "Citra"]
    assert {"row": 0, "column": 6, "tag": "bad"} in table["styles"]
    assert table["is_placeholder"] is False


def test_preview_unknown_report(client):
    response = client.post("/api/v1/reports/payroll/preview", json={"data": {}})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_export_csv(client, sample_data):
    response = client.post(
        "/api/v1/reports/learner_progress/export?format=csv",
        json={"data": sample_data, "generated_at": GENERATED_AT},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="learner_progress_20240115_103000.csv"' in response.headers["content-disposition"]
    assert response.content.startswith(b"LEARNER PROGRESS")


def test_export_formatted_csv(client, sample_data):
    response = client.post(
        "/api/v1/reports/learner_progress/export?format=csv&formatted=true",
        json={"data": sample_data},
    )
    assert b"100.00%" in response.content


def test_workbook_download(client, sample_data):
    response = client.post(
        "/api/v1/reports/workbook?format=xlsx",
        json={"data": sample_data, "report_types": ["learner_progress", "learning_habits"]},
    )
    assert response.status_code == 200
    assert response.headers["x-report-sheets"] == "2"
    workbook = load_workbook(BytesIO(response.content))
    assert workbook.sheetnames == ["Learner Progress", "Learning Habits Analytics"]


def test_workbook_bad_format(client):
    response = client.post(
        "/api/v1/reports/workbook?format=pdf",
        json={"data": {}, "report_types": ["learner_progress"]},
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"]["supported_formats"] == ["csv", "xlsx"]


def test_workbook_requires_report_types(client):
    response = client.post("/api/v1/reports/workbook", json={"data": {}, "report_types": []})
    assert response.status_code == 422


def test_preview_rejects_scalar_collection(client):
    response = client.post(
        "/api/v1/reports/at_risk_users/preview",
        json={"data": {"at_risk_users": {"total": 3}}},
    )
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field"] == "at_risk_users"
