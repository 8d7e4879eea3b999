"""
API tests for the FastAPI routes.

Services are replaced through dependency overrides; no master data
service is contacted.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from main import app
from idplatform.api.routes.demographic import get_demographic_validator
from idplatform.api.routes.uispec import get_uispec_service
from idplatform.core.error_handling import ClientConfigurationError, UISpecError
from idplatform.models.uispec_models import Page, UISpecMetaData
from idplatform.services.demographic_validator import DemographicValidator
from idplatform.services.response_builder import ResponseBuilder
from idplatform.services.uispec_service import UISpecService


@pytest.fixture
def uispec_service():
    service = MagicMock(spec=UISpecService)
    builder = ResponseBuilder(version="1.0")
    service.save_ui_spec = AsyncMock(return_value=builder.build_success({"id": "spec-1"}))
    service.update_ui_spec = AsyncMock(return_value=builder.build_success({"id": "spec-1"}))
    service.get_ui_spec = AsyncMock(return_value=builder.build_success([
        UISpecMetaData(id="spec-1", status="PUBLISHED", effective_from="2024-01-01T00:00:00", json_spec={})
    ]))
    service.get_all_ui_spec = AsyncMock(return_value=builder.build_success(
        Page[UISpecMetaData](page_no=0, page_size=10, total_items=1, total_pages=5,
                             data=[UISpecMetaData(id="spec-1")])
    ))
    service.publish_ui_spec = AsyncMock(return_value=builder.build_success("published"))
    service.delete_ui_spec = AsyncMock(
        return_value=builder.build_error(UISpecError("KER-404", "not found"))
    )
    return service


@pytest.fixture
def client(uispec_service):
    app.dependency_overrides[get_uispec_service] = lambda: uispec_service
    app.dependency_overrides[get_demographic_validator] = lambda: DemographicValidator(date_pattern="%Y-%m-%d")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


UI_SPEC_BODY = {
    "identitySchemaId": "10001",
    "title": "Pre-registration UI",
    "description": "demo",
    "type": "newProcess",
    "jsonspec": {"identity": []}
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["service"] == "Identity Platform Services"


def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_save_ui_spec(client, uispec_service):
    response = client.post("/uispec", json=UI_SPEC_BODY)
    assert response.status_code == 200
    body = response.json()
    assert body["response"] == {"id": "spec-1"}
    assert body["errors"] is None
    sent = uispec_service.save_ui_spec.await_args.args[0]
    assert sent.identity_schema_id == "10001"


def test_save_ui_spec_rejects_incomplete_body(client):
    response = client.post("/uispec", json={"title": "only a title"})
    assert response.status_code == 422


def test_update_ui_spec(client, uispec_service):
    response = client.put("/uispec/spec-1", json=UI_SPEC_BODY)
    assert response.status_code == 200
    assert uispec_service.update_ui_spec.await_args.args[1] == "spec-1"


def test_get_latest_ui_spec(client, uispec_service):
    response = client.get("/uispec/latest", params={"version": 1.0, "identitySchemaVersion": 0})
    assert response.status_code == 200
    assert response.json()["response"][0]["effectiveFrom"] == "2024-01-01T00:00:00"
    uispec_service.get_ui_spec.assert_awaited_once_with(1.0, 0.0)


def test_get_latest_without_published_spec_is_500(client, uispec_service):
    uispec_service.get_ui_spec.side_effect = IndexError("list index out of range")
    response = client.get("/uispec/latest")
    assert response.status_code == 500


def test_get_all_ui_spec(client, uispec_service):
    response = client.get("/uispec/all", params={"pageNumber": 0, "pageSize": 10})
    assert response.status_code == 200
    page = response.json()["response"]
    assert page["totalItems"] == 1
    assert page["totalPages"] == 5
    uispec_service.get_all_ui_spec.assert_awaited_once_with(0, 10)


def test_publish_ui_spec(client):
    response = client.put("/uispec/spec-1/publish")
    assert response.status_code == 200
    assert response.json()["response"] == "published"


def test_delete_error_is_in_envelope(client):
    response = client.delete("/uispec/missing")
    assert response.status_code == 200
    body = response.json()
    assert body["response"] is None
    assert body["errors"] == [{"errorCode": "KER-404", "message": "not found"}]


def test_uispec_unavailable_without_masterdata(client):
    def unconfigured():
        raise ClientConfigurationError("Master data base URL is not configured")

    app.dependency_overrides[get_uispec_service] = unconfigured
    response = client.get("/uispec/all")
    assert response.status_code == 503


def test_validate_demographic_valid(client):
    response = client.post("/auth/demographic/validate", json={
        "authType": {"pi": True},
        "pii": {"demo": {"pi": {"namePri": "Jane", "gender": "F", "dob": "1990-01-31"}}}
    })
    assert response.status_code == 200
    assert response.json() == {"valid": True, "errors": []}


def test_validate_demographic_reports_every_failure(client):
    response = client.post("/auth/demographic/validate", json={
        "authType": {"ad": True, "fad": True, "pi": True},
        "pii": {"demo": {"pi": {"age": 151, "gender": "X"}}}
    })
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert [error["message"] for error in detail] == [
        "Address and full address are mutually exclusive",
        "Invalid Input Parameter - age",
        "Invalid Input Parameter - gender",
    ]
