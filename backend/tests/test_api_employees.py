from fastapi.testclient import TestClient

from services.employees import get_employee_service

from factories import employee_payload


def _create(client, headers, **overrides):
    res = client.post("/api/employees", json=employee_payload(**overrides), headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def test_employee_endpoints_require_token(client):
    assert client.get("/api/employees").status_code == 401
    assert client.post("/api/employees", json=employee_payload()).status_code == 401
    assert client.delete("/api/employees/1").status_code == 401


def test_create_returns_camel_case_envelope(client, bearer_headers):
    res = client.post("/api/employees", json=employee_payload(), headers=bearer_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Employee created successfully"
    data = body["data"]
    assert data["firstName"] == "Jane"
    assert data["fullName"] == "Jane Doe"
    assert data["isActive"] is True
    assert data["updatedAt"] is None
    assert data["salary"] == 85000


def test_create_duplicate_email_is_bad_request(client, bearer_headers):
    _create(client, bearer_headers)

    res = client.post("/api/employees", json=employee_payload(firstName="Twin"), headers=bearer_headers)

    assert res.status_code == 400
    assert res.json()["success"] is False


def test_create_rejects_invalid_fields(client, bearer_headers):
    res = client.post(
        "/api/employees",
        json=employee_payload(email="not-an-email", salary=-5, firstName=""),
        headers=bearer_headers,
    )

    assert res.status_code == 400
    fields = {err["field"] for err in res.json()["data"]}
    assert {"email", "salary", "firstName"} <= fields


def test_get_and_list(client, bearer_headers):
    created = _create(client, bearer_headers)

    one = client.get(f"/api/employees/{created['id']}", headers=bearer_headers)
    many = client.get("/api/employees", headers=bearer_headers)

    assert one.json()["data"]["email"] == "jane.doe@company.com"
    assert [e["id"] for e in many.json()["data"]] == [created["id"]]


def test_missing_employee_is_not_found(client, bearer_headers):
    res = client.get("/api/employees/999", headers=bearer_headers)

    assert res.status_code == 404
    assert res.json()["success"] is False
    assert client.put("/api/employees/999", json={"salary": 1}, headers=bearer_headers).status_code == 404
    assert client.delete("/api/employees/999", headers=bearer_headers).status_code == 404
    assert client.delete("/api/employees/999/permanent", headers=bearer_headers).status_code == 404


def test_partial_update_changes_only_sent_fields(client, bearer_headers):
    created = _create(client, bearer_headers)

    res = client.put(f"/api/employees/{created['id']}", json={"salary": 95000}, headers=bearer_headers)

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["salary"] == 95000
    assert data["isActive"] is True
    assert data["hireDate"] == created["hireDate"]
    assert data["position"] == created["position"]
    assert data["updatedAt"] is not None


def test_partial_update_rejects_null(client, bearer_headers):
    created = _create(client, bearer_headers)

    res = client.put(f"/api/employees/{created['id']}", json={"lastName": None}, headers=bearer_headers)

    assert res.status_code == 400


def test_soft_delete_hides_from_default_list(client, bearer_headers):
    created = _create(client, bearer_headers)

    res = client.delete(f"/api/employees/{created['id']}", headers=bearer_headers)
    assert res.status_code == 200
    assert res.json()["data"]["isActive"] is False

    assert client.get("/api/employees", headers=bearer_headers).json()["data"] == []
    everyone = client.get("/api/employees", params={"includeInactive": "true"}, headers=bearer_headers)
    assert [e["id"] for e in everyone.json()["data"]] == [created["id"]]
    # Still reachable by id
    assert client.get(f"/api/employees/{created['id']}", headers=bearer_headers).status_code == 200


def test_permanent_delete_removes_record(client, bearer_headers):
    created = _create(client, bearer_headers)

    res = client.delete(f"/api/employees/{created['id']}/permanent", headers=bearer_headers)

    assert res.status_code == 200
    assert res.json()["data"] is None
    assert client.get(f"/api/employees/{created['id']}", headers=bearer_headers).status_code == 404


def test_search_and_department(client, bearer_headers):
    _create(client, bearer_headers)
    _create(client, bearer_headers, firstName="Mark", lastName="Smith", email="mark@company.com", department="Sales")

    found = client.get("/api/employees/search", params={"term": "smith"}, headers=bearer_headers)
    sales = client.get("/api/employees/department/Sales", headers=bearer_headers)

    assert [e["firstName"] for e in found.json()["data"]] == ["Mark"]
    assert [e["firstName"] for e in sales.json()["data"]] == ["Mark"]


def test_unexpected_error_returns_generic_500(app, bearer_headers):
    def broken_service():
        raise RuntimeError("database exploded at /var/secret")

    app.dependency_overrides[get_employee_service] = broken_service
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/api/employees", headers=bearer_headers)

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "An unexpected error occurred", "data": None}
    assert "secret" not in res.text


def test_create_echoes_email_exactly(client, bearer_headers):
    first = _create(client, bearer_headers, email="jane@Company.COM")
    second = _create(client, bearer_headers, email="jane@company.com")

    assert first["email"] == "jane@Company.COM"
    assert second["email"] == "jane@company.com"
