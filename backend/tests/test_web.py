import pytest

from config import settings
from models.users import UserRole


@pytest.fixture
def member(auth_service):
    return auth_service.register("alice", "Pw1!", "a@x.com", UserRole.SALES)


def _sign_in(client, username="alice", password="Pw1!", **extra):
    return client.post("/account/login", data={"username": username, "password": password, **extra})


def _employee_form(**overrides):
    form = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@company.com",
        "phone": "555-0100",
        "department": "Engineering",
        "position": "Developer",
        "salary": "85000",
        "hire_date": "2021-03-15T00:00:00",
    }
    form.update(overrides)
    return form


def test_session_login_sets_cookie_and_redirect(client, member):
    res = _sign_in(client)

    assert res.status_code == 200
    assert settings.SESSION_COOKIE_NAME in res.cookies
    data = res.json()["data"]
    assert data["username"] == "alice"
    assert data["role"] == "Sales"
    assert data["redirectTo"] == "/employees"


def test_session_login_honours_only_local_return_url(client, member):
    assert _sign_in(client, return_url="/dashboard").json()["data"]["redirectTo"] == "/dashboard"
    assert _sign_in(client, return_url="https://evil.example").json()["data"]["redirectTo"] == "/employees"
    assert _sign_in(client, return_url="//evil.example").json()["data"]["redirectTo"] == "/employees"


def test_session_login_failures(client, auth_service, member):
    bad = _sign_in(client, password="nope")
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid Username or Password"

    auth_service.update_status(member.id, False)
    inactive = _sign_in(client)
    assert inactive.status_code == 401
    assert inactive.json()["message"] == "Your account is deactivated"


def test_pages_require_session(client):
    assert client.get("/employees").status_code == 401
    assert client.get("/dashboard").status_code == 401


def test_bearer_token_does_not_open_session_pages(client, bearer_headers):
    assert client.get("/employees", headers=bearer_headers).status_code == 401
    assert client.get("/dashboard", headers=bearer_headers).status_code == 401


def test_session_cookie_does_not_open_api(client, member):
    _sign_in(client)

    assert client.get("/employees").status_code == 200
    assert client.get("/api/employees").status_code == 401


def test_form_register(client):
    res = client.post(
        "/account/register",
        data={"username": "bob", "email": "bob@x.com", "password": "Pw1!", "role": "Marketing"},
    )

    assert res.status_code == 201
    assert res.json()["data"]["role"] == "Marketing"
    assert _sign_in(client, username="bob").status_code == 200


def test_logout_ends_session(client, member):
    _sign_in(client)

    assert client.post("/account/logout").status_code == 200
    client.cookies.clear()
    assert client.get("/employees").status_code == 401


def test_employee_form_crud(client, member):
    _sign_in(client)

    created = client.post("/employees", data=_employee_form())
    assert created.status_code == 201
    employee = created.json()["data"]
    assert created.json()["message"] == "Employee Jane Doe has successfully created."

    edited = client.post(
        f"/employees/{employee['id']}/edit",
        data=_employee_form(position="Lead", is_active="false"),
    )
    assert edited.status_code == 200
    assert edited.json()["data"]["position"] == "Lead"
    assert edited.json()["data"]["isActive"] is False

    assert client.get(f"/employees/{employee['id']}").json()["data"]["position"] == "Lead"

    deleted = client.post(f"/employees/{employee['id']}/delete")
    assert deleted.status_code == 200
    assert client.get(f"/employees/{employee['id']}").status_code == 404


def test_employee_form_rejects_negative_salary(client, member):
    _sign_in(client)

    res = client.post("/employees", data=_employee_form(salary="-10"))

    assert res.status_code == 400
    assert res.json()["success"] is False


def test_list_binds_query_leniently(client, member, employee_service):
    from factories import employee_fields

    for i in range(7):
        employee_service.create(employee_fields(email=f"e{i}@company.com", last_name=f"L{i}"))
    _sign_in(client)

    res = client.get("/employees", params={
        "pageNumber": "-3",
        "pageSize": "2",
        "sortBy": "Bogus",
        "sortOrder": "DESC",
        "minSalary": "abc",
        "hireDateFrom": "not-a-date",
        "includeInactive": "yes",
    })

    assert res.status_code == 200
    page = res.json()["data"]
    assert page["pageNumber"] == 1
    assert page["pageSize"] == 5
    assert page["totalCount"] == 7
    assert page["totalPages"] == 2
    assert page["hasNextPage"] is True
    assert page["hasPreviousPage"] is False
    assert [e["lastName"] for e in page["items"]] == ["L6", "L5", "L4", "L3", "L2"]


def test_departments_lists_distinct_names(client, member, employee_service):
    from factories import employee_fields

    employee_service.create(employee_fields(department="Sales"))
    employee_service.create(employee_fields(email="b@company.com", department="Engineering"))
    employee_service.create(employee_fields(email="c@company.com", department="Sales"))
    _sign_in(client)

    assert client.get("/employees/departments").json()["data"] == ["Engineering", "Sales"]


def test_dashboard_counts_views_per_session(client, member, employee_service):
    from factories import employee_fields

    employee_service.create(employee_fields())
    _sign_in(client)

    first = client.get("/dashboard").json()["data"]
    second = client.get("/dashboard/index").json()["data"]

    assert first["pageViews"] == 1
    assert second["pageViews"] == 2
    assert second["totalAppRequests"] > first["totalAppRequests"]
    assert second["summary"]["totalEmployees"] == 1
    assert second["summary"]["employeesByDepartment"] == {"Engineering": 1}


def test_dashboard_stats_by_department(client, member, employee_service):
    from decimal import Decimal

    from factories import employee_fields

    employee_service.create(employee_fields(email="a@company.com", department="Sales", salary=Decimal("100")))
    employee_service.create(employee_fields(email="b@company.com", department="Sales", salary=Decimal("300")))
    employee_service.create(employee_fields(email="c@company.com", department="Ops", salary=Decimal("900")))
    _sign_in(client)

    stats = client.get("/dashboard/stats", params={"department": "Sales"}).json()["data"]

    assert stats == {
        "count": 2,
        "averageSalary": 200.0,
        "medianSalary": 200.0,
        "minSalary": 100.0,
        "maxSalary": 300.0,
    }


def test_reset_session_signs_out(client, member):
    _sign_in(client)
    client.get("/dashboard")

    assert client.get("/dashboard/reset-session").status_code == 200
    assert client.get("/dashboard").status_code == 401


def test_form_register_keeps_email_and_rejects_bad_address(client):
    res = client.post("/account/register", data={"username": "bob", "email": "Bob@X.com", "password": "Pw1!"})
    assert res.status_code == 201
    assert res.json()["data"]["email"] == "Bob@X.com"

    bad = client.post("/account/register", data={"username": "carl", "email": "nope", "password": "Pw1!"})
    assert bad.status_code == 400
    assert bad.json()["success"] is False


def test_employee_form_keeps_email_as_written(client, member):
    _sign_in(client)

    res = client.post("/employees", data=_employee_form(email="jane@Company.COM"))

    assert res.status_code == 201
    assert res.json()["data"]["email"] == "jane@Company.COM"


def test_dashboard_answers_401_when_session_vanished(app, client):
    from utils.principal import Principal
    from utils.sessions import get_session_principal

    # Sign-in check passed but there is no session left to count views in
    app.dependency_overrides[get_session_principal] = lambda: Principal(id=1, username="alice", role=UserRole.SALES)

    res = client.get("/dashboard")

    assert res.status_code == 401
    assert res.json()["message"] == "Please sign in to continue"
