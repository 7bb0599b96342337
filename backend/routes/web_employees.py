# backend/routes/web_employees.py
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request

from repositories.employees import SORT_COLUMNS
from schemas.common import ApiResponse, ok
from schemas.employee import (
    EmployeeCreate,
    EmployeeFilter,
    EmployeePage,
    EmployeeReplace,
    EmployeeResponse,
)
from services.employees import EmployeeService, get_employee_service
from utils.exceptions import validate_form
from utils.sessions import get_session_principal

# Presentation surface for employee records; requires a signed-in session
router = APIRouter(
    prefix="/employees",
    tags=["Employees (web)"],
    dependencies=[Depends(get_session_principal)],
)


# ---- HELPERS ----
def _decimal(raw: Optional[str]) -> Optional[Decimal]:
    try:
        value = Decimal(raw) if raw not in (None, "") else None
    except InvalidOperation:
        return None
    if value is None or not value.is_finite() or value < 0:
        return None
    return value


def _datetime(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _int(raw: Optional[str]) -> Optional[int]:
    try:
        return int(raw) if raw not in (None, "") else None
    except ValueError:
        return None


def bind_employee_filter(request: Request) -> EmployeeFilter:
    """Build filter criteria from the query string, dropping values that do not parse."""
    q = request.query_params
    criteria = EmployeeFilter(
        search_term=q.get("searchTerm") or None,
        department=q.get("department") or None,
        include_inactive=(q.get("includeInactive") or "").lower() == "true",
        min_salary=_decimal(q.get("minSalary")),
        max_salary=_decimal(q.get("maxSalary")),
        hire_date_from=_datetime(q.get("hireDateFrom")),
        hire_date_to=_datetime(q.get("hireDateTo")),
    )

    page_number = _int(q.get("pageNumber"))
    if page_number is not None:
        criteria.page_number = page_number if page_number > 0 else 1

    page_size = _int(q.get("pageSize"))
    if page_size is not None:
        criteria.page_size = max(5, min(100, page_size))

    sort_by = q.get("sortBy")
    if sort_by is not None:
        criteria.sort_by = sort_by if sort_by in SORT_COLUMNS else "LastName"

    sort_order = q.get("sortOrder")
    if sort_order is not None:
        criteria.sort_order = "desc" if sort_order.lower() == "desc" else "asc"

    return criteria


# =========================
# LIST
# =========================
@router.get("", response_model=ApiResponse[EmployeePage])
def index(
    criteria: EmployeeFilter = Depends(bind_employee_filter),
    service: EmployeeService = Depends(get_employee_service),
):
    page = service.filter(criteria)
    return ok(page, f"{page.total_count} employee(s) found")


@router.get("/departments")
def departments(service: EmployeeService = Depends(get_employee_service)):
    return ok(service.departments())


# =========================
# DETAILS
# =========================
@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def details(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    return ok(EmployeeResponse.model_validate(service.get_by_id(employee_id)))


# =========================
# CREATE / EDIT / DELETE
# =========================
@router.post("", response_model=ApiResponse[EmployeeResponse], status_code=201)
def create(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(""),
    department: str = Form(...),
    position: str = Form(...),
    salary: Decimal = Form(...),
    hire_date: datetime = Form(...),
    service: EmployeeService = Depends(get_employee_service),
):
    fields = validate_form(
        EmployeeCreate,
        first_name=first_name, last_name=last_name, email=email, phone=phone,
        department=department, position=position, salary=salary, hire_date=hire_date,
    )
    employee = service.create(fields)
    return ok(
        EmployeeResponse.model_validate(employee),
        f"Employee {employee.full_name} has successfully created.",
    )


@router.post("/{employee_id}/edit", response_model=ApiResponse[EmployeeResponse])
def edit(
    employee_id: int,
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(""),
    department: str = Form(...),
    position: str = Form(...),
    salary: Decimal = Form(...),
    hire_date: datetime = Form(...),
    is_active: bool = Form(False),
    service: EmployeeService = Depends(get_employee_service),
):
    fields = validate_form(
        EmployeeReplace,
        first_name=first_name, last_name=last_name, email=email, phone=phone,
        department=department, position=position, salary=salary, hire_date=hire_date,
        is_active=is_active,
    )
    employee = service.replace(employee_id, fields)
    return ok(
        EmployeeResponse.model_validate(employee),
        f"Employee {employee.full_name} updated successfully",
    )


@router.post("/{employee_id}/delete", response_model=ApiResponse)
def delete(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    employee = service.get_by_id(employee_id)
    full_name = employee.full_name
    service.hard_delete(employee_id)
    return ok(None, f"Employee {full_name} deleted successfully")
