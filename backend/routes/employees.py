# backend/routes/employees.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from schemas.common import ApiResponse, ok
from schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from services.employees import EmployeeService, get_employee_service
from utils.principal import Principal
from utils.tokenJWT import get_current_principal

# Every employee endpoint requires a valid bearer token; roles are not checked
router = APIRouter(
    prefix="/api/employees",
    tags=["Employees"],
    dependencies=[Depends(get_current_principal)],
)


def _many(employees) -> List[EmployeeResponse]:
    return [EmployeeResponse.model_validate(e) for e in employees]


# =========================
# LIST / SEARCH
# =========================
@router.get("", response_model=ApiResponse[List[EmployeeResponse]])
def get_all_employees(
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: EmployeeService = Depends(get_employee_service),
):
    return ok(_many(service.list(include_inactive)), "Employees fetched successfully")


@router.get("/search", response_model=ApiResponse[List[EmployeeResponse]])
def search_employees(
    term: Optional[str] = Query(None),
    service: EmployeeService = Depends(get_employee_service),
):
    return ok(_many(service.search(term)), "Employees fetched successfully")


@router.get("/department/{department}", response_model=ApiResponse[List[EmployeeResponse]])
def get_employees_by_department(
    department: str,
    service: EmployeeService = Depends(get_employee_service),
):
    return ok(_many(service.get_by_department(department)), "Employees fetched successfully")


# =========================
# SINGLE EMPLOYEE
# =========================
@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def get_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    employee = service.get_by_id(employee_id)
    return ok(EmployeeResponse.model_validate(employee), "Employee fetched successfully")


@router.post("", response_model=ApiResponse[EmployeeResponse], status_code=status.HTTP_201_CREATED)
def create_employee(payload: EmployeeCreate, service: EmployeeService = Depends(get_employee_service)):
    employee = service.create(payload)
    return ok(EmployeeResponse.model_validate(employee), "Employee created successfully")


# Partial update: only fields present in the body change
@router.put("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = service.update(employee_id, payload)
    return ok(EmployeeResponse.model_validate(employee), "Employee updated successfully")


# =========================
# DELETE
# =========================
@router.delete("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def deactivate_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    employee = service.soft_delete(employee_id)
    return ok(EmployeeResponse.model_validate(employee), "Employee deactivated successfully")


@router.delete("/{employee_id}/permanent", response_model=ApiResponse)
def delete_employee_permanently(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    service.hard_delete(employee_id)
    return ok(None, "Employee deleted permanently")
