# backend/services/employees.py
import logging
import math
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from models.employee import Employee
from repositories.employees import SORT_COLUMNS, EmployeeRepository
from schemas.employee import (
    EmployeeCreate,
    EmployeeFilter,
    EmployeePage,
    EmployeeReplace,
    EmployeeResponse,
    EmployeeUpdate,
)
from utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100

DUPLICATE_EMAIL = "An employee with the same email already exists"


class EmployeeService:
    """Employee record lifecycle: create, partial update, soft and permanent delete, search."""

    def __init__(self, employees: EmployeeRepository, clock: Callable[[], datetime] = datetime.utcnow):
        self.employees = employees
        self.clock = clock

    def list(self, include_inactive: bool = False) -> List[Employee]:
        return self.employees.get_all(include_inactive)

    def get_by_id(self, employee_id: int) -> Employee:
        employee = self.employees.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    def create(self, fields: EmployeeCreate) -> Employee:
        # Check-then-insert; the unique index is the only guard against a concurrent duplicate
        if self.employees.email_exists(fields.email):
            logger.warning("Employee create rejected, email '%s' in use", fields.email)
            raise ConflictError(DUPLICATE_EMAIL)

        employee = Employee(
            **fields.model_dump(),
            is_active=True,
            created_at=self.clock(),
            updated_at=None,
        )
        employee = self.employees.create(employee)
        logger.info("Created employee %s", employee.id)
        return employee

    def update(self, employee_id: int, partial: EmployeeUpdate) -> Employee:
        employee = self.get_by_id(employee_id)
        changes = partial.changes()

        nulls = sorted(k for k, v in changes.items() if v is None)
        if nulls:
            raise ValidationError(f"Fields cannot be null: {', '.join(nulls)}")

        email = changes.get("email")
        if email is not None and email != employee.email and self.employees.email_exists(email, exclude_id=employee.id):
            logger.warning("Employee %s update rejected, email '%s' in use", employee.id, email)
            raise ConflictError(DUPLICATE_EMAIL)

        for key, value in changes.items():
            setattr(employee, key, value)
        employee.updated_at = self.clock()

        employee = self.employees.update(employee)
        logger.info("Updated employee %s fields=%s", employee.id, sorted(changes))
        return employee

    def replace(self, employee_id: int, fields: EmployeeReplace) -> Employee:
        """Overwrite every editable field (edit form semantics)."""
        employee = self.get_by_id(employee_id)
        if self.employees.email_exists(fields.email, exclude_id=employee.id):
            raise ConflictError(DUPLICATE_EMAIL)

        for key, value in fields.model_dump().items():
            setattr(employee, key, value)
        employee.updated_at = self.clock()
        return self.employees.update(employee)

    def soft_delete(self, employee_id: int) -> Employee:
        employee = self.get_by_id(employee_id)
        employee.is_active = False
        employee.updated_at = self.clock()
        employee = self.employees.update(employee)
        logger.info("Deactivated employee %s", employee.id)
        return employee

    def hard_delete(self, employee_id: int) -> None:
        if not self.employees.delete(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Permanently deleted employee %s", employee_id)

    def search(self, term: Optional[str]) -> List[Employee]:
        if term is None or not term.strip():
            return self.list(include_inactive=False)
        return self.employees.search(term)

    def get_by_department(self, department: str) -> List[Employee]:
        return self.employees.get_by_department(department)

    def departments(self) -> List[str]:
        return self.employees.departments()

    def filter(self, criteria: EmployeeFilter) -> EmployeePage:
        page_number = criteria.page_number if criteria.page_number > 0 else 1
        page_size = max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, criteria.page_size))
        sort_by = criteria.sort_by if criteria.sort_by in SORT_COLUMNS else "LastName"
        descending = (criteria.sort_order or "").lower() == "desc"

        # Negative bounds are treated as absent
        min_salary = criteria.min_salary if criteria.min_salary is not None and criteria.min_salary >= 0 else None
        max_salary = criteria.max_salary if criteria.max_salary is not None and criteria.max_salary >= 0 else None

        items, total = self.employees.filter(
            search_term=criteria.search_term,
            department=criteria.department,
            include_inactive=criteria.include_inactive,
            min_salary=min_salary,
            max_salary=max_salary,
            hire_date_from=criteria.hire_date_from,
            hire_date_to=criteria.hire_date_to,
            sort_by=sort_by,
            descending=descending,
            offset=(page_number - 1) * page_size,
            limit=page_size,
        )

        total_pages = math.ceil(total / page_size)
        return EmployeePage(
            items=[EmployeeResponse.model_validate(e) for e in items],
            total_count=total,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
            search_term=criteria.search_term,
            department=criteria.department,
            include_inactive=criteria.include_inactive,
        )


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    return EmployeeService(EmployeeRepository(db))
