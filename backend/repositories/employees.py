# backend/repositories/employees.py
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from models.employee import Employee

# Allowed sort fields of the list view, keyed by their public name
SORT_COLUMNS = {
    "FirstName": Employee.first_name,
    "LastName": Employee.last_name,
    "Email": Employee.email,
    "Department": Employee.department,
    "Salary": Employee.salary,
    "HireDate": Employee.hire_date,
}


def _by_name(query: Query) -> Query:
    return query.order_by(Employee.last_name.asc(), Employee.first_name.asc())


class EmployeeRepository:
    """Employee store backed by the ``employees`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, include_inactive: bool = False) -> List[Employee]:
        query = self.db.query(Employee)
        if not include_inactive:
            query = query.filter(Employee.is_active.is_(True))
        return _by_name(query).all()

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.db.get(Employee, employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.email == email).first()

    def create(self, employee: Employee) -> Employee:
        self.db.add(employee)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(employee)
        return employee

    def update(self, employee: Employee) -> Employee:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(employee)
        return employee

    def delete(self, employee_id: int) -> bool:
        employee = self.get_by_id(employee_id)
        if employee is None:
            return False
        self.db.delete(employee)
        self.db.commit()
        return True

    def exists(self, employee_id: int) -> bool:
        return self.db.query(Employee.id).filter(Employee.id == employee_id).first() is not None

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Employee.id).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        return query.first() is not None

    def search(self, term: Optional[str]) -> List[Employee]:
        if not term or not term.strip():
            return self.get_all()
        return _by_name(self.db.query(Employee).filter(_matches(term))).all()

    def get_by_department(self, department: str) -> List[Employee]:
        query = self.db.query(Employee).filter(Employee.department == department)
        return _by_name(query).all()

    def departments(self) -> List[str]:
        rows = self.db.query(Employee.department).distinct().order_by(Employee.department).all()
        return [r[0] for r in rows]

    def filter(
        self,
        *,
        search_term: Optional[str] = None,
        department: Optional[str] = None,
        include_inactive: bool = False,
        min_salary=None,
        max_salary=None,
        hire_date_from=None,
        hire_date_to=None,
        sort_by: str = "LastName",
        descending: bool = False,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Employee], int]:
        query = self.db.query(Employee)

        if search_term and search_term.strip():
            query = query.filter(_matches(search_term))
        if department:
            query = query.filter(Employee.department == department)
        if not include_inactive:
            query = query.filter(Employee.is_active.is_(True))
        if min_salary is not None:
            query = query.filter(Employee.salary >= min_salary)
        if max_salary is not None:
            query = query.filter(Employee.salary <= max_salary)
        if hire_date_from is not None:
            query = query.filter(Employee.hire_date >= hire_date_from)
        if hire_date_to is not None:
            query = query.filter(Employee.hire_date <= hire_date_to)

        total = query.count()

        col = SORT_COLUMNS.get(sort_by, Employee.last_name)
        query = query.order_by(col.desc() if descending else col.asc(), Employee.id.asc())
        items = query.offset(offset).limit(limit).all()
        return items, total


def _matches(term: str):
    like = term.lower()
    return or_(
        func.lower(Employee.first_name).contains(like, autoescape=True),
        func.lower(Employee.last_name).contains(like, autoescape=True),
        func.lower(Employee.email).contains(like, autoescape=True),
        func.lower(Employee.department).contains(like, autoescape=True),
        func.lower(Employee.position).contains(like, autoescape=True),
    )
