# backend/services/dashboard.py
from collections import Counter
from decimal import Decimal
from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from repositories.employees import EmployeeRepository
from schemas.dashboard import DashboardSummary, SalaryStatistics
from schemas.employee import EmployeeResponse

# Size of the "recent hires" and "highest paid" lists
TOP_N = 5


def median(values: List[Decimal]) -> Decimal:
    if not values:
        return Decimal(0)
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def _mean(values: List[Decimal]) -> Decimal:
    return sum(values, Decimal(0)) / len(values) if values else Decimal(0)


class DashboardService:
    """Headcount and salary figures computed over the employee store."""

    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    def summary(self) -> DashboardSummary:
        everyone = self.employees.get_all(include_inactive=True)
        active = [e for e in everyone if e.is_active]
        salaries = [Decimal(e.salary) for e in active]

        recent = sorted(active, key=lambda e: e.hire_date, reverse=True)[:TOP_N]
        best_paid = sorted(active, key=lambda e: e.salary, reverse=True)[:TOP_N]

        return DashboardSummary(
            total_employees=len(everyone),
            active_employees=len(active),
            inactive_employees=len(everyone) - len(active),
            average_salary=float(_mean(salaries)),
            total_salary_expense=float(sum(salaries, Decimal(0))),
            employees_by_department=dict(Counter(e.department for e in active)),
            recent_hires=[EmployeeResponse.model_validate(e) for e in recent],
            highest_paid_employees=[EmployeeResponse.model_validate(e) for e in best_paid],
        )

    def statistics(self, department: str = "") -> SalaryStatistics:
        if department:
            rows = self.employees.get_by_department(department)
        else:
            rows = self.employees.get_all(include_inactive=True)
        salaries = [Decimal(e.salary) for e in rows]

        return SalaryStatistics(
            count=len(salaries),
            average_salary=float(_mean(salaries)),
            median_salary=float(median(salaries)),
            min_salary=float(min(salaries)) if salaries else 0.0,
            max_salary=float(max(salaries)) if salaries else 0.0,
        )


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(EmployeeRepository(db))
