# backend/schemas/dashboard.py
from typing import Dict, List

from schemas.common import ORMBase
from schemas.employee import EmployeeResponse


# === Dashboard schemas ===

class DashboardSummary(ORMBase):
    total_employees: int
    active_employees: int
    inactive_employees: int
    average_salary: float
    total_salary_expense: float
    employees_by_department: Dict[str, int]
    recent_hires: List[EmployeeResponse]
    highest_paid_employees: List[EmployeeResponse]


class DashboardView(ORMBase):
    summary: DashboardSummary
    page_views: int
    total_app_requests: int


class SalaryStatistics(ORMBase):
    count: int
    average_salary: float
    median_salary: float
    min_salary: float
    max_salary: float
