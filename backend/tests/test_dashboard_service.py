from datetime import datetime
from decimal import Decimal

from repositories.employees import EmployeeRepository
from services.dashboard import DashboardService, median

from factories import employee_fields


def test_median_odd_even_and_empty():
    assert median([Decimal(3), Decimal(1), Decimal(2)]) == Decimal(2)
    assert median([Decimal(4), Decimal(1), Decimal(3), Decimal(2)]) == Decimal("2.5")
    assert median([]) == Decimal(0)


def test_summary_counts_and_top_lists(db, employee_service):
    for i in range(7):
        employee_service.create(employee_fields(
            email=f"e{i}@company.com",
            department="Sales" if i % 2 else "Engineering",
            salary=Decimal(1000 * (i + 1)),
            hire_date=datetime(2020, 1, i + 1),
        ))
    employee_service.soft_delete(employee_service.employees.get_by_email("e6@company.com").id)

    summary = DashboardService(EmployeeRepository(db)).summary()

    assert summary.total_employees == 7
    assert summary.active_employees == 6
    assert summary.inactive_employees == 1
    assert summary.total_salary_expense == 21000.0
    assert summary.average_salary == 3500.0
    assert summary.employees_by_department == {"Engineering": 3, "Sales": 3}
    assert [e.email for e in summary.recent_hires] == [f"e{i}@company.com" for i in (5, 4, 3, 2, 1)]
    assert summary.highest_paid_employees[0].salary == 6000.0
    assert len(summary.highest_paid_employees) == 5


def test_summary_of_empty_store(db):
    summary = DashboardService(EmployeeRepository(db)).summary()

    assert summary.total_employees == 0
    assert summary.average_salary == 0.0
    assert summary.recent_hires == []


def test_statistics_whole_company(db, employee_service):
    for i, salary in enumerate(["100", "200", "900"]):
        employee_service.create(employee_fields(email=f"s{i}@company.com", salary=Decimal(salary)))

    stats = DashboardService(EmployeeRepository(db)).statistics()

    assert stats.count == 3
    assert stats.median_salary == 200.0
    assert stats.average_salary == 400.0
    assert stats.min_salary == 100.0
    assert stats.max_salary == 900.0
