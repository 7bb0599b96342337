import os
import random
import sys
from datetime import datetime, timedelta
from decimal import Decimal

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from repositories.employees import EmployeeRepository
from schemas.employee import EmployeeCreate
from services.employees import EmployeeService
from utils.exceptions import ConflictError

# Configuration
LIMIT_EMPLOYEES = 50
HIRE_DATE_START = datetime(2015, 1, 1)
# End Configuration

FIRST_NAMES = ["Anna", "Ben", "Carla", "David", "Elif", "Farid", "Grace", "Hugo", "Ines", "Jonas", "Kofi", "Lena"]
LAST_NAMES = ["Adams", "Brown", "Costa", "Diaz", "Evans", "Fischer", "Garcia", "Hansen", "Ivanova", "Jensen"]

# Department -> (positions, salary range)
DEPARTMENTS = {
    "Engineering": (["Software Engineer", "QA Engineer", "Team Lead"], (55000, 140000)),
    "Marketing": (["Marketing Specialist", "Content Writer"], (40000, 90000)),
    "Sales": (["Account Executive", "Sales Manager"], (42000, 110000)),
    "Accounting": (["Accountant", "Controller"], (45000, 100000)),
    "HR": (["HR Generalist", "Recruiter"], (38000, 80000)),
}


def sample_employee(i: int, rng: random.Random) -> EmployeeCreate:
    first = rng.choice(FIRST_NAMES)
    last = rng.choice(LAST_NAMES)
    department = rng.choice(list(DEPARTMENTS))
    positions, (low, high) = DEPARTMENTS[department]
    hired = HIRE_DATE_START + timedelta(days=rng.randint(0, 365 * 10))
    return EmployeeCreate(
        first_name=first,
        last_name=last,
        email=f"{first.lower()}.{last.lower()}{i}@company.com",
        phone=f"+1-555-{rng.randint(1000, 9999)}",
        department=department,
        position=rng.choice(positions),
        salary=Decimal(rng.randrange(low, high, 500)),
        hire_date=hired,
    )


def load_sample_employees(limit: int = LIMIT_EMPLOYEES, seed: int = 42) -> int:
    """Insert synthetic employee records; existing emails are skipped."""
    init_db()
    session = SessionLocal()
    rng = random.Random(seed)
    created = 0
    try:
        service = EmployeeService(EmployeeRepository(session))
        for i in range(limit):
            try:
                employee = service.create(sample_employee(i, rng))
            except ConflictError:
                continue
            # Roughly one in ten leaves the company
            if rng.random() < 0.1:
                service.soft_delete(employee.id)
            created += 1
    finally:
        session.close()
    return created


if __name__ == "__main__":
    count = load_sample_employees()
    print(f"Inserted {count} employees.")
