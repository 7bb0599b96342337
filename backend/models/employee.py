# backend/models/employee.py
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from database import Base

# Model Employee
# Profile, compensation and lifecycle flags of a single employee record.
# is_active is the soft-delete flag; a permanent delete removes the row.
class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)

    # Unique across active and inactive rows, compared case-sensitively.
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(100), nullable=False, default="")

    department = Column(String(100), nullable=False, index=True)
    position = Column(String(100), nullable=False)

    salary = Column(Numeric(18, 2), CheckConstraint("salary >= 0"), nullable=False, default=0)
    hire_date = Column(DateTime, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
