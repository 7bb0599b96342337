# backend/schemas/employee.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from schemas.common import EmailAddress, ORMBase


# Shared base attributes for employee records
class EmployeeBase(ORMBase):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailAddress
    phone: str = Field("", max_length=25)
    department: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    salary: Decimal = Field(..., ge=0)
    hire_date: datetime


# Schema for creating a new employee
class EmployeeCreate(EmployeeBase):
    pass


# Full overwrite used by the edit form, is_active included
class EmployeeReplace(EmployeeBase):
    is_active: bool = True


# Schema for partial employee updates
class EmployeeUpdate(ORMBase):
    """All fields optional. Only the fields present in the request body are applied;
    presence is read from ``model_fields_set``, so an omitted field and a field
    explicitly sent with its default value are told apart."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailAddress] = None
    phone: Optional[str] = Field(None, max_length=25)
    department: Optional[str] = Field(None, min_length=1, max_length=100)
    position: Optional[str] = Field(None, min_length=1, max_length=100)
    salary: Optional[Decimal] = Field(None, ge=0)
    hire_date: Optional[datetime] = None
    is_active: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Full employee representation including ID and lifecycle stamps
class EmployeeResponse(ORMBase):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    department: str
    position: str
    salary: float
    hire_date: datetime
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    full_name: str


# Filter, sort and paging criteria for the employee list view
class EmployeeFilter(ORMBase):
    search_term: Optional[str] = None
    department: Optional[str] = None
    include_inactive: bool = False
    min_salary: Optional[Decimal] = None
    max_salary: Optional[Decimal] = None
    hire_date_from: Optional[datetime] = None
    hire_date_to: Optional[datetime] = None
    page_number: int = 1
    page_size: int = 10
    sort_by: str = "LastName"
    sort_order: str = "asc"


# Paginated response for employee listings
class EmployeePage(ORMBase):
    items: List[EmployeeResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    search_term: Optional[str] = None
    department: Optional[str] = None
    include_inactive: bool = False
