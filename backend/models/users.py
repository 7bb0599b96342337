# backend/models/users.py
import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from database import Base


# Closed set of roles a user account can hold
class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    MARKETING = "Marketing"
    SALES = "Sales"
    ACCOUNTING = "Accounting"


# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda e: [r.value for r in e], name="userrole"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
