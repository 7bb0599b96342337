from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from models.users import UserRole
from schemas.common import EmailAddress, ORMBase

# Schema for user authentication credentials
class UserLogin(ORMBase):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

# Schema for user registration requests
class UserRegister(ORMBase):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: EmailAddress
    role: UserRole = UserRole.SALES

# Redacted user representation, the password hash is never part of it
class UserResponse(ORMBase):
    id: int
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

# Schema for a successful login
class LoginResponse(ORMBase):
    token: str
    token_type: str = "bearer"
    user: UserResponse

# Schema for JWT payload contents
class TokenData(BaseModel):
    sub: str
    username: str
    email: Optional[str] = None
    role: UserRole
