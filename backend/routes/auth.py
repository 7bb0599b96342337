# backend/routes/auth.py
from typing import List

from fastapi import APIRouter, Body, Depends, status

from models.users import UserRole
from schemas.common import ApiResponse, ok
from schemas.user import LoginResponse, UserLogin, UserRegister, UserResponse
from services.auth import AuthService, get_auth_service
from utils.principal import Principal
from utils.tokenJWT import get_current_principal

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# Register a new user
@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, auth: AuthService = Depends(get_auth_service)):
    user = auth.register(payload.username, payload.password, payload.email, payload.role)
    return ok(user, "User Registered Successfully")


# Authenticate user and issue JWT token
@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(payload: UserLogin, auth: AuthService = Depends(get_auth_service)):
    return ok(auth.login(payload.username, payload.password), "Login Successful")


# Retrieve all users ordered by username
@router.get("/users", response_model=ApiResponse[List[UserResponse]])
def get_all_users(
    auth: AuthService = Depends(get_auth_service),
    current: Principal = Depends(get_current_principal),
):
    return ok(auth.list_users(), "Users retrieved successfully")


@router.get("/users/{user_id}", response_model=ApiResponse[UserResponse])
def get_user(
    user_id: int,
    auth: AuthService = Depends(get_auth_service),
    current: Principal = Depends(get_current_principal),
):
    return ok(auth.get_user(user_id), "User retrieved successfully")


# Body is the bare JSON role value, e.g. "Sales"
@router.put("/users/{user_id}/role", response_model=ApiResponse[UserResponse])
def update_user_role(
    user_id: int,
    role: UserRole = Body(...),
    auth: AuthService = Depends(get_auth_service),
    current: Principal = Depends(get_current_principal),
):
    user = auth.update_role(user_id, role)
    return ok(user, f"User {user.username} role updated to {user.role.value}")


# Body is a bare JSON boolean
@router.put("/users/{user_id}/status", response_model=ApiResponse[UserResponse])
def update_user_status(
    user_id: int,
    is_active: bool = Body(...),
    auth: AuthService = Depends(get_auth_service),
    current: Principal = Depends(get_current_principal),
):
    user = auth.update_status(user_id, is_active)
    state = "activated" if user.is_active else "deactivated"
    return ok(user, f"User {user.username} {state}")


# Identity carried by the presented token
@router.get("/me", response_model=ApiResponse[UserResponse])
def me(
    auth: AuthService = Depends(get_auth_service),
    current: Principal = Depends(get_current_principal),
):
    return ok(auth.get_user(current.id), "Current user")
