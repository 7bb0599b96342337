# backend/routes/account.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, Response, status

from config import settings
from models.users import UserRole
from schemas.common import ApiResponse, ok
from schemas.user import UserRegister, UserResponse
from services.auth import AuthService, get_auth_service
from utils.exceptions import AccountInactiveError, UnauthorizedError, validate_form
from utils.sessions import (
    SESSION_USER_ID,
    SESSION_USER_ROLE,
    SESSION_USERNAME,
    SessionStore,
    get_session_store,
    session_id_from,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["Account"])

# Handles session-based sign in for the presentation surface. Identity is kept
# in the server-side session store, never in a bearer token.


def _is_local_url(url: Optional[str]) -> bool:
    return bool(url) and url.startswith("/") and not url.startswith("//") and not url.startswith("/\\")


@router.post("/login")
def login(
    request: Request,
    response: Response,
    username: str = Form(...),
    password: str = Form(...),
    return_url: Optional[str] = Form(None),
    auth: AuthService = Depends(get_auth_service),
    store: SessionStore = Depends(get_session_store),
):
    try:
        user = auth.verify_credentials(username, password)
    except AccountInactiveError:
        raise UnauthorizedError("Your account is deactivated")
    except UnauthorizedError:
        raise UnauthorizedError("Invalid Username or Password")

    # Fresh session id on every sign in
    store.destroy(session_id_from(request))
    session_id = store.create()
    store.set(
        session_id,
        **{
            SESSION_USER_ID: str(user.id),
            SESSION_USERNAME: user.username,
            SESSION_USER_ROLE: user.role.value,
        },
    )
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session_id,
        httponly=True,
        samesite="lax",
    )
    logger.info("Session sign in for '%s'", user.username)

    redirect_to = return_url if _is_local_url(return_url) else "/employees"
    return ok(
        {"id": user.id, "username": user.username, "role": user.role.value, "redirectTo": redirect_to},
        f"Welcome back, {user.username}!",
    )


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    username: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    role: UserRole = Form(UserRole.SALES),
    auth: AuthService = Depends(get_auth_service),
):
    form = validate_form(UserRegister, username=username, email=email, password=password, role=role)
    user = auth.register(form.username, form.password, form.email, form.role)
    return ok(user, "Registration successful!")


@router.post("/logout")
def logout(request: Request, response: Response, store: SessionStore = Depends(get_session_store)):
    store.destroy(session_id_from(request))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return ok(None, "You have been logged out successfully")
