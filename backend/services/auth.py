# backend/services/auth.py
import logging
from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserRole
from repositories.users import UserRepository
from schemas.user import LoginResponse, UserResponse
from utils.exceptions import AccountInactiveError, ConflictError, NotFoundError, UnauthorizedError
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import TokenService, get_token_service

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and account management on top of the credential store."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def register(self, username: str, password: str, email: str, role: UserRole) -> UserResponse:
        if self.users.username_exists(username):
            logger.warning("Registration rejected, username '%s' taken", username)
            raise ConflictError("Username already exists.")
        if self.users.email_exists(email):
            logger.warning("Registration rejected, email '%s' taken", email)
            raise ConflictError("Email already exists.")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            is_active=True,
        )
        user = self.users.create(user)
        logger.info("Registered user %s (%s)", user.id, user.username)
        return UserResponse.model_validate(user)

    def verify_credentials(self, username: str, password: str) -> User:
        """Credential check shared by the token API and the session login."""
        user = self.users.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for '%s'", username)
            raise UnauthorizedError("Invalid username or password")
        if not user.is_active:
            logger.warning("Login attempt on inactive account '%s'", username)
            raise AccountInactiveError("User account is not active")
        return user

    def login(self, username: str, password: str) -> LoginResponse:
        user = self.verify_credentials(username, password)
        token = self.tokens.create_access_token(user)
        return LoginResponse(token=token, user=UserResponse.model_validate(user))

    def list_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.users.get_all()]

    def _get(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_user(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(self._get(user_id))

    def update_role(self, user_id: int, role: UserRole) -> UserResponse:
        user = self._get(user_id)
        user.role = role
        user = self.users.update(user)
        logger.info("User %s role set to %s", user.id, user.role.value)
        return UserResponse.model_validate(user)

    def update_status(self, user_id: int, is_active: bool) -> UserResponse:
        user = self._get(user_id)
        user.is_active = is_active
        user = self.users.update(user)
        logger.info("User %s active=%s", user.id, user.is_active)
        return UserResponse.model_validate(user)


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserRepository(db), tokens)
