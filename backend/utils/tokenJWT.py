# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.users import User
from schemas.user import TokenData
from utils.exceptions import UnauthorizedError
from utils.principal import Principal

logger = logging.getLogger(__name__)

# Authorization scheme, errors are raised by us to keep the response envelope
bearer_scheme = HTTPBearer(auto_error=False)


class TokenService:
    """Issues and validates signed, time-limited bearer tokens."""

    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int, issuer: str, audience: str):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, conf=settings) -> "TokenService":
        return cls(
            secret_key=conf.SECRET_KEY,
            algorithm=conf.ALGORITHM,
            expire_minutes=conf.ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=conf.JWT_ISSUER,
            audience=conf.JWT_AUDIENCE,
        )

    # Generate a new JWT access token for the given user
    def create_access_token(self, user: User, expires_delta: timedelta = None, issued_at: datetime = None) -> str:
        now = issued_at or datetime.utcnow()
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": _role_value(user.role),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenData:
        """Verify signature, expiry, issuer and audience; return the identity claims."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
            return TokenData.model_validate(payload)
        except (JWTError, PydanticValidationError) as e:
            logger.info("Rejected bearer token: %s", e)
            raise UnauthorizedError("Invalid or expired token")


def _role_value(role) -> str:
    return getattr(role, "value", role)


token_service = TokenService.from_settings()


def get_token_service() -> TokenService:
    return token_service


class BearerTokenAuthenticator:
    """API strategy: identity comes from a validated bearer token only."""

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate_token(self, token: Optional[str]) -> Principal:
        if not token:
            raise UnauthorizedError("Missing bearer token")
        data = self.tokens.decode(token)
        return Principal(id=int(data.sub), username=data.username, role=data.role)

    def authenticate(self, request: Request) -> Optional[Principal]:
        header = request.headers.get("Authorization") or ""
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return None
        try:
            return self.authenticate_token(token)
        except UnauthorizedError:
            return None


# Retrieve the currently authenticated principal based on the JWT token
def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    token = credentials.credentials if credentials else None
    return BearerTokenAuthenticator(tokens).authenticate_token(token)
