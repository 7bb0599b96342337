# backend/utils/principal.py
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import Request

from models.users import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated identity, regardless of how it was established."""
    id: int
    username: str
    role: UserRole


class Authenticator(Protocol):
    """One authentication strategy (bearer token, server-side session, ...)."""

    def authenticate(self, request: Request) -> Optional[Principal]:
        ...
