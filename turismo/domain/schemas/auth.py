"""Pydantic schemas for User and Auth."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from turismo.domain.schemas.base import CamelModel


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_role(cls, data: Any) -> Any:
        # Older backends send a bare isAdmin flag instead of a role
        if not isinstance(data, dict):
            return data
        data = dict(data)
        legacy_flag = data.pop("isAdmin", data.pop("is_admin", None))
        role = data.get("role")
        if role is None and legacy_flag is not None:
            data["role"] = Role.ADMIN if legacy_flag else Role.USER
        elif isinstance(role, str):
            data["role"] = role.upper()
        return data

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class TokenResponse(CamelModel):
    token: str
    user: UserRead


class SessionRead(CamelModel):
    user: Optional[UserRead] = None
    loading: bool
    is_authenticated: bool
    is_admin: bool


class RoleUpdate(BaseModel):
    role: Role
