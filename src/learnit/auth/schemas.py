"""Pydantic models for auth payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str
    role: str = "student"
    is_super_admin: bool = False
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == "admin" or self.is_super_admin


class AuthSession(BaseModel):
    token: str
    user: User
