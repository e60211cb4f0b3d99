"""Auth request payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=256)


class RegisterForm(LoginForm):
    name: Optional[str] = Field(default=None, max_length=80)


__all__ = ["LoginForm", "RegisterForm"]
