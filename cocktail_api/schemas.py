"""Request/response bodies for the member endpoints."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cocktail_api.domain.member import EmailVerificationResult, LoginType, Role


class EmailRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class VerifyCodeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    code: str


class VerificationResponse(BaseModel):
    result: EmailVerificationResult


class JoinRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    # omitted for federated sign-ups
    password: Optional[str] = None
    name: Optional[str] = None
    birth: Optional[date] = None
    phone: Optional[str] = None
    gender: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TasteRequest(BaseModel):
    taste: str


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    name: Optional[str] = None
    birth: Optional[date] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    role: Optional[Role] = None
    login_type: Optional[LoginType] = None
    taste: Optional[str] = None
