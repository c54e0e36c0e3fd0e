from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, Request, status

from cocktail_api.core.errors import BusinessLogicError, ExceptionCode
from cocktail_api.core.rate_limiter import rate_limit_ip
from cocktail_api.core.tokens import bearer_token
from cocktail_api.schemas import (
    EmailRequest,
    JoinRequest,
    LoginRequest,
    MemberResponse,
    TasteRequest,
    TokenResponse,
    VerificationResponse,
    VerifyCodeRequest,
)
from cocktail_api.services.member_service import MemberService, normalize_email

router = APIRouter(prefix="/members", tags=["members"])


def _service(request: Request) -> MemberService:
    return request.app.state.member_service


def _token(authorization: Optional[str]) -> str:
    token = bearer_token(authorization)
    if not token:
        raise BusinessLogicError(ExceptionCode.INVALID_TOKEN, "Missing bearer token")
    return token


@router.post("/emails/verification-requests", status_code=status.HTTP_202_ACCEPTED)
def send_verification_email(request: Request, body: EmailRequest):
    rate_limit_ip(request, "members:verify-email", limit=5, window_seconds=300)
    _service(request).send_verification_email(body.email)
    return {"email": normalize_email(body.email)}


@router.post("/emails/verifications", response_model=VerificationResponse)
def verify_code(request: Request, body: VerifyCodeRequest):
    result = _service(request).verify_code(body.email, body.code)
    return VerificationResponse(result=result)


@router.post("/join", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def join(request: Request, body: JoinRequest):
    member = _service(request).register_member(body)
    return MemberResponse.model_validate(member)


@router.post("/login", response_model=TokenResponse)
def login(request: Request, body: LoginRequest):
    rate_limit_ip(request, "members:login", limit=10, window_seconds=60)
    token = _service(request).login(body.email, body.password)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=MemberResponse)
def me(request: Request, authorization: Optional[str] = Header(None)):
    member = _service(request).lookup_by_token(_token(authorization))
    return MemberResponse.model_validate(member)


@router.patch("/me/taste", response_model=MemberResponse)
def update_taste(request: Request, body: TasteRequest, authorization: Optional[str] = Header(None)):
    member = _service(request).update_taste(_token(authorization), body.taste)
    return MemberResponse.model_validate(member)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def withdraw(request: Request, authorization: Optional[str] = Header(None)):
    _service(request).withdraw(_token(authorization))
