"""
rbac_platform.auth_service.routers.auth

Public account endpoints.

Responsibilities:
- Register and log in (token issuance).
- Change the caller's password.
- Describe the caller's identity as decoded from the token.

Failures here answer with an `AuthResponse` carrying only `message`
(400 for register/change-password, 401 for login) rather than `{"detail": ...}`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from rbac_platform.auth_service.routers.deps import auth_service_dep
from rbac_platform.auth_service.schemas import Password
from rbac_platform.auth_service.services.auth import AuthService, IssuedToken
from rbac_platform.errors import ServiceError
from rbac_platform.security.deps import get_principal, optional_principal
from rbac_platform.security.models import Principal, describe_principal

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: Password
    full_name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1, max_length=255)
    new_password: Password


class AuthResponse(BaseModel):
    token: str | None = None
    email: str | None = None
    full_name: str | None = None
    roles: str | None = None
    message: str


def _issued(issued: IssuedToken, message: str) -> AuthResponse:
    return AuthResponse(
        token=issued.token,
        email=issued.email,
        full_name=issued.full_name,
        roles=issued.roles,
        message=message,
    )


def _failure(status_code: int, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=AuthResponse(message=exc.message).model_dump(),
    )


@router.post("/register", response_model=AuthResponse, status_code=HTTP_201_CREATED)
async def register(body: RegisterRequest, svc: AuthService = Depends(auth_service_dep)):
    try:
        issued = await svc.register(
            email=body.email, password=body.password, full_name=body.full_name
        )
    except ServiceError as e:
        return _failure(HTTP_400_BAD_REQUEST, e)
    return _issued(issued, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(auth_service_dep)):
    try:
        issued = await svc.login(email=body.email, password=body.password)
    except ServiceError as e:
        return _failure(HTTP_401_UNAUTHORIZED, e)
    return _issued(issued, "Login successful")


@router.post("/change-password", response_model=AuthResponse)
async def change_password(
    body: ChangePasswordRequest,
    principal: Principal = Depends(get_principal),
    svc: AuthService = Depends(auth_service_dep),
):
    if not principal.email:
        return _failure(HTTP_400_BAD_REQUEST, ServiceError("Token has no email claim"))
    try:
        await svc.change_password(
            email=principal.email,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    except ServiceError as e:
        return _failure(HTTP_400_BAD_REQUEST, e)
    return AuthResponse(message="Password changed successfully")


@router.get("/user-info", response_class=PlainTextResponse)
async def user_info(principal: Principal | None = Depends(optional_principal)) -> str:
    return describe_principal(principal)
