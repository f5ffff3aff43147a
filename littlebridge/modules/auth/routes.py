from fastapi import APIRouter, Depends, Response
from littlebridge.config import settings
from littlebridge.core.dependencies import get_auth_service, get_current_user
from littlebridge.modules.auth.schemas import (
    SignUpRequest, SignInRequest, EmailRequest, AuthResponse, MessageResponse, Account
)
from littlebridge.modules.auth.service import AuthService
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: Optional[str]):
    if not token:
        return
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.auth_cookie_max_age,
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def sign_up(
    data: SignUpRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new account with a role"""
    account, token = service.sign_up(data)
    _set_auth_cookie(response, token)
    return {"user": account}


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    data: SignInRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in and receive the auth cookie"""
    account, token = service.sign_in(data)
    _set_auth_cookie(response, token)
    return {"user": account}


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    service.sign_out()
    response.delete_cookie(settings.auth_cookie_name)
    return {"message": "Signed out"}


@router.get("/me", response_model=AuthResponse)
async def me(
    current_user: Dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Current account with its role-specific profile"""
    account: Account = service.get_account(current_user)
    return {"user": account}


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: EmailRequest,
    service: AuthService = Depends(get_auth_service)
):
    service.send_password_reset(data.email)
    return {"message": "If an account exists for this e-mail, a reset link has been sent"}


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    data: EmailRequest,
    service: AuthService = Depends(get_auth_service)
):
    service.resend_verification(data.email)
    return {"message": "Verification e-mail sent"}
