"""Authentication API endpoints backed by Supabase Auth"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr

from app import config
from app.api.dependencies import get_session_authority
from app.middleware.auth import extract_bearer_token, get_optional_user, get_token_verifier
from app.models.identity import Identity, SessionTokens
from app.services.auth import (
    IdentityAuthorityError,
    LocalTokenVerifier,
    SupabaseIdentityAuthority,
    decode_unverified,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class CredentialsRequest(BaseModel):
    email: EmailStr
    password: str


class CodeExchangeRequest(BaseModel):
    code: str
    code_verifier: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class VerifyTokenRequest(BaseModel):
    token: str


def set_session_cookies(response: Response, session: SessionTokens) -> None:
    response.set_cookie(
        config.ACCESS_TOKEN_COOKIE,
        session.access_token,
        max_age=config.ACCESS_TOKEN_MAX_AGE,
        httponly=True,
        secure=config.is_production(),
        samesite="lax",
    )
    if session.refresh_token:
        response.set_cookie(
            config.REFRESH_TOKEN_COOKIE,
            session.refresh_token,
            max_age=config.REFRESH_TOKEN_MAX_AGE,
            httponly=True,
            secure=config.is_production(),
            samesite="lax",
        )


def session_payload(session: SessionTokens) -> dict:
    return {"access_token": session.access_token, "expires_at": session.expires_at}


@router.post("/signup")
async def sign_up(
    request: CredentialsRequest,
    authority: SupabaseIdentityAuthority = Depends(get_session_authority),
):
    try:
        user = await authority.sign_up(request.email, request.password)
    except IdentityAuthorityError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "message": "User created successfully. Please check your email for verification.",
        "user": user,
    }


@router.post("/signin")
async def sign_in(
    request: CredentialsRequest,
    response: Response,
    authority: SupabaseIdentityAuthority = Depends(get_session_authority),
):
    try:
        user, session = await authority.sign_in_with_password(request.email, request.password)
    except IdentityAuthorityError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if session is None:
        raise HTTPException(status_code=400, detail="No session returned for this account")

    set_session_cookies(response, session)
    return {
        "message": "Signed in successfully",
        "user": user,
        "session": session_payload(session),
    }


@router.post("/google")
async def google_sign_in(authority: SupabaseIdentityAuthority = Depends(get_session_authority)):
    try:
        url = await authority.oauth_url("google", config.OAUTH_REDIRECT_URL)
    except IdentityAuthorityError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"url": url}


@router.post("/callback")
async def oauth_callback(
    request: CodeExchangeRequest,
    response: Response,
    authority: SupabaseIdentityAuthority = Depends(get_session_authority),
):
    """Exchange an OAuth authorization code for a session"""
    try:
        user, session = await authority.exchange_code_for_session(request.code, request.code_verifier)
    except IdentityAuthorityError as e:
        raise HTTPException(status_code=400, detail=str(e))

    set_session_cookies(response, session)
    return {
        "message": "Authentication successful",
        "user": user,
        "session": session_payload(session),
    }


@router.post("/signout")
async def sign_out(
    request: Request,
    response: Response,
    authority: SupabaseIdentityAuthority = Depends(get_session_authority),
):
    if request.cookies.get(config.ACCESS_TOKEN_COOKIE):
        try:
            await authority.sign_out()
        except IdentityAuthorityError as e:
            # Cookies are cleared regardless
            logger.warning(f"Remote sign out failed: {e}")

    response.delete_cookie(config.ACCESS_TOKEN_COOKIE)
    response.delete_cookie(config.REFRESH_TOKEN_COOKIE)
    return {"message": "Signed out successfully"}


@router.get("/user")
async def get_user(request: Request, user: Optional[Identity] = Depends(get_optional_user)):
    """Identity behind the session cookie or bearer token"""
    if user is None:
        detail = "No access token" if extract_bearer_token(request) is None else "Invalid or expired token"
        raise HTTPException(status_code=401, detail=detail)
    return {"user": user}


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    http_request: Request,
    authority: SupabaseIdentityAuthority = Depends(get_session_authority),
):
    redirect_to = f"{str(http_request.base_url).rstrip('/')}/reset-password"
    try:
        await authority.reset_password_for_email(request.email, redirect_to)
    except IdentityAuthorityError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Password reset email sent"}


@router.post("/verify-jwt")
async def verify_jwt(
    request: VerifyTokenRequest,
    verifier: LocalTokenVerifier = Depends(get_token_verifier),
):
    """Check a token against the local secret (diagnostics)"""
    result = verifier.verify(request.token)

    if not result.ok:
        return JSONResponse(
            status_code=401,
            content=jsonable_encoder({
                "error": "Invalid token",
                "details": result.reason,
                "decoded": decode_unverified(request.token),
            }),
        )

    return {
        "message": "Token is valid",
        "user": result.identity,
    }
