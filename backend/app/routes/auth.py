"""
VeggieFresh Admin API — Auth Route Handlers
=============================================

Endpoints:
    POST /api/admin/auth/login    (public)  email + password → token pair
    POST /api/admin/auth/refresh  (public)  refresh token → new token pair
    GET  /api/admin/auth/me       (admin)   current admin profile
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_admin
from app.models.user import User
from app.schemas.auth import AdminLoginRequest, AdminProfile, AuthTokens, RefreshTokenRequest
from app.schemas.common import DataResponse, ErrorResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=DataResponse[AuthTokens],
    responses={
        400: {"description": "Invalid request body", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
    },
    summary="Admin login",
)
async def admin_login(
    body: AdminLoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[AuthTokens]:
    tokens = await auth_service.login(db, email=body.email, password=body.password)
    return DataResponse[AuthTokens](data=tokens)


@router.post(
    "/refresh",
    response_model=DataResponse[AuthTokens],
    responses={401: {"description": "Invalid refresh token", "model": ErrorResponse}},
    summary="Exchange a refresh token for a new token pair",
)
async def refresh_tokens(
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[AuthTokens]:
    tokens = await auth_service.refresh(db, body.refresh_token)
    return DataResponse[AuthTokens](data=tokens)


@router.get(
    "/me",
    response_model=DataResponse[AdminProfile],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
    },
    summary="Current admin profile",
)
async def get_admin_profile(
    admin: User = Depends(get_current_admin),
) -> DataResponse[AdminProfile]:
    return DataResponse[AdminProfile](
        data=AdminProfile(user=auth_service.to_admin_user(admin))
    )
