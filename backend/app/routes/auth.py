"""
AquaGuard Backend — Login Route
=================================

What:  POST /api/login.
How:   Delegates to AuthService; a mismatch raises AuthenticationError,
       which the global handler turns into 401 {success: false, message}.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.common import AuthErrorResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Credentials matched", "model": LoginResponse},
        401: {"description": "Invalid credentials", "model": AuthErrorResponse},
    },
    summary="Check a username/password pair",
    description="Returns the username on success. No session or token is issued.",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.login(db, body.username, body.password)
