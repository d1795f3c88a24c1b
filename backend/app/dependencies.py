"""
VeggieFresh Admin API — Request Dependencies
==============================================

What:  `get_current_admin`, the bearer-token guard used by every protected
       router.
How:   Extracts the token, verifies it, loads the user with the request's
       session and checks the admin role.

Usage:
    router = APIRouter(
        prefix="/api/admin/products",
        dependencies=[Depends(get_current_admin)],
    )
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import AuthenticationError, AuthorizationError
from app.models.user import User
from app.security import ACCESS_TOKEN, decode_token
from app.services.auth_service import auth_service

# auto_error=False: a missing header is reported through our own envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Returns the authenticated admin user.

    Raises:
        AuthenticationError: no token, invalid/expired token, user deleted
        AuthorizationError: user is not an admin
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Access token required")

    payload = decode_token(credentials.credentials, expected_type=ACCESS_TOKEN)

    user = await auth_service.get_user(db, payload["userId"])
    if user is None:
        raise AuthenticationError(message="User not found")
    if not user.is_admin:
        raise AuthorizationError(message="Admin access required")
    return user
