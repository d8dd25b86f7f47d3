from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from typing import Optional
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.database import get_db, get_redis
from ..core.exceptions import AppError
from ..core.security import security, verify_token, TokenPayload
from ..models.user import User
from ..repositories.user_repository import UserRepository

async def get_current_user_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Extract and verify the access token from the Authorization header."""
    if credentials is None:
        raise AppError.unauthorized("Not authenticated")

    token_payload = verify_token(credentials.credentials)
    if not token_payload:
        raise AppError.unauthorized("Invalid or expired token")

    return token_payload

async def get_current_user(
    token_payload: TokenPayload = Depends(get_current_user_token),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from database."""
    user = UserRepository(db).get_user_by_id(token_payload.sub)
    if not user:
        raise AppError.unauthorized("User not found")

    if not user.is_active:
        raise AppError.unauthorized("User account is deactivated")

    return user

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Fixed-window rate limiting for account endpoints."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.RATE_LIMIT_WINDOW_SECONDS, 1)
        return

    if int(current_requests) >= settings.RATE_LIMIT_REQUESTS:
        raise AppError.too_many_requests()
    redis_client.incr(key)
