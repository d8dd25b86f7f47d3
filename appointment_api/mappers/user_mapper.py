"""Projections of stored users into the shapes returned to clients."""

from ..models.user import User
from ..schemas.user import LoginResponse, UserResponse


def map_user_to_user_response(user: User) -> UserResponse:
    """Public view of a user; the password hash is never copied."""
    return UserResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone_number=user.phone_number,
        address=user.address,
        is_active=user.is_active,
        is_verified=user.is_verified,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def user_login_response(user: User, access_token: str, refresh_token: str) -> LoginResponse:
    return LoginResponse(
        id=user.id,
        name=f"{user.first_name} {user.last_name}",
        access_token=access_token,
        refresh_token=refresh_token,
    )
