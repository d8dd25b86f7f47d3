from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_user, rate_limit_check
from ...services.user_service import UserService
from ...schemas.user import (
    UserCreate, UserLogin, UserResponse, LoginResponse, RefreshTokenRequest
)

router = APIRouter(prefix="/users", tags=["Users"])

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Register a new user."""
    user_service = UserService(db)
    return user_service.user_signup(user_data)

@router.post("/signin", response_model=LoginResponse)
async def signin(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate user and return access tokens."""
    user_service = UserService(db)
    return user_service.user_signin(login_data)

@router.post("/refresh", response_model=LoginResponse)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """Exchange a refresh token for a new token pair."""
    user_service = UserService(db)
    return user_service.refresh_tokens(refresh_data.refresh_token)

@router.get("", response_model=List[UserResponse], dependencies=[Depends(get_current_user)])
async def list_users(db: Session = Depends(get_db)):
    """List all users."""
    user_service = UserService(db)
    return user_service.get_users()
