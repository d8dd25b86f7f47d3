from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..core.exceptions import AppError
from ..core.security import (
    get_password_hash, verify_password, create_access_token,
    create_refresh_token, verify_token, token_claims, REFRESH_TOKEN_TYPE
)
from ..mappers.user_mapper import map_user_to_user_response, user_login_response
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserCreate, UserLogin, UserResponse, LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

class UserService:
    def __init__(self, db: Session, repository: Optional[UserRepository] = None):
        self.db = db
        self.repository = repository or UserRepository(db)

    def user_signup(self, payload: UserCreate) -> UserResponse:
        """Register a new user."""
        existing_user = self.repository.get_existing_user(payload.email)
        if existing_user:
            raise AppError.conflict(f"User with email {payload.email} already exists")

        data = payload.model_dump()
        data["password"] = get_password_hash(payload.password)

        user = self.repository.create_user(data)
        if not user:
            raise AppError.internal("User could not be created")

        logger.info(f"User {user.id} signed up")
        return map_user_to_user_response(user)

    def user_signin(self, payload: UserLogin) -> LoginResponse:
        """Authenticate user and return tokens."""
        user = self.repository.get_existing_user(payload.email)
        if not user:
            logger.warning(f"Failed signin for unknown email {payload.email}")
            raise AppError.unauthorized(INVALID_CREDENTIALS)

        if not verify_password(payload.password, user.password):
            logger.warning(f"Failed signin for user {user.id}")
            raise AppError.unauthorized(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} signed in")
        return self._issue_tokens(user)

    def refresh_tokens(self, refresh_token: str) -> LoginResponse:
        """Issue a new token pair from a valid refresh token."""
        token_payload = verify_token(refresh_token, REFRESH_TOKEN_TYPE)
        if not token_payload:
            raise AppError.unauthorized("Invalid or expired refresh token")

        user = self.repository.get_user_by_id(token_payload.sub)
        if not user or not user.is_active:
            raise AppError.unauthorized("User not found or inactive")

        return self._issue_tokens(user)

    def get_users(self) -> List[UserResponse]:
        users = self.repository.fetch_users()
        if users is None:
            raise AppError.not_found("Users could not be fetched")

        return [map_user_to_user_response(user) for user in users]

    def _issue_tokens(self, user: User) -> LoginResponse:
        claims = token_claims(user.id, user.email)
        access_token = create_access_token(claims)
        refresh_token = create_refresh_token(claims)

        return user_login_response(user, access_token, refresh_token)
