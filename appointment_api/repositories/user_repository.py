from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.exceptions import AppError
from ..models.user import User

class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_existing_user(self, email: str) -> Optional[User]:
        """Find a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, data: dict) -> Optional[User]:
        """Insert a user; ``data`` must already carry the hashed password.

        A concurrent signup that wins the race on the unique email index
        surfaces here as a conflict.
        """
        user = User(**data)

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AppError.conflict(f"User with email {data.get('email')} already exists")
        self.db.refresh(user)

        return user

    def fetch_users(self) -> List[User]:
        """All users, oldest first."""
        return self.db.query(User).order_by(User.created_at, User.id).all()
