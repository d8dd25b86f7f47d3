from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi.security import HTTPBearer
from pydantic import BaseModel

from .config import settings

# Password hashing
BCRYPT_ROUNDS = 10
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# JWT Security
security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

class TokenPayload(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    exp: Optional[int] = None
    token_type: Optional[str] = None  # "access" or "refresh"

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

# JWT utilities
def _signing_key(token_type: str) -> str:
    if token_type == REFRESH_TOKEN_TYPE:
        return settings.REFRESH_SECRET_KEY
    return settings.SECRET_KEY

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "token_type": ACCESS_TOKEN_TYPE
    })

    return jwt.encode(
        to_encode,
        _signing_key(ACCESS_TOKEN_TYPE),
        algorithm=settings.ALGORITHM
    )

def create_refresh_token(data: dict) -> str:
    """Create JWT refresh token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    to_encode.update({
        "exp": expire,
        "token_type": REFRESH_TOKEN_TYPE
    })

    return jwt.encode(
        to_encode,
        _signing_key(REFRESH_TOKEN_TYPE),
        algorithm=settings.ALGORITHM
    )

def verify_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Optional[TokenPayload]:
    """Verify and decode a JWT of the given type.

    Returns ``None`` when the signature, expiry or token type does not check out.
    """
    try:
        payload = jwt.decode(
            token,
            _signing_key(token_type),
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    token_payload = TokenPayload(**payload)
    if token_payload.token_type != token_type or not token_payload.sub:
        return None
    return token_payload

def token_claims(user_id: str, email: str) -> dict:
    """Claims shared by access and refresh tokens."""
    return {"sub": user_id, "email": email}
