from passlib.context import CryptContext
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Optional
import logging
import jwt
from fastapi import Header, HTTPException, status

from .config import settings

logger = logging.getLogger(__name__)

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache
def operator_password_hash() -> str:
    """Hash of the operator password; an explicit AUTH_PASSWORD_HASH wins over AUTH_PASSWORD."""
    if settings.AUTH_PASSWORD_HASH:
        return settings.AUTH_PASSWORD_HASH
    return hash_password(settings.AUTH_PASSWORD)


def authenticate(username: str, password: str) -> bool:
    if username != settings.AUTH_USERNAME:
        return False
    return verify_password(password, operator_password_hash())


def create_access_token(username: str) -> str:
    now = datetime.utcnow()
    payload = {
        "sub": username,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER,
    )


def require_auth(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> str:
    """
    FastAPI dependency guarding every protected route.

    Returns:
        The username carried in the token's ``sub`` claim

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid or expired
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = authorization.split(" ", 1)[1].strip()
    try:
        data = decode_access_token(token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    username = data.get("sub")
    if not username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return username
