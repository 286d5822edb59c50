from fastapi import APIRouter, HTTPException, status
import logging

from ..auth import authenticate, create_access_token
from ..schemas import LoginRequest, Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest):
    if not authenticate(credentials.username, credentials.password):
        logger.warning("Failed login attempt for username=%s", credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("Issued access token for username=%s", credentials.username)
    return Token(access_token=create_access_token(credentials.username))
