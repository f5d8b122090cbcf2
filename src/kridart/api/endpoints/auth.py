"""Registration and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kridart.api.dependencies import SessionDep, TokenServiceDep, enforce_auth_rate_limit
from kridart.core.errors import InvalidCredentials, StoreError, ValidationError
from kridart.core.security import MAX_PASSWORD_BYTES, hash_password, verify_password
from kridart.core.settings import settings
from kridart.repositories.user_repo import UserRepository
from kridart.schemas.user import CredentialsRequest, LoginResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["authentication"],
    dependencies=[Depends(enforce_auth_rate_limit)],
)


def _require_credentials(payload: CredentialsRequest) -> tuple[str, str]:
    username = (payload.username or "").strip()
    password = payload.password or ""
    if not username or not password:
        raise ValidationError("Username and password are required")
    return username, password


@router.post(
    "/register",
    summary="Create an account",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
)
def register_user(payload: CredentialsRequest, db: SessionDep) -> MessageResponse:
    """Hash the password and store a new account."""
    username, password = _require_credentials(payload)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    password_hash = hash_password(password, rounds=settings.bcrypt_rounds)
    try:
        user = UserRepository(db).create(username=username, password_hash=password_hash)
    except IntegrityError as err:
        raise ValidationError("Username already exists") from err
    except SQLAlchemyError as err:
        raise StoreError("Registration failed", detail=str(err)) from err

    logger.info("Registered user %s", user.id)
    return MessageResponse(message="User registered")


@router.post(
    "/login",
    summary="Exchange credentials for a bearer token",
    response_model=LoginResponse,
)
def login_user(
    payload: CredentialsRequest,
    db: SessionDep,
    token_service: TokenServiceDep,
) -> LoginResponse:
    """Verify the password and issue a token for the account."""
    username, password = _require_credentials(payload)
    try:
        user = UserRepository(db).get_by_username(username)
    except SQLAlchemyError as err:
        raise StoreError("Login failed", detail=str(err)) from err

    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid credentials")

    return LoginResponse(token=token_service.issue(user.id))
