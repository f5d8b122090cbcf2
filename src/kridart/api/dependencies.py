"""Shared API dependencies: sessions, process-scoped services and the auth gate."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kridart.core.errors import RateLimited, Unauthenticated
from kridart.db.session import get_db
from kridart.services.rate_limit import FixedWindowRateLimiter
from kridart.services.storage import BlobStorage
from kridart.services.tokens import InvalidToken, TokenService

# Missing or non-bearer Authorization headers yield None instead of an error so
# the gate can answer with its own uniform message.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass(frozen=True)
class Identity:
    """Verified caller for the duration of one request."""

    subject: str


def get_token_service(request: Request) -> TokenService:
    """Return the token service built by the app factory."""
    return request.app.state.token_service


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    """Return the limiter guarding the credential endpoints."""
    return request.app.state.rate_limiter


def get_blob_storage(request: Request) -> BlobStorage:
    """Return the blob storage used for asset uploads."""
    return request.app.state.blob_storage


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
RateLimiterDep = Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)]
BlobStorageDep = Annotated[BlobStorage, Depends(get_blob_storage)]


def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    token_service: TokenService,
) -> Identity:
    """Turn bearer credentials into an :class:`Identity`.

    Raises:
        Unauthenticated: If no token was sent, or if it fails verification
            for any reason. The message does not distinguish expired,
            malformed and mis-signed tokens.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("No token provided")
    try:
        subject = token_service.verify(credentials.credentials)
    except InvalidToken as err:
        raise Unauthenticated("Invalid token") from err
    return Identity(subject=subject)


def require_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    token_service: TokenServiceDep,
) -> Identity:
    """Auth gate applied to every protected route."""
    return authenticate(credentials, token_service)


# Type alias for the verified caller
CurrentIdentityDep = Annotated[Identity, Depends(require_identity)]


def client_key(request: Request) -> str:
    """Return the network address used to key per-client limits."""
    return request.client.host if request.client else "unknown"


def enforce_auth_rate_limit(request: Request, limiter: RateLimiterDep) -> None:
    """Reject the request once its client exceeds the attempt cap."""
    key = client_key(request)
    if not limiter.allow(key):
        raise RateLimited(
            "Too many requests, please try again later.",
            retry_after=limiter.retry_after(key),
        )
