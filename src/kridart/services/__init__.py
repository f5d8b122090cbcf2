"""Service layer for the KridArt backend."""

from .chat import ChatConnection, ChatHub
from .rate_limit import FixedWindowRateLimiter
from .storage import LocalBlobStorage
from .tokens import InvalidToken, TokenService

__all__ = [
    "ChatConnection",
    "ChatHub",
    "FixedWindowRateLimiter",
    "InvalidToken",
    "LocalBlobStorage",
    "TokenService",
]
