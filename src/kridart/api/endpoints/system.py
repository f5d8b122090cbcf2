"""Health endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from kridart.schemas.user import MessageResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=MessageResponse)
async def health_check() -> MessageResponse:
    """Report that the API process is serving requests."""
    return MessageResponse(message="API is healthy")
