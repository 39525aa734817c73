"""
Health check: liveness only, never touches the database
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

HEALTH_MESSAGE = "This is a health check"


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    return HEALTH_MESSAGE
