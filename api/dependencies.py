from typing import Optional

from fastapi import Header, HTTPException, Request

from booking import BookingService
from database.db_manager import DatabaseManager


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise HTTPException(503, "Database not ready.")
    return manager


def get_booking_service(request: Request) -> BookingService:
    return BookingService(get_db(request))


def get_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    """The caller's anonymous session id, issued by POST /api/session."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(401, "Missing X-User-Id header. Start a session first.")
    return x_user_id.strip()


def get_optional_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> Optional[str]:
    return x_user_id.strip() if x_user_id and x_user_id.strip() else None
