"""Anonymous session endpoint."""

import logging
from uuid import uuid4

from fastapi import APIRouter

from api.schemas import SessionResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SessionResponse, status_code=201)
async def start_session():
    """Issue an opaque user id. Clients send it back as X-User-Id."""
    user_id = uuid4().hex
    logger.debug("Issued anonymous session %s", user_id)
    return SessionResponse(user_id=user_id)
