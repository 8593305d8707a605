"""Tee time API endpoints."""

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from api.dependencies import get_booking_service, get_optional_user_id, get_user_id
from api.schemas import CreateTeeTimeRequest, ErrorResponse, PlayerResponse, TeeTimeResponse
from booking import (
    BookingService,
    InvalidFieldError,
    PastTeeTimeError,
    StoreUnavailableError,
    TeeTimeFullError,
    TeeTimeNotFoundError,
)
from booking.views import short_player_id, tee_time_state
from models import TeeTime

router = APIRouter()


def summarize_tee_time(
    t: TeeTime, user_id: Optional[str], now: Optional[datetime] = None
) -> TeeTimeResponse:
    """Project a TeeTime into the card a given user sees."""
    players = [
        PlayerResponse(id=p, display=short_player_id(p), is_you=p == user_id)
        for p in t.players
    ]
    return TeeTimeResponse(
        id=t.id,
        course=t.course,
        date=t.date,
        time=t.time,
        total_spots=t.total_spots,
        creator_id=t.creator_id,
        created_at=t.created_at,
        players=players,
        **tee_time_state(t, user_id, now),
    )


@router.get("", response_model=List[TeeTimeResponse])
async def list_tee_times(
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: BookingService = Depends(get_booking_service),
):
    try:
        tee_times = await service.list_tee_times()
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    now = datetime.now()
    return [summarize_tee_time(t, user_id, now) for t in tee_times]


@router.post("", response_model=TeeTimeResponse, status_code=201)
async def create_tee_time(
    req: CreateTeeTimeRequest,
    user_id: str = Depends(get_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Post a new tee time. The caller takes the first spot."""
    try:
        created = await service.create_tee_time(
            course=req.course,
            date=req.date,
            time=req.time,
            total_spots=req.total_spots,
            creator_id=user_id,
        )
    except InvalidFieldError as e:
        raise HTTPException(422, ErrorResponse(field=e.field, message=e.message).model_dump())
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    return summarize_tee_time(created, user_id)


@router.post("/{tee_time_id}/claim", response_model=TeeTimeResponse)
async def claim_spot(
    tee_time_id: str,
    user_id: str = Depends(get_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Claim one open spot. Repeat claims by the same user change nothing."""
    try:
        updated = await service.claim_spot(tee_time_id, user_id)
    except TeeTimeNotFoundError as e:
        raise HTTPException(404, str(e))
    except TeeTimeFullError as e:
        raise HTTPException(409, str(e))
    except PastTeeTimeError as e:
        raise HTTPException(400, str(e))
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    return summarize_tee_time(updated, user_id)
