"""WebSocket live feeds.

On connect the client receives the full collection; after that it gets the
full collection again whenever anything in it changes. The subscription
ends when the socket closes.
"""

import logging
from datetime import datetime
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from typing import List, Optional

from api.routers.courses import summarize_course
from api.routers.tee_times import summarize_tee_time
from booking.views import sort_courses, sort_tee_times
from models import Course, TeeTime

router = APIRouter()
logger = logging.getLogger(__name__)


async def _hold_open(websocket: WebSocket, unsubscribe) -> None:
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live client disconnected")
    finally:
        unsubscribe()


@router.websocket("/tee-times")
async def tee_times_feed(websocket: WebSocket, user_id: Optional[str] = Query(None)):
    manager = websocket.app.state.db_manager
    await websocket.accept()

    async def push(snapshot: List[TeeTime]) -> None:
        now = datetime.now()
        await websocket.send_json([
            summarize_tee_time(t, user_id, now).model_dump(mode="json")
            for t in sort_tee_times(snapshot)
        ])

    unsubscribe = await manager.live.tee_times.subscribe(push)
    await _hold_open(websocket, unsubscribe)


@router.websocket("/courses")
async def courses_feed(websocket: WebSocket):
    manager = websocket.app.state.db_manager
    await websocket.accept()

    async def push(snapshot: List[Course]) -> None:
        await websocket.send_json([
            summarize_course(c).model_dump(mode="json") for c in sort_courses(snapshot)
        ])

    unsubscribe = await manager.live.courses.subscribe(push)
    await _hold_open(websocket, unsubscribe)
