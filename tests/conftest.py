from datetime import datetime
from typing import Dict, List, Tuple
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from database.exceptions import CapacityError, NotFoundError
from models import Course, TeeTime


# ================================================================
# In-memory stand-ins for the repositories
# ================================================================

class InMemoryTeeTimes:
    """Mirrors TeeTimeRepositoryDB; claim_spot has no await so it is atomic."""

    def __init__(self):
        self.records: Dict[str, TeeTime] = {}
        self.create_calls = 0

    async def list_tee_times(self) -> List[TeeTime]:
        return list(self.records.values())

    async def get_tee_time(self, tee_time_id: str):
        return self.records.get(tee_time_id)

    async def create_tee_time(self, tee_time: TeeTime) -> TeeTime:
        self.create_calls += 1
        saved = tee_time.model_copy(update={"id": uuid4().hex, "created_at": datetime(2025, 5, 1)})
        self.records[saved.id] = saved
        return saved

    async def claim_spot(self, tee_time_id: str, user_id: str) -> TeeTime:
        current = self.records.get(tee_time_id)
        if current is None:
            raise NotFoundError(tee_time_id)
        if user_id in current.players:
            return current
        if len(current.players) >= current.total_spots:
            raise CapacityError(tee_time_id)
        updated = current.model_copy(update={"players": current.players + [user_id]})
        self.records[tee_time_id] = updated
        return updated


class InMemoryCourses:
    def __init__(self):
        self.records: Dict[str, Course] = {}

    async def list_courses(self) -> List[Course]:
        return list(self.records.values())

    async def register_course(self, course: Course) -> Tuple[Course, bool]:
        if course.name in self.records:
            return self.records[course.name], False
        saved = course.model_copy(update={"id": uuid4().hex})
        self.records[course.name] = saved
        return saved, True


class FakeManager:
    def __init__(self):
        self.app_id = "test-app"
        self.tee_times = InMemoryTeeTimes()
        self.courses = InMemoryCourses()


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def fake_db():
    return FakeManager()


@pytest.fixture
def mock_pool():
    pool = MagicMock()
    conn = AsyncMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool, conn
