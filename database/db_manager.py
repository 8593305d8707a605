import asyncpg

from database.live import SnapshotFeed, SnapshotHub
from database.repositories import CourseRepositoryDB, TeeTimeRepositoryDB


class DatabaseManager:
    """
    Entry point to the booking store for one app namespace.

    Holds the repositories and live feeds that share a single pool. The
    pool's lifecycle belongs to whoever created it (the API lifespan);
    this object is handed to the code that needs store access.
    """

    def __init__(self, pool: asyncpg.Pool, app_id: str) -> None:
        self.app_id = app_id
        self.courses = CourseRepositoryDB(pool, app_id)
        self.tee_times = TeeTimeRepositoryDB(pool, app_id)
        self.live = SnapshotHub(
            pool,
            app_id,
            {
                "tee_times": SnapshotFeed("tee_times", self.tee_times.list_tee_times),
                "courses": SnapshotFeed("courses", self.courses.list_courses),
            },
        )
