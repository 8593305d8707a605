from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.live import SnapshotFeed, SnapshotHub
from database.repositories import CourseRepositoryDB, TeeTimeRepositoryDB
from database.exceptions import (
    CapacityError,
    DatabaseError,
    IntegrityError,
    NotFoundError,
)

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "SnapshotFeed",
    "SnapshotHub",
    "CourseRepositoryDB",
    "TeeTimeRepositoryDB",
    "CapacityError",
    "DatabaseError",
    "IntegrityError",
    "NotFoundError",
]
