from .course_repo import CourseRepositoryDB
from .tee_time_repo import TeeTimeRepositoryDB

__all__ = ["CourseRepositoryDB", "TeeTimeRepositoryDB"]
