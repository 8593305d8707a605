from .base import BaseBookingModel
from .course import Course
from .tee_time import MAX_GROUP_SIZE, TeeTime, parse_time_of_day

__all__ = ["BaseBookingModel", "Course", "MAX_GROUP_SIZE", "TeeTime", "parse_time_of_day"]
