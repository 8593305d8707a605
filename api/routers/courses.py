"""Course registry API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List

from api.dependencies import get_booking_service, get_user_id
from api.schemas import CourseResponse, ErrorResponse, RegisterCourseRequest
from booking import BookingService, InvalidFieldError, StoreUnavailableError
from models import Course

router = APIRouter()


def summarize_course(c: Course) -> CourseResponse:
    return CourseResponse(id=c.id, name=c.name, added_by=c.added_by, created_at=c.created_at)


@router.get("", response_model=List[CourseResponse])
async def list_courses(service: BookingService = Depends(get_booking_service)):
    try:
        courses = await service.list_courses()
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    return [summarize_course(c) for c in courses]


@router.post("", response_model=CourseResponse, status_code=201)
async def register_course(
    req: RegisterCourseRequest,
    response: Response,
    user_id: str = Depends(get_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Register a course. An existing name is returned with 200 instead of 201."""
    try:
        course, created = await service.register_course(req.name, user_id)
    except InvalidFieldError as e:
        raise HTTPException(422, ErrorResponse(field=e.field, message=e.message).model_dump())
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    if not created:
        response.status_code = 200
    return summarize_course(course)
