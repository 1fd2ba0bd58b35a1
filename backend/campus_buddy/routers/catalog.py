"""Interest and course catalog API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_buddy.database import get_db
from campus_buddy.dependencies import require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.catalog import CourseOut, InterestOut
from campus_buddy.schemas.session import Identity
from campus_buddy.services import catalog_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/interests/", response_model=list[InterestOut], tags=["Interests"])
def list_interests(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    return catalog_service.list_interests(db)


@router.get("/users/{user_id}/interests", response_model=list[InterestOut], tags=["Interests"])
def user_interests(user_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Interests a user has picked, by name."""
    return unwrap(catalog_service.interests_for_user(db, user_id))


@router.post(
    "/users/me/interests/{interest_id}",
    response_model=InterestOut,
    status_code=status.HTTP_201_CREATED,
    tags=["Interests"],
)
def pick_interest(interest_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    return unwrap(catalog_service.pick_interest(db, identity, interest_id))


@router.get("/courses/", response_model=list[CourseOut], tags=["Courses"])
def list_courses(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    return catalog_service.list_courses(db)


@router.get("/users/{user_id}/courses", response_model=list[CourseOut], tags=["Courses"])
def user_courses(user_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Courses a user is enrolled in, by code."""
    return unwrap(catalog_service.courses_for_user(db, user_id))


@router.post(
    "/users/me/courses/{course_id}",
    response_model=CourseOut,
    status_code=status.HTTP_201_CREATED,
    tags=["Courses"],
)
def enrol(course_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    return unwrap(catalog_service.enrol(db, identity, course_id))
