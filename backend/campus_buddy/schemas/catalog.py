"""Pydantic schemas for the interest and course catalogs."""
from typing import Optional
from pydantic import BaseModel


class InterestOut(BaseModel):
    interest_id: int
    name: str

    model_config = {"from_attributes": True}


class CourseOut(BaseModel):
    course_id: int
    code: str
    title: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
