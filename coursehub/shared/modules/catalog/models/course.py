from datetime import datetime, timezone
import uuid
from pydantic import BaseModel, ConfigDict, Field
from shared.modules.catalog.enums.course_type_enum import CourseType


class Course(BaseModel):
    """
    A course offered by exactly one school.
    """
    model_config = ConfigDict(use_enum_values=True)

    course_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    school_id: str
    name: str
    type: CourseType
    duration_weeks: int
    price: float
    visa_included: bool = False

    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
