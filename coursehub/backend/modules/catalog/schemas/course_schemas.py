# backend/modules/catalog/schemas/course_schemas.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared.modules.catalog.enums.course_type_enum import CourseType


class CourseCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    school_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    type: CourseType
    duration_weeks: int = Field(..., gt=0, le=104)
    price: float = Field(..., ge=0)
    visa_included: bool = False


class CourseUpdate(BaseModel):
    # school_id is immutable; move a course by deleting and re-creating it
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[CourseType] = None
    duration_weeks: Optional[int] = Field(None, gt=0, le=104)
    price: Optional[float] = Field(None, ge=0)
    visa_included: Optional[bool] = None
    version: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def fields_not_null(self):
        for field in self.model_fields_set:
            if field != "version" and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
