# backend/modules/catalog/schemas/school_schemas.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shared.modules.catalog.enums.school_status_enum import SchoolStatus
from shared.modules.common.slugs import is_valid_slug


def _validate_slug(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not is_valid_slug(value):
        raise ValueError("slug must be lowercase letters, digits and single hyphens")
    return value


class SchoolCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = None
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    rating: Optional[float] = Field(None, ge=0, le=5)
    images: List[str] = Field(default_factory=list)
    logo: Optional[str] = None
    status: SchoolStatus = SchoolStatus.ACTIVE

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _validate_slug(value)


class SchoolUpdate(BaseModel):
    """
    Partial update. ``version`` enables optimistic concurrency: when sent, the
    update is rejected if the school changed since that version was read.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = None
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    rating: Optional[float] = Field(None, ge=0, le=5)
    images: Optional[List[str]] = None
    logo: Optional[str] = None
    status: Optional[SchoolStatus] = None
    version: Optional[int] = Field(None, ge=1)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _validate_slug(value)

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in ("name", "slug", "city", "country", "status", "images"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
