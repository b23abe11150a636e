# backend/modules/blog/schemas/blog_schemas.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shared.modules.blog.enums.blog_post_status_enum import BlogPostStatus
from shared.modules.common.slugs import is_valid_slug


def _validate_slug(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_slug(value.strip()):
        raise ValueError("slug must be lowercase letters, digits and single hyphens")
    return value.strip() if value else value


class BlogPostCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=300)
    slug: Optional[str] = None
    content: str = Field(..., min_length=1)
    status: BlogPostStatus = BlogPostStatus.DRAFT

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _validate_slug(value)


class BlogPostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=300)
    slug: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    status: Optional[BlogPostStatus] = None
    version: Optional[int] = Field(None, ge=1)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _validate_slug(value)

    @model_validator(mode="after")
    def fields_not_null(self):
        for field in self.model_fields_set:
            if field != "version" and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
