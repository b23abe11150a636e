from datetime import datetime, timezone
import uuid
from pydantic import BaseModel, ConfigDict, Field
from shared.modules.blog.enums.blog_post_status_enum import BlogPostStatus


class BlogPost(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    post_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    slug: str
    content: str
    author_id: str
    status: BlogPostStatus = BlogPostStatus.DRAFT

    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
