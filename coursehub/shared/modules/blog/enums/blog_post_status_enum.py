from enum import Enum

class BlogPostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
