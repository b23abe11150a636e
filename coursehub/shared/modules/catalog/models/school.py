from typing import Optional, List
from datetime import datetime, timezone
import uuid
from pydantic import BaseModel, ConfigDict, Field
from shared.modules.catalog.enums.school_status_enum import SchoolStatus


class School(BaseModel):
    """
    A language school listed in the catalog.
    Shared between the store adapter, the read services and the admin services.
    """
    model_config = ConfigDict(use_enum_values=True)  # Store enums as plain strings for Mongo/Redis

    school_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    slug: str
    city: str
    country: str
    description: str = ""
    founded_year: Optional[int] = None
    rating: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    logo: Optional[str] = None
    status: SchoolStatus = SchoolStatus.ACTIVE

    # Lowest price among the school's courses, kept up to date by course writes
    price_from: Optional[float] = None

    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
