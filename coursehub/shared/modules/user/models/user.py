from datetime import datetime, timezone
import uuid
from pydantic import BaseModel, ConfigDict, Field
from shared.modules.user.enums.user_role_enum import UserRole


class User(BaseModel):
    """
    Admin panel account. Only ``admin`` users may call the write endpoints.
    """
    model_config = ConfigDict(use_enum_values=True)

    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    email: str
    hashed_password: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
