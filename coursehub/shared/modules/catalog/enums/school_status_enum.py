from enum import Enum

class SchoolStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
