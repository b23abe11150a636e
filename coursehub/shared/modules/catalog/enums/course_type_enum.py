from enum import Enum

class CourseType(str, Enum):
    GENERAL = "general"
    INTENSIVE = "intensive"
    EXAM_PREPARATION = "exam_preparation"
    BUSINESS = "business"
    PRIVATE = "private"
    SUMMER = "summer"
    ONLINE = "online"
