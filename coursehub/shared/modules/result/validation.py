from typing import List
from pydantic import ValidationError


def format_validation_errors(exc: ValidationError) -> List[str]:
    """Flatten pydantic errors into "field: message" strings for API responses."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages
