from typing import Any, Dict, Optional
from pydantic import BaseModel


class CompatibilityRequest(BaseModel):
    # Raw values; range checks happen in services.validation so both sides
    # can report their own error
    year1: Optional[Any] = None
    year2: Optional[Any] = None


class ValidationErrorResponse(BaseModel):
    success: bool = False
    errors: Dict[str, str]


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
