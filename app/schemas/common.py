"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base model exchanged with the UI in camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class SuccessResponse(BaseModel):
    """Plain acknowledgement"""
    success: bool = True

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Any] = None
