"""Generic API response schemas"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Any


class CamelModel(BaseModel):
    """Base for public payloads: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain message response"""
    message: str


class ErrorResponse(BaseModel):
    """Generic API error response"""
    success: bool = False
    error: str
    details: Optional[Any] = None
    path: Optional[str] = None
    timestamp: str

