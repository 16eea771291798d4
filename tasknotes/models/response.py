"""
Response models for API replies
"""

from typing import Optional
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error: Optional[str] = None
