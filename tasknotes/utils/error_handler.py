"""
Error handling utilities
"""

from typing import Optional
from pydantic import ValidationError as PydanticValidationError
from tasknotes.models.response import ErrorResponse
from tasknotes.config.constants import MSG_INVALID_DATA, MSG_TASK_NOT_FOUND, MSG_SERVER_ERROR
from tasknotes.utils.logger import logger


class TaskNotesError(Exception):
    """Base exception for application errors"""
    status_code: int = 500
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(TaskNotesError):
    """Missing or empty required field, or a value outside its enumeration"""
    status_code = 400


class NotFoundError(TaskNotesError):
    """Unknown task id"""
    status_code = 404
    
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' not found")


class StoreError(TaskNotesError):
    """Underlying persistence failure"""
    status_code = 500


class ClientError(TaskNotesError):
    """Failed request made by the API client"""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def describe_validation_error(error: PydanticValidationError) -> str:
    """
    Collapse pydantic errors into one readable line
    
    Args:
        error: Pydantic validation error
        
    Returns:
        Message like "title: Value error, title must not be empty"
    """
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "body"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts) or str(error)


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return response body for the caller
    
    Args:
        error: Exception to handle
        
    Returns:
        ErrorResponse with user-friendly message
    """
    if isinstance(error, ValidationError):
        logger.warning(f"Validation failed: {error.message}")
        return ErrorResponse(message=MSG_INVALID_DATA, error=error.message)
    
    if isinstance(error, NotFoundError):
        logger.warning(f"Lookup failed: {error.message}")
        return ErrorResponse(message=MSG_TASK_NOT_FOUND)
    
    logger.error(f"Error occurred: {error}", exc_info=error)
    
    if isinstance(error, StoreError):
        return ErrorResponse(message=MSG_SERVER_ERROR, error=error.message)
    
    # Generic error message
    return ErrorResponse(message=MSG_SERVER_ERROR)


def status_code_for(error: Exception) -> int:
    """HTTP status code for an exception"""
    if isinstance(error, TaskNotesError) and error.status_code:
        return error.status_code
    return 500


def format_error_message(error: Exception) -> str:
    """
    Format error message for user
    
    Args:
        error: Exception to format
        
    Returns:
        User-friendly error message
    """
    if isinstance(error, ClientError):
        return error.message
    
    error_response = handle_error(error)
    if error_response.error:
        return f"{error_response.message}: {error_response.error}"
    return error_response.message
