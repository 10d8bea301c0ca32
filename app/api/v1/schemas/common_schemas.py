"""Response envelope shared by all endpoints."""
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard response envelope."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: List[str] = []
