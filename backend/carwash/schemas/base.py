"""
Base schemas shared by every endpoint: strict bases, money fields and
the paginated envelope.
"""

from decimal import Decimal
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

T = TypeVar("T")

# Decimal in, float out
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class StrictModel(BaseModel):
    """Response DTO base: forbid extras, read from ORM attributes."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, from_attributes=True)


class StrictRequestModel(BaseModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)


class PageResponse(BaseModel, Generic[T]):
    """Standard paginated response for list endpoints."""

    items: List[T] = Field(description="Items on this page")
    total: int = Field(description="Total number of items", ge=0)
    page: int = Field(default=1, description="Current page number", ge=1)
    pages: int = Field(description="Total number of pages", ge=0)

    model_config = ConfigDict(from_attributes=True)


class StatusResponse(BaseModel):
    """Simple status response for actions without a body."""

    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None


class CountResponse(BaseModel):
    count: int = Field(..., ge=0)
