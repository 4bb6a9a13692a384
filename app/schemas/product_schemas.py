from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Any, List, Optional
from app.models.product import Price
from uuid import UUID


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Widget",
                "description": "A small widget",
                "price": 29.99,
                "stock": 100,
            }
        }
    )

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Price = Field(gt=0)
    stock: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("name_required", "Name is required")
        return value


class ProductResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: Price
    stock: int


class ResultEnvelope(BaseModel):
    """Documents the success envelope returned by every product endpoint."""

    isSuccess: bool
    error: str
    statusCode: int
    value: Optional[Any] = None


class ProductEnvelope(ResultEnvelope):
    value: Optional[ProductResponse] = None


class ProductListEnvelope(ResultEnvelope):
    value: Optional[List[ProductResponse]] = None


class ProblemDetails(BaseModel):
    type: str
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    isSuccess: bool = False
    error: str
    statusCode: int
