from pydantic import BaseModel, ConfigDict, PlainSerializer
from typing import Annotated, Optional
from decimal import Decimal
import uuid

# Prices travel as JSON numbers, not strings
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Product(BaseModel):
    """Product as owned by the downstream store. The id is assigned on creation."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: Price
    stock: int = 0
