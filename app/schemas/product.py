"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for the product endpoints.

The request schema only coerces JSON types. Field rules (required, length,
range, precision) are applied by ProductValidator so they hold for every
caller, not only HTTP clients.

==============================================================================
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt


# Prices travel as JSON numbers, not strings
JsonDecimal = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ProductRequest(BaseModel):
    """
    Product create/update payload.

    Every field is optional at the schema level so missing values reach
    the validator and are reported with their own message. Unknown keys,
    including ``id``, are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Product name")
    description: Optional[str] = Field(default=None, description="Product description")
    price: Optional[Decimal] = Field(default=None, description="Unit price")
    stock: Optional[StrictInt] = Field(default=None, description="Units on hand (JSON integer)")


class ProductResponse(BaseModel):
    """Product as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    price: JsonDecimal
    stock: int
