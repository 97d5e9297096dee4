"""
Input validation schemas using Pydantic for records sent to the inventory API.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union
from datetime import datetime

from kitchen.domain.WasteEvent import WasteReason


class WasteEventInput(BaseModel):
    """Schema for a waste registration."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    ingredient_id: Union[int, str] = Field(..., alias="ingredientId")
    ingredient_name: Optional[str] = Field(None, alias="ingredientName", max_length=100)
    quantity: float = Field(..., gt=0, le=100000)
    unit: str = Field("kg", min_length=1, max_length=20)
    reason: WasteReason
    details: Optional[str] = Field(None, max_length=500)
    timestamp: Optional[datetime] = None

    @field_validator('reason', mode='before')
    @classmethod
    def normalize_reason(cls, v):
        """Accept reason tags regardless of case/surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('ingredient_name', 'details')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace; blank becomes None."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def to_payload(self) -> dict:
        """camelCase body as the inventory API expects it."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class StockItemInput(BaseModel):
    """Schema for creating or editing a stock item."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    current_stock: float = Field(..., alias="currentStock", ge=0)
    minimum_stock: float = Field(0, alias="minimumStock", ge=0)
    unit: str = Field(..., min_length=1, max_length=20)

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError('Value cannot be blank')
        return v
