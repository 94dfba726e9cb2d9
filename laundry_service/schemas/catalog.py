"""
Pydantic schemas for the laundry catalog
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str]
    emoji: Optional[str]
    display_order: Optional[int]
    
    model_config = ConfigDict(from_attributes=True)


class ItemResponse(BaseModel):
    id: str
    category_id: Optional[str]
    name: str
    emoji: str
    item_type: Optional[str]
    display_order: Optional[int]
    
    model_config = ConfigDict(from_attributes=True)


class ServiceTypeResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    emoji: Optional[str]
    display_order: Optional[int]
    
    model_config = ConfigDict(from_attributes=True)


class ItemPriceResponse(BaseModel):
    """Price row enriched with item and service names"""
    id: str
    item_id: Optional[str]
    service_type_id: Optional[str]
    price: float
    item_name: str = "Unknown"
    service_name: str = "Unknown"


class PriceUpdate(BaseModel):
    """Schema for changing a catalog price"""
    price: float = Field(..., ge=0, description="New price")
