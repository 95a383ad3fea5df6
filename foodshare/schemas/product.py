"""
Pydantic schemas for Product validation and serialization
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class ProductCategory(str, Enum):
    BOULANGERIE = "Boulangerie"
    PLATS = "Plats"
    LEGUMES = "Légumes"
    FRUITS = "Fruits"
    BOISSONS = "Boissons"
    DESSERTS = "Desserts"
    AUTRES = "Autres"


# Upper bound for stock and donation quantities
MAX_UNITS = 1_000_000


class ExpiryStatus(str, Enum):
    EXPIRED = "expired"
    TODAY = "today"
    TOMORROW = "tomorrow"
    LATER = "later"


def normalize_price(value) -> str:
    """Parse a unit price into a two-decimal string, rejecting negatives"""
    if isinstance(value, bool):
        raise ValueError("Price must be a decimal number")
    if isinstance(value, (int, float)):
        value = str(value)
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValueError("Price must be a decimal number")
    if not price.is_finite():
        raise ValueError("Price must be a decimal number")
    if price < 0:
        raise ValueError("Price cannot be negative")
    try:
        return str(price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError("Price is out of range")


# ============================================================================
# Request Schemas
# ============================================================================

class ProductCreate(BaseModel):
    """Request model for adding a product to the catalog"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: ProductCategory = Field(..., description="Boulangerie, Plats, Légumes, Fruits, Boissons, Desserts, Autres")
    unit_price: str = Field(..., description="Unit price as a decimal string, e.g. '4.50'")
    current_stock: int = Field(0, ge=0, le=MAX_UNITS)
    expiry_date: Optional[datetime] = None
    photo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("unit_price", mode="before")
    @classmethod
    def validate_unit_price(cls, v):
        return normalize_price(v)


class ProductUpdate(BaseModel):
    """Request model for updating a product"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    unit_price: Optional[str] = None
    current_stock: Optional[int] = Field(None, ge=0, le=MAX_UNITS)
    expiry_date: Optional[datetime] = None
    photo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("unit_price", mode="before")
    @classmethod
    def validate_unit_price(cls, v):
        if v is None:
            return v
        return normalize_price(v)


# ============================================================================
# Response Schemas
# ============================================================================

class ProductResponse(BaseModel):
    """Response model for product data with computed expiry fields"""
    id: str
    business_id: str
    name: str
    description: Optional[str] = None
    category: str
    unit_price: str
    current_stock: int
    expiry_date: Optional[datetime] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    days_until_expiry: Optional[int] = None
    expiry_status: Optional[ExpiryStatus] = None
