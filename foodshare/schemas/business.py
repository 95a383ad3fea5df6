"""
Pydantic schemas for Business validation and serialization
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BusinessCreate(BaseModel):
    """Schema for registering a donor business"""
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1, max_length=100, description="Restaurant, Supermarché, Boulangerie, Théâtre...")
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=300)
    photo_url: Optional[str] = Field(None, max_length=500)
    collection_instructions: Optional[str] = None
    is_active: bool = True


class BusinessUpdateRequest(BaseModel):
    """
    Schema for updating business information.
    All fields are optional - only send what you want to update.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=300)
    photo_url: Optional[str] = Field(None, max_length=500)
    collection_instructions: Optional[str] = None
    is_active: Optional[bool] = None


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BusinessResponse(BaseModel):
    """Schema for business data in responses"""
    id: str
    name: str
    type: str
    description: Optional[str] = None
    address: Optional[str] = None
    photo_url: Optional[str] = None
    collection_instructions: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
