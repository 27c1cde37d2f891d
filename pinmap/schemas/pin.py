"""
Pin and category schemas
"""
from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field

from pinmap.services.memories import decode_notes


class Memory(BaseModel):
    """One entry of a pin's memory list"""
    type: Literal["text", "image"]
    content: str


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$", description="Hex color")
    icon: Optional[str] = Field(default=None, max_length=50)
    is_public: bool = False


class CategoryUpdate(BaseModel):
    """Schema for updating a category"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: Optional[str] = Field(default=None, max_length=50)
    is_public: Optional[bool] = None


class CategorySummary(BaseModel):
    """Category as embedded in a pin"""
    id: UUID
    name: str
    color: Optional[str] = None

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: UUID
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    is_public: bool
    user_id: UUID
    created_at: datetime
    updated_at: Optional[datetime] = None
    pin_count: Optional[int] = None

    class Config:
        from_attributes = True


class PinCreate(BaseModel):
    """Schema for creating a pin"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[str] = Field(default=None, description="URL or base64 data URI")
    is_public: bool = False
    category_id: Optional[UUID] = None


class PinUpdate(BaseModel):
    """Schema for updating a pin; send category_id=null to clear it"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[str] = None
    is_public: Optional[bool] = None
    category_id: Optional[UUID] = None


class PinResponse(BaseModel):
    """Schema for pin response"""
    id: UUID
    title: str
    description: Optional[str] = None
    latitude: float
    longitude: float
    address: Optional[str] = None
    notes: Optional[str] = None
    # Decoded view of notes when they hold a memory list
    memories: Optional[List[Memory]] = None
    image_url: Optional[str] = None
    is_public: bool
    user_id: UUID
    category_id: Optional[UUID] = None
    category: Optional[CategorySummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_pin(cls, pin) -> "PinResponse":
        response = cls.model_validate(pin)
        decoded = decode_notes(pin.notes)
        if decoded is not None:
            response.memories = [
                Memory(**m) for m in decoded
                if m.get("type") in ("text", "image") and isinstance(m.get("content"), str)
            ]
        return response
