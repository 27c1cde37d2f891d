"""
Sharing schemas - share requests, grant listings and items shared with me
"""
from datetime import datetime
from typing import Optional, List, Union
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from pinmap.schemas.pin import Memory, PinResponse, CategoryResponse
from pinmap.schemas.user import UserInfo


class PinPayload(BaseModel):
    """
    Client-side copy of a pin, sent along with a share.

    Used to create the pin on the server when it was never synced
    (sync-on-share), and to attach memories to it.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    lat: Optional[Union[float, str]] = None
    lon: Optional[Union[float, str]] = None
    formatted: Optional[str] = Field(default=None, description="Formatted address")
    notes: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    category: Optional[str] = Field(default=None, description="Category name")
    memories: List[Memory] = Field(default_factory=list)


class SharePinRequest(BaseModel):
    """Share a pin with friends"""
    to_user_ids: List[UUID] = Field(default_factory=list)
    pin_data: Optional[PinPayload] = None


class ShareAllFriendsRequest(BaseModel):
    """Share a pin with every friend"""
    pin_data: Optional[PinPayload] = None


class ShareCategoryRequest(BaseModel):
    """Share a category with friends"""
    to_user_ids: List[UUID] = Field(default_factory=list)


class ShareResponse(BaseModel):
    """Number of targets that now hold a grant"""
    count: int


class GrantInfo(BaseModel):
    """One grantee of a pin or category"""
    id: UUID
    user: UserInfo
    shared_at: datetime


class GrantListResponse(BaseModel):
    """Who a resource is shared with"""
    shares: List[GrantInfo]


class SharedPinItem(PinResponse):
    """Pin shared with the current user"""
    shared_by: UserInfo
    shared_at: datetime
    type: str = "pin"


class SharedCategoryItem(CategoryResponse):
    """Category shared with the current user, with its pins"""
    pins: List[PinResponse] = Field(default_factory=list)
    shared_by: UserInfo
    shared_at: datetime
    type: str = "category"


class SharedWithMeResponse(BaseModel):
    """Everything granted to the current user"""
    pins: List[SharedPinItem]
    categories: List[SharedCategoryItem]
