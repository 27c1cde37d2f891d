"""
Social and friends schemas
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel

from pinmap.schemas.user import UserInfo


class FriendRequestCreate(BaseModel):
    """Create friend request"""
    friend_id: UUID


class FriendRequestResponse(BaseModel):
    """Friend request response"""
    id: UUID
    user_id: UUID
    friend_id: UUID
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FriendWithRequestInfo(BaseModel):
    """Friend with request metadata"""
    friend: UserInfo
    friendship_id: UUID
    since: datetime


class FriendRequestWithUser(BaseModel):
    """Pending request with the other party's info"""
    request_id: UUID
    user: UserInfo
    created_at: datetime


class FriendListResponse(BaseModel):
    """Response with list of friends"""
    friends: List[FriendWithRequestInfo]
    total_count: int


class PendingRequestsResponse(BaseModel):
    """Response with pending friend requests"""
    incoming: List[FriendRequestWithUser]
    outgoing: List[FriendRequestWithUser]
    incoming_count: int
    outgoing_count: int


class FriendActionResponse(BaseModel):
    """Response after friend action (accept/reject/remove)"""
    success: bool
    message: str
    friendship_id: Optional[UUID] = None
