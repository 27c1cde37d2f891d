"""User schemas for request/response validation"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uuid import UUID


class UserInfo(BaseModel):
    """Public identity of a user"""
    id: UUID
    username: str
    display_name: Optional[str] = None

    class Config:
        from_attributes = True


class UserSearchResult(UserInfo):
    """User search hit"""
    email: Optional[str] = None
    created_at: Optional[datetime] = None
