"""
User endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from pinmap.core.dependencies import get_current_user, get_friendship_service
from pinmap.core.exceptions import ServiceError
from pinmap.models.user import User
from pinmap.schemas.user import UserInfo, UserSearchResult
from pinmap.services.friendship_service import FriendshipService

router = APIRouter()


@router.get("/me", response_model=UserInfo)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's identity"""
    return current_user


@router.get("/search", response_model=List[UserSearchResult])
async def search_users(
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Search for users by username, email or display name"""
    try:
        return friendships.search_users(q, current_user.id, limit=limit)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
