"""
Sharing API endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException

from pinmap.core.dependencies import get_current_user, get_sharing_service
from pinmap.core.exceptions import ServiceError
from pinmap.models.user import User
from pinmap.schemas.sharing import (
    GrantListResponse,
    ShareAllFriendsRequest,
    ShareCategoryRequest,
    SharePinRequest,
    ShareResponse,
    SharedWithMeResponse,
)
from pinmap.services.sharing_service import SharingService

router = APIRouter(prefix="/share", tags=["sharing"])


@router.get("", response_model=SharedWithMeResponse)
async def get_shared_with_me(
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Get all pins and categories shared with the current user"""
    return sharing.list_granted_to_me(current_user.id)


@router.post("/pin/{pin_id}", response_model=ShareResponse)
async def share_pin(
    pin_id: str,
    request: SharePinRequest,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """
    Share a pin with friends.

    ``pin_id`` may be a client-side id: when the pin is unknown and
    ``pin_data`` is sent, the pin is created first.
    """
    try:
        result = sharing.share_pin(pin_id, current_user.id, request.to_user_ids, request.pin_data)
        return ShareResponse(count=result.count)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/pin/{pin_id}/all-friends", response_model=ShareResponse)
async def share_pin_with_all_friends(
    pin_id: str,
    request: ShareAllFriendsRequest,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Share a pin with every friend"""
    try:
        result = sharing.share_with_all_friends(pin_id, current_user.id, request.pin_data)
        return ShareResponse(count=result.count)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/pin/{pin_id}", response_model=GrantListResponse)
async def get_pin_shares(
    pin_id: UUID,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Get who a pin is shared with"""
    try:
        return sharing.get_pin_grants(pin_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/pin/{pin_id}/{to_user_id}")
async def unshare_pin(
    pin_id: UUID,
    to_user_id: UUID,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Unshare a pin from a user"""
    try:
        sharing.unshare_pin(pin_id, current_user.id, to_user_id)
        return {"message": "Pin unshared successfully"}
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/category/{category_id}", response_model=ShareResponse)
async def share_category(
    category_id: UUID,
    request: ShareCategoryRequest,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Share a category with friends"""
    try:
        result = sharing.share_category(category_id, current_user.id, request.to_user_ids)
        return ShareResponse(count=result.count)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/category/{category_id}", response_model=GrantListResponse)
async def get_category_shares(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Get who a category is shared with"""
    try:
        return sharing.get_category_grants(category_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/category/{category_id}/{to_user_id}")
async def unshare_category(
    category_id: UUID,
    to_user_id: UUID,
    current_user: User = Depends(get_current_user),
    sharing: SharingService = Depends(get_sharing_service)
):
    """Unshare a category from a user"""
    try:
        sharing.unshare_category(category_id, current_user.id, to_user_id)
        return {"message": "Category unshared successfully"}
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
