"""
Pin endpoints
"""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status

from pinmap.core.dependencies import get_current_user, get_pin_service
from pinmap.core.exceptions import ServiceError
from pinmap.models.user import User
from pinmap.schemas.pin import PinCreate, PinResponse, PinUpdate
from pinmap.services.pin_service import PinService

router = APIRouter(prefix="/pins", tags=["pins"])


@router.post("", response_model=PinResponse, status_code=status.HTTP_201_CREATED)
async def create_pin(
    data: PinCreate,
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Create a new pin"""
    try:
        return PinResponse.from_pin(pins.create_pin(current_user.id, data))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=List[PinResponse])
async def get_my_pins(
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Get all of the current user's pins"""
    return [PinResponse.from_pin(pin) for pin in pins.list_user_pins(current_user.id)]


@router.get("/public", response_model=List[PinResponse])
async def get_public_pins(
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Get the most recent public pins"""
    return [PinResponse.from_pin(pin) for pin in pins.list_public_pins(limit)]


@router.get("/{pin_id}", response_model=PinResponse)
async def get_pin(
    pin_id: UUID,
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Get a pin you own, that is public, or that was shared with you"""
    try:
        return PinResponse.from_pin(pins.get_pin(pin_id, current_user.id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{pin_id}", response_model=PinResponse)
async def update_pin(
    pin_id: UUID,
    data: PinUpdate,
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Update one of your pins"""
    try:
        return PinResponse.from_pin(pins.update_pin(pin_id, current_user.id, data))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{pin_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pin(
    pin_id: UUID,
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Delete one of your pins"""
    try:
        pins.delete_pin(pin_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
