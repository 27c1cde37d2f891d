"""
Category endpoints
"""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status

from pinmap.core.dependencies import get_current_user, get_category_service, get_pin_service
from pinmap.core.exceptions import ServiceError
from pinmap.models.user import User
from pinmap.schemas.pin import CategoryCreate, CategoryResponse, CategoryUpdate, PinResponse
from pinmap.services.category_service import CategoryService
from pinmap.services.pin_service import PinService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service)
):
    """Create a new category"""
    return categories.to_response(categories.create_category(current_user.id, data))


@router.get("", response_model=List[CategoryResponse])
async def get_my_categories(
    current_user: User = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service)
):
    """Get the current user's categories with pin counts"""
    return [categories.to_response(c) for c in categories.list_user_categories(current_user.id)]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service)
):
    """Get a category you own, that is public, or that was shared with you"""
    try:
        return categories.to_response(categories.get_category(category_id, current_user.id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{category_id}/pins", response_model=List[PinResponse])
async def get_category_pins(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    pins: PinService = Depends(get_pin_service)
):
    """Get the pins of a category that you can read"""
    return [PinResponse.from_pin(pin) for pin in pins.list_category_pins(category_id, current_user.id)]


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service)
):
    """Update one of your categories"""
    try:
        return categories.to_response(categories.update_category(category_id, current_user.id, data))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service)
):
    """Delete one of your categories; its pins become uncategorized"""
    try:
        categories.delete_category(category_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
