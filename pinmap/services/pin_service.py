"""
Pin service - CRUD for a user's own pins and access-checked reads
"""
import logging
from typing import List, Optional
from uuid import UUID

from pinmap.core.config import settings
from pinmap.core.exceptions import NotFoundError, ValidationFailedError
from pinmap.models.pin import Pin
from pinmap.schemas.pin import PinCreate, PinUpdate
from pinmap.services.access_service import AccessResolver
from pinmap.store import PinStore

logger = logging.getLogger(__name__)


class PinService:
    """Service for pin operations"""

    def __init__(self, store: PinStore, access: Optional[AccessResolver] = None):
        self.store = store
        self.access = access or AccessResolver(store)

    def _check_category(self, user_id: UUID, category_id: Optional[UUID]) -> None:
        """A pin may only be filed under one of its owner's categories"""
        if category_id is None:
            return
        category = self.store.get_category(category_id)
        if not category or category.user_id != user_id:
            raise ValidationFailedError("Category not found or does not belong to you")

    def _get_own_pin(self, pin_id: UUID, user_id: UUID, action: str) -> Pin:
        pin = self.store.get_pin(pin_id)
        if not pin or pin.user_id != user_id:
            raise NotFoundError(f"Pin not found or you do not have permission to {action} it")
        return pin

    def create_pin(self, user_id: UUID, data: PinCreate) -> Pin:
        """Create a new pin"""
        self._check_category(user_id, data.category_id)
        pin = self.store.create_pin(user_id, **data.model_dump())
        logger.info(f"Pin {pin.id} created by {user_id}")
        return pin

    def get_pin(self, pin_id: UUID, user_id: UUID) -> Pin:
        """Get a pin the user can read; unreadable pins look missing"""
        pin = self.store.get_pin(pin_id)
        if not pin or not self.access.can_read(user_id, pin):
            raise NotFoundError("Pin not found")
        return pin

    def list_user_pins(self, user_id: UUID) -> List[Pin]:
        return self.store.list_user_pins(user_id)

    def list_public_pins(self, limit: Optional[int] = None) -> List[Pin]:
        return self.store.list_public_pins(limit or settings.PUBLIC_PINS_LIMIT)

    def list_category_pins(self, category_id: UUID, user_id: UUID) -> List[Pin]:
        """Pins of a category, restricted to those the user can read"""
        return [
            pin for pin in self.store.list_category_pins(category_id)
            if self.access.can_read(user_id, pin)
        ]

    def update_pin(self, pin_id: UUID, user_id: UUID, data: PinUpdate) -> Pin:
        """Update a pin (owner only)"""
        pin = self._get_own_pin(pin_id, user_id, "edit")

        # Only category_id may be cleared with an explicit null
        fields = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "category_id"
        }
        if "category_id" in fields:
            self._check_category(user_id, fields["category_id"])

        return self.store.update_pin(pin, **fields)

    def delete_pin(self, pin_id: UUID, user_id: UUID) -> None:
        """Delete a pin (owner only); its grants go with it"""
        pin = self._get_own_pin(pin_id, user_id, "delete")
        self.store.delete_pin(pin)
        logger.info(f"Pin {pin_id} deleted by {user_id}")
