"""
Read-access decisions for pins and categories.

A user can read a resource when they own it, when it is public, when it was
shared with them directly, or (pins only) when the pin's category was shared
with them. A public category does NOT expose its private pins: visibility is
decided per resource, category grants being the only inherited path.

Grant lookups run against the store on every call so moving a pin between
categories takes effect immediately.
"""
from typing import Union
from uuid import UUID

from pinmap.models.pin import Pin, Category
from pinmap.store import PinStore


class AccessResolver:
    """Decides whether one user may read one pin or category"""

    def __init__(self, store: PinStore):
        self.store = store

    def can_read(self, user_id: UUID, resource: Union[Pin, Category]) -> bool:
        if resource.user_id == user_id:
            return True
        if resource.is_public:
            return True

        if isinstance(resource, Pin):
            if self.store.has_pin_grant(resource.id, user_id):
                return True
            return (
                resource.category_id is not None
                and self.store.has_category_grant(resource.category_id, user_id)
            )

        if isinstance(resource, Category):
            return self.store.has_category_grant(resource.id, user_id)

        raise TypeError(f"Unsupported resource type: {type(resource).__name__}")


def can_read(store: PinStore, user_id: UUID, resource: Union[Pin, Category]) -> bool:
    """Shortcut for AccessResolver(store).can_read(...)"""
    return AccessResolver(store).can_read(user_id, resource)
