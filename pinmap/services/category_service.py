"""
Category service
"""
import logging
from typing import List, Optional
from uuid import UUID

from pinmap.core.exceptions import NotFoundError
from pinmap.models.pin import Category
from pinmap.schemas.pin import CategoryCreate, CategoryResponse, CategoryUpdate
from pinmap.services.access_service import AccessResolver
from pinmap.store import PinStore

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category operations"""

    def __init__(self, store: PinStore, access: Optional[AccessResolver] = None):
        self.store = store
        self.access = access or AccessResolver(store)

    def to_response(self, category: Category) -> CategoryResponse:
        response = CategoryResponse.model_validate(category)
        response.pin_count = self.store.count_category_pins(category.id)
        return response

    def _get_own_category(self, category_id: UUID, user_id: UUID, action: str) -> Category:
        category = self.store.get_category(category_id)
        if not category or category.user_id != user_id:
            raise NotFoundError(f"Category not found or you do not have permission to {action} it")
        return category

    def create_category(self, user_id: UUID, data: CategoryCreate) -> Category:
        return self.store.create_category(user_id, **data.model_dump())

    def list_user_categories(self, user_id: UUID) -> List[Category]:
        return self.store.list_categories(user_id)

    def get_category(self, category_id: UUID, user_id: UUID) -> Category:
        """Get a category the user can read; unreadable categories look missing"""
        category = self.store.get_category(category_id)
        if not category or not self.access.can_read(user_id, category):
            raise NotFoundError("Category not found")
        return category

    def update_category(self, category_id: UUID, user_id: UUID, data: CategoryUpdate) -> Category:
        category = self._get_own_category(category_id, user_id, "edit")
        fields = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        return self.store.update_category(category, **fields)

    def delete_category(self, category_id: UUID, user_id: UUID) -> None:
        """Delete a category (owner only). Its pins stay, uncategorized."""
        category = self._get_own_category(category_id, user_id, "delete")
        self.store.delete_category(category)
        logger.info(f"Category {category_id} deleted by {user_id}")
