"""
Sharing service - grants on pins and categories

Shares are best-effort across targets: each (resource, target) grant is
written independently, targets that are not accepted friends are skipped, and
the caller gets back how many targets hold a grant afterwards. Per-target
outcomes are kept on ShareResult for logging and tests; the API only exposes
the count.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from pinmap.core.config import settings
from pinmap.core.exceptions import ForbiddenError, NotFoundError
from pinmap.models.pin import Pin, Category
from pinmap.schemas.pin import CategoryResponse, PinResponse
from pinmap.schemas.sharing import (
    GrantInfo,
    GrantListResponse,
    PinPayload,
    SharedCategoryItem,
    SharedPinItem,
    SharedWithMeResponse,
)
from pinmap.schemas.user import UserInfo
from pinmap.services.friendship_service import FriendshipService
from pinmap.services.memories import encode_memories, first_image
from pinmap.store import PinStore

logger = logging.getLogger(__name__)

OUTCOME_CREATED = "created"
OUTCOME_EXISTING = "existing"
OUTCOME_NOT_FRIEND = "not_friend"
OUTCOME_FAILED = "failed"


@dataclass
class ShareOutcome:
    """What happened for one target of a share"""
    target_id: UUID
    status: str
    error: Optional[str] = None

    @property
    def granted(self) -> bool:
        return self.status in (OUTCOME_CREATED, OUTCOME_EXISTING)


@dataclass
class ShareResult:
    """Aggregate result of a multi-target share"""
    outcomes: List[ShareOutcome] = field(default_factory=list)
    resource_id: Optional[UUID] = None

    @property
    def count(self) -> int:
        """Targets that now hold a grant, new or pre-existing"""
        return sum(1 for outcome in self.outcomes if outcome.granted)


def _parse_uuid(value: Union[UUID, str, None]) -> Optional[UUID]:
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class SharingService:
    """Service for granting and revoking read access to pins and categories"""

    def __init__(self, store: PinStore, friendships: Optional[FriendshipService] = None):
        self.store = store
        self.friendships = friendships or FriendshipService(store)

    # ------------------------------------------------------------------
    # Sharing
    # ------------------------------------------------------------------

    def share_pin(
        self,
        pin_id: Union[UUID, str],
        from_user_id: UUID,
        to_user_ids: Iterable[UUID],
        pin_payload: Optional[PinPayload] = None
    ) -> ShareResult:
        """
        Share a pin with friends.

        When the pin is unknown and ``pin_payload`` is given, the pin (and its
        category) is created for the sender first. Memories in the payload
        replace the pin's notes.
        """
        pin = self._resolve_pin(pin_id, from_user_id, pin_payload)

        if pin.user_id != from_user_id:
            raise ForbiddenError("You do not own this pin")

        if pin_payload is not None and pin_payload.memories:
            pin = self._attach_memories(pin, pin_payload.memories)

        result = self._grant_all(
            from_user_id,
            to_user_ids,
            lambda to_user_id: self.store.upsert_pin_grant(pin.id, from_user_id, to_user_id),
        )
        result.resource_id = pin.id
        logger.info(f"Pin {pin.id} shared by {from_user_id} with {result.count} user(s)")
        return result

    def share_category(
        self,
        category_id: UUID,
        from_user_id: UUID,
        to_user_ids: Iterable[UUID]
    ) -> ShareResult:
        """Share a category (and so every pin in it) with friends"""
        category = self._get_category(category_id)

        if category.user_id != from_user_id:
            raise ForbiddenError("You do not own this category")

        result = self._grant_all(
            from_user_id,
            to_user_ids,
            lambda to_user_id: self.store.upsert_category_grant(category.id, from_user_id, to_user_id),
        )
        result.resource_id = category.id
        logger.info(f"Category {category.id} shared by {from_user_id} with {result.count} user(s)")
        return result

    def share_with_all_friends(
        self,
        pin_id: Union[UUID, str],
        from_user_id: UUID,
        pin_payload: Optional[PinPayload] = None
    ) -> ShareResult:
        """Share a pin with every current friend of the sender"""
        friends = self.friendships.list_friends(from_user_id).friends
        if not friends:
            return ShareResult()
        return self.share_pin(
            pin_id,
            from_user_id,
            [f.friend.id for f in friends],
            pin_payload,
        )

    def _grant_all(
        self,
        from_user_id: UUID,
        to_user_ids: Iterable[UUID],
        upsert: Callable[[UUID], tuple]
    ) -> ShareResult:
        result = ShareResult()
        friend_ids = {
            f.friend.id for f in self.friendships.list_friends(from_user_id).friends
        }

        seen = set()
        for to_user_id in to_user_ids:
            if to_user_id in seen:
                continue
            seen.add(to_user_id)

            if to_user_id not in friend_ids:
                result.outcomes.append(ShareOutcome(to_user_id, OUTCOME_NOT_FRIEND))
                continue

            try:
                _, created = upsert(to_user_id)
            except SQLAlchemyError as e:
                logger.warning(f"Grant for {to_user_id} from {from_user_id} failed: {e}")
                result.outcomes.append(ShareOutcome(to_user_id, OUTCOME_FAILED, error=str(e)))
                continue

            result.outcomes.append(
                ShareOutcome(to_user_id, OUTCOME_CREATED if created else OUTCOME_EXISTING)
            )

        return result

    # ------------------------------------------------------------------
    # Sync-on-share
    # ------------------------------------------------------------------

    def _resolve_pin(
        self,
        pin_id: Union[UUID, str],
        from_user_id: UUID,
        pin_payload: Optional[PinPayload]
    ) -> Pin:
        parsed_id = _parse_uuid(pin_id)
        pin = self.store.get_pin(parsed_id) if parsed_id else None
        if pin:
            return pin

        if pin_payload is None:
            raise NotFoundError("Pin not found")

        return self._create_pin_from_payload(parsed_id, from_user_id, pin_payload)

    def _get_or_create_category(self, user_id: UUID, name: str) -> Category:
        category = self.store.find_category(user_id, name)
        if category is None:
            category = self.store.create_category(user_id, name=name, is_public=False)
            logger.info(f"Created category '{name}' for {user_id} during share")
        return category

    def _create_pin_from_payload(
        self,
        pin_id: Optional[UUID],
        user_id: UUID,
        payload: PinPayload
    ) -> Pin:
        """Create a private pin from client data; any failure reads as not found"""
        try:
            latitude = float(payload.lat)
            longitude = float(payload.lon)
            if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
                raise ValueError(f"Coordinates out of range: {latitude}, {longitude}")

            category = self._get_or_create_category(
                user_id, payload.category or settings.SHARE_DEFAULT_CATEGORY
            )

            fields = dict(
                title=(payload.title or payload.name or "Untitled Pin")[:200],
                description=payload.description or "",
                latitude=latitude,
                longitude=longitude,
                address=payload.formatted or "",
                notes=payload.notes or "",
                image_url=payload.image_base64 or None,
                category_id=category.id,
                is_public=False,
            )
            if pin_id is not None:
                fields["id"] = pin_id

            pin = self.store.create_pin(user_id, **fields)
        except (TypeError, ValueError, SQLAlchemyError) as e:
            logger.error(f"Failed to auto-create pin for {user_id}: {e}", exc_info=True)
            raise NotFoundError("Pin not found and could not be created") from e

        logger.info(f"Synced pin {pin.id} for {user_id} on share")
        return pin

    def _attach_memories(self, pin: Pin, memories) -> Pin:
        fields = {"notes": encode_memories(memories)}
        if not pin.image_url:
            image = first_image(memories)
            if image:
                fields["image_url"] = image
        return self.store.update_pin(pin, **fields)

    # ------------------------------------------------------------------
    # Revoking
    # ------------------------------------------------------------------

    def unshare_pin(self, pin_id: UUID, from_user_id: UUID, to_user_id: UUID) -> None:
        """Remove the grant this sender gave ``to_user_id`` on a pin"""
        grant = self.store.find_pin_grant(pin_id, to_user_id, from_user_id=from_user_id)
        if not grant:
            raise NotFoundError("Share not found")
        self.store.delete_pin_grant(grant)
        logger.info(f"Pin {pin_id} unshared by {from_user_id} from {to_user_id}")

    def unshare_category(self, category_id: UUID, from_user_id: UUID, to_user_id: UUID) -> None:
        """Remove the grant this sender gave ``to_user_id`` on a category"""
        grant = self.store.find_category_grant(category_id, to_user_id, from_user_id=from_user_id)
        if not grant:
            raise NotFoundError("Share not found")
        self.store.delete_category_grant(grant)
        logger.info(f"Category {category_id} unshared by {from_user_id} from {to_user_id}")

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def get_pin_grants(self, pin_id: UUID, caller_id: UUID) -> GrantListResponse:
        """Who a pin is shared with (owner only)"""
        pin = self.store.get_pin(pin_id)
        if not pin:
            raise NotFoundError("Pin not found")
        if pin.user_id != caller_id:
            raise ForbiddenError("You do not own this pin")
        return self._grant_list(self.store.list_pin_grants(pin.id))

    def get_category_grants(self, category_id: UUID, caller_id: UUID) -> GrantListResponse:
        """Who a category is shared with (owner only)"""
        category = self._get_category(category_id)
        if category.user_id != caller_id:
            raise ForbiddenError("You do not own this category")
        return self._grant_list(self.store.list_category_grants(category.id))

    def list_granted_to_me(self, user_id: UUID) -> SharedWithMeResponse:
        """Pins and categories shared with ``user_id``, newest grant first"""
        pins = [
            SharedPinItem(
                **PinResponse.from_pin(grant.pin).model_dump(),
                shared_by=UserInfo.model_validate(grant.from_user),
                shared_at=grant.created_at,
            )
            for grant in self.store.list_pin_grants_to(user_id)
        ]

        categories = []
        for grant in self.store.list_category_grants_to(user_id):
            category_pins = self.store.list_category_pins(grant.category_id)
            data = CategoryResponse.model_validate(grant.category).model_dump()
            data["pin_count"] = len(category_pins)
            categories.append(SharedCategoryItem(
                **data,
                pins=[PinResponse.from_pin(p) for p in category_pins],
                shared_by=UserInfo.model_validate(grant.from_user),
                shared_at=grant.created_at,
            ))

        return SharedWithMeResponse(pins=pins, categories=categories)

    def _get_category(self, category_id: UUID) -> Category:
        category = self.store.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def _grant_list(grants) -> GrantListResponse:
        return GrantListResponse(shares=[
            GrantInfo(
                id=grant.id,
                user=UserInfo.model_validate(grant.to_user),
                shared_at=grant.created_at,
            )
            for grant in grants
        ])
