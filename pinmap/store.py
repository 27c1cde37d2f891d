"""
Persistence store for users, pins, categories, friendships and grants.

Services receive a PinStore at construction instead of reaching for a global
session, so tests can hand them a store built on a throwaway database (or a
subclass that injects failures). Every mutating call commits.
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import or_, and_, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pinmap.models.user import User
from pinmap.models.pin import Pin, Category
from pinmap.models.social import Friendship
from pinmap.models.sharing import SharedPin, SharedCategory
from pinmap.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class PinStore:
    """CRUD and query primitives wrapping one SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _add(self, obj):
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def _delete(self, obj) -> None:
        self.db.delete(obj)
        self._commit()

    # -------------------------- users --------------------------
    def get_user(self, user_id: UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def user_exists(self, user_id: UUID) -> bool:
        return self.db.query(User.id).filter(User.id == user_id).first() is not None

    def search_users(self, query: str, exclude_user_id: UUID, limit: int) -> List[User]:
        # Wildcards in the query match literally
        needle = query.lower()
        return self.db.query(User).filter(
            User.id != exclude_user_id,
            or_(
                func.lower(User.username).contains(needle, autoescape=True),
                func.lower(User.email).contains(needle, autoescape=True),
                func.lower(User.display_name).contains(needle, autoescape=True),
            )
        ).order_by(User.username).limit(limit).all()

    # ------------------------ categories -----------------------
    def get_category(self, category_id: UUID) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def find_category(self, user_id: UUID, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(
            Category.user_id == user_id,
            Category.name == name
        ).first()

    def create_category(self, user_id: UUID, **fields) -> Category:
        return self._add(Category(user_id=user_id, **fields))

    def update_category(self, category: Category, **fields) -> Category:
        for key, value in fields.items():
            setattr(category, key, value)
        category.updated_at = utc_now()
        self._commit()
        self.db.refresh(category)
        return category

    def delete_category(self, category: Category) -> None:
        self._delete(category)

    def list_categories(self, user_id: UUID) -> List[Category]:
        return self.db.query(Category).filter(
            Category.user_id == user_id
        ).order_by(Category.name.asc()).all()

    def count_category_pins(self, category_id: UUID) -> int:
        return self.db.query(Pin).filter(Pin.category_id == category_id).count()

    # --------------------------- pins --------------------------
    def get_pin(self, pin_id: UUID) -> Optional[Pin]:
        return self.db.get(Pin, pin_id)

    def create_pin(self, user_id: UUID, **fields) -> Pin:
        return self._add(Pin(user_id=user_id, **fields))

    def update_pin(self, pin: Pin, **fields) -> Pin:
        for key, value in fields.items():
            setattr(pin, key, value)
        pin.updated_at = utc_now()
        self._commit()
        self.db.refresh(pin)
        return pin

    def delete_pin(self, pin: Pin) -> None:
        self._delete(pin)

    def list_user_pins(self, user_id: UUID) -> List[Pin]:
        return self.db.query(Pin).filter(
            Pin.user_id == user_id
        ).order_by(Pin.created_at.desc()).all()

    def list_public_pins(self, limit: int) -> List[Pin]:
        return self.db.query(Pin).filter(
            Pin.is_public.is_(True)
        ).order_by(Pin.created_at.desc()).limit(limit).all()

    def list_category_pins(self, category_id: UUID) -> List[Pin]:
        return self.db.query(Pin).filter(
            Pin.category_id == category_id
        ).order_by(Pin.created_at.desc()).all()

    # ------------------------ friendships ----------------------
    def get_friendship(self, friendship_id: UUID) -> Optional[Friendship]:
        return self.db.get(Friendship, friendship_id)

    def find_friendship_between(
        self,
        user_a: UUID,
        user_b: UUID,
        status: Optional[str] = None
    ) -> Optional[Friendship]:
        """Edge between the unordered pair, in either orientation"""
        query = self.db.query(Friendship).filter(
            or_(
                and_(Friendship.user_id == user_a, Friendship.friend_id == user_b),
                and_(Friendship.user_id == user_b, Friendship.friend_id == user_a)
            )
        )
        if status is not None:
            query = query.filter(Friendship.status == status)
        return query.first()

    def create_friendship(self, requester_id: UUID, recipient_id: UUID, status: str) -> Friendship:
        return self._add(Friendship(user_id=requester_id, friend_id=recipient_id, status=status))

    def set_friendship_status(self, friendship: Friendship, status: str) -> Friendship:
        friendship.status = status
        friendship.updated_at = utc_now()
        self._commit()
        self.db.refresh(friendship)
        return friendship

    def delete_friendship(self, friendship: Friendship) -> None:
        self._delete(friendship)

    def list_friendships(self, user_id: UUID, status: str) -> List[Friendship]:
        """Edges touching ``user_id`` in either orientation"""
        return self.db.query(Friendship).filter(
            or_(
                Friendship.user_id == user_id,
                Friendship.friend_id == user_id
            ),
            Friendship.status == status
        ).order_by(Friendship.created_at.asc()).all()

    def list_incoming(self, user_id: UUID, status: str) -> List[Friendship]:
        return self.db.query(Friendship).filter(
            Friendship.friend_id == user_id,
            Friendship.status == status
        ).order_by(Friendship.created_at.desc()).all()

    def list_outgoing(self, user_id: UUID, status: str) -> List[Friendship]:
        return self.db.query(Friendship).filter(
            Friendship.user_id == user_id,
            Friendship.status == status
        ).order_by(Friendship.created_at.desc()).all()

    # ------------------------ pin grants -----------------------
    def find_pin_grant(
        self,
        pin_id: UUID,
        to_user_id: UUID,
        from_user_id: Optional[UUID] = None
    ) -> Optional[SharedPin]:
        query = self.db.query(SharedPin).filter(
            SharedPin.pin_id == pin_id,
            SharedPin.to_user_id == to_user_id
        )
        if from_user_id is not None:
            query = query.filter(SharedPin.from_user_id == from_user_id)
        return query.first()

    def has_pin_grant(self, pin_id: UUID, user_id: UUID) -> bool:
        return self.db.query(SharedPin.id).filter(
            SharedPin.pin_id == pin_id,
            SharedPin.to_user_id == user_id
        ).first() is not None

    def upsert_pin_grant(self, pin_id: UUID, from_user_id: UUID, to_user_id: UUID) -> Tuple[SharedPin, bool]:
        """Insert-or-no-op keyed by (pin, recipient). Returns (grant, created)."""
        return self._upsert_grant(
            lambda: self.find_pin_grant(pin_id, to_user_id),
            lambda: SharedPin(pin_id=pin_id, from_user_id=from_user_id, to_user_id=to_user_id),
        )

    def delete_pin_grant(self, grant: SharedPin) -> None:
        self._delete(grant)

    def list_pin_grants(self, pin_id: UUID) -> List[SharedPin]:
        return self.db.query(SharedPin).filter(
            SharedPin.pin_id == pin_id
        ).order_by(SharedPin.created_at.desc()).all()

    def list_pin_grants_to(self, user_id: UUID) -> List[SharedPin]:
        return self.db.query(SharedPin).filter(
            SharedPin.to_user_id == user_id
        ).order_by(SharedPin.created_at.desc()).all()

    # --------------------- category grants ---------------------
    def find_category_grant(
        self,
        category_id: UUID,
        to_user_id: UUID,
        from_user_id: Optional[UUID] = None
    ) -> Optional[SharedCategory]:
        query = self.db.query(SharedCategory).filter(
            SharedCategory.category_id == category_id,
            SharedCategory.to_user_id == to_user_id
        )
        if from_user_id is not None:
            query = query.filter(SharedCategory.from_user_id == from_user_id)
        return query.first()

    def has_category_grant(self, category_id: UUID, user_id: UUID) -> bool:
        return self.db.query(SharedCategory.id).filter(
            SharedCategory.category_id == category_id,
            SharedCategory.to_user_id == user_id
        ).first() is not None

    def upsert_category_grant(
        self,
        category_id: UUID,
        from_user_id: UUID,
        to_user_id: UUID
    ) -> Tuple[SharedCategory, bool]:
        """Insert-or-no-op keyed by (category, recipient). Returns (grant, created)."""
        return self._upsert_grant(
            lambda: self.find_category_grant(category_id, to_user_id),
            lambda: SharedCategory(category_id=category_id, from_user_id=from_user_id, to_user_id=to_user_id),
        )

    def delete_category_grant(self, grant: SharedCategory) -> None:
        self._delete(grant)

    def list_category_grants(self, category_id: UUID) -> List[SharedCategory]:
        return self.db.query(SharedCategory).filter(
            SharedCategory.category_id == category_id
        ).order_by(SharedCategory.created_at.desc()).all()

    def list_category_grants_to(self, user_id: UUID) -> List[SharedCategory]:
        return self.db.query(SharedCategory).filter(
            SharedCategory.to_user_id == user_id
        ).order_by(SharedCategory.created_at.desc()).all()

    def _upsert_grant(self, find, build):
        existing = find()
        if existing is not None:
            return existing, False

        grant = build()
        self.db.add(grant)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent share: the unique key now holds the other row
            self.db.rollback()
            existing = find()
            if existing is None:
                raise
            logger.debug("Grant insert collided with an existing row; treating as no-op")
            return existing, False
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(grant)
        return grant, True
