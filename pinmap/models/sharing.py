"""
Sharing grants - read access to one pin or one category for one user
"""
from uuid import uuid4
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from pinmap.database import Base
from pinmap.utils.time_utils import utc_now


class SharedPin(Base):
    """Grant on a single pin"""
    __tablename__ = "shared_pins"

    id = Column(Uuid, primary_key=True, default=uuid4)
    pin_id = Column(Uuid, ForeignKey("pins.id", ondelete="CASCADE"), nullable=False, index=True)
    from_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    to_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utc_now)

    # One grant per (pin, recipient), whoever granted it
    __table_args__ = (
        UniqueConstraint('pin_id', 'to_user_id', name='unique_shared_pin'),
    )

    pin = relationship("Pin", back_populates="shares")
    from_user = relationship("User", foreign_keys=[from_user_id])
    to_user = relationship("User", foreign_keys=[to_user_id])


class SharedCategory(Base):
    """Grant on a category; covers every pin in it at read time"""
    __tablename__ = "shared_categories"

    id = Column(Uuid, primary_key=True, default=uuid4)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    from_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    to_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utc_now)

    __table_args__ = (
        UniqueConstraint('category_id', 'to_user_id', name='unique_shared_category'),
    )

    category = relationship("Category", back_populates="shares")
    from_user = relationship("User", foreign_keys=[from_user_id])
    to_user = relationship("User", foreign_keys=[to_user_id])
