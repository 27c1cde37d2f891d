"""
Map pins and the categories that group them
"""
from uuid import uuid4
from sqlalchemy import Column, String, Boolean, Float, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from pinmap.database import Base
from pinmap.utils.time_utils import utc_now


class Category(Base):
    """A user's named group of pins"""
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_public = Column(Boolean, default=False, nullable=False)
    color = Column(String(7), nullable=True)  # '#RRGGBB'
    icon = Column(String(50), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    owner = relationship("User", back_populates="categories")
    pins = relationship("Pin", back_populates="category")
    shares = relationship("SharedCategory", back_populates="category", cascade="all, delete-orphan")

    @property
    def owner_id(self):
        return self.user_id


class Pin(Base):
    """A geographic point owned by one user"""
    __tablename__ = "pins"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(500), nullable=True)
    # Plain text, or an encoded memory list (see services/memories.py)
    notes = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)  # URL or base64 data URI
    is_public = Column(Boolean, default=False, nullable=False)

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    owner = relationship("User", back_populates="pins")
    category = relationship("Category", back_populates="pins")
    shares = relationship("SharedPin", back_populates="pin", cascade="all, delete-orphan")

    @property
    def owner_id(self):
        return self.user_id
