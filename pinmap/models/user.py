"""
User model
"""
from uuid import uuid4
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship
from pinmap.database import Base
from pinmap.utils.time_utils import utc_now


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    pins = relationship("Pin", back_populates="owner", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="owner", cascade="all, delete-orphan")
