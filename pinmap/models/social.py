"""
Social features models - Friendships
"""
from uuid import uuid4
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from pinmap.database import Base
from pinmap.utils.time_utils import utc_now

FRIENDSHIP_PENDING = "pending"
FRIENDSHIP_ACCEPTED = "accepted"


class Friendship(Base):
    """Directed friend request from user_id (requester) to friend_id (recipient)"""
    __tablename__ = "friendships"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Status: 'pending', 'accepted'. Rejected/removed edges are deleted.
    status = Column(String(20), default=FRIENDSHIP_PENDING, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Unique constraint to prevent duplicate friendships
    __table_args__ = (
        UniqueConstraint('user_id', 'friend_id', name='unique_friendship'),
    )

    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    friend = relationship("User", foreign_keys=[friend_id])

    @property
    def requester_id(self):
        return self.user_id

    @property
    def recipient_id(self):
        return self.friend_id

    def other_party(self, user_id):
        """Id of the participant that is not ``user_id``"""
        return self.friend_id if self.user_id == user_id else self.user_id
