"""
FastAPI dependencies: current user and per-request services
"""
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pinmap.core.security import decode_access_token
from pinmap.database import get_db
from pinmap.models.user import User
from pinmap.services.category_service import CategoryService
from pinmap.services.friendship_service import FriendshipService
from pinmap.services.pin_service import PinService
from pinmap.services.sharing_service import SharingService
from pinmap.store import PinStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the bearer token"""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise unauthorized

    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise unauthorized

    user = db.get(User, user_id)
    if user is None:
        raise unauthorized
    return user


def get_store(db: Session = Depends(get_db)) -> PinStore:
    return PinStore(db)


def get_friendship_service(store: PinStore = Depends(get_store)) -> FriendshipService:
    return FriendshipService(store)


def get_sharing_service(store: PinStore = Depends(get_store)) -> SharingService:
    return SharingService(store)


def get_pin_service(store: PinStore = Depends(get_store)) -> PinService:
    return PinService(store)


def get_category_service(store: PinStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)
