"""
API v1 routes aggregation
"""
from fastapi import APIRouter
from pinmap.api.v1 import users, friends, sharing, pins, categories

api_router = APIRouter()

# Users
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Friends
api_router.include_router(friends.router, tags=["friends"])

# Sharing
api_router.include_router(sharing.router, tags=["sharing"])

# Pins
api_router.include_router(pins.router, tags=["pins"])

# Categories
api_router.include_router(categories.router, tags=["categories"])
