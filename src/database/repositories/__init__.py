"""Repositories over the ORM models."""

from .route_restriction_repository import RestrictionStoreError, RouteRestrictionRepository

__all__ = ["RestrictionStoreError", "RouteRestrictionRepository"]
