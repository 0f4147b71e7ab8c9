"""Route Restriction Repository.

Loads and edits the admin-managed route restrictions the access gate
consults on every request.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rbac.restrictions import RouteRestriction

from ..models import RouteRestrictionRecord

logger = logging.getLogger(__name__)


class RestrictionStoreError(Exception):
    """The route restriction table could not be read or written."""


class RouteRestrictionRepository:
    """
    Repository for route restrictions.

    Rows are returned highest priority first, as RouteRestriction values.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with a session.

        Args:
            session: SQLAlchemy session.
        """
        self._session = session

    def list_active(self) -> List[RouteRestriction]:
        """
        Active restrictions, highest priority first.

        Raises:
            RestrictionStoreError: If the query fails.
        """
        stmt = (
            select(RouteRestrictionRecord)
            .where(RouteRestrictionRecord.is_active.is_(True))
            .order_by(RouteRestrictionRecord.priority.desc(), RouteRestrictionRecord.created_at)
        )
        return self._load(stmt)

    def list_all(self) -> List[RouteRestriction]:
        """Every restriction, highest priority first."""
        stmt = select(RouteRestrictionRecord).order_by(
            RouteRestrictionRecord.priority.desc(), RouteRestrictionRecord.created_at
        )
        return self._load(stmt)

    def create(self, restriction: RouteRestriction) -> RouteRestriction:
        """
        Store a new restriction.

        Returns:
            The stored restriction, with its id.
        """
        record = RouteRestrictionRecord(
            route_path=restriction.route_path,
            allowed_roles=sorted(r.value for r in restriction.allowed_roles),
            blocked_roles=sorted(r.value for r in restriction.blocked_roles),
            allowed_usernames=sorted(restriction.allowed_usernames),
            blocked_usernames=sorted(restriction.blocked_usernames),
            allow_non_logged_in=restriction.allow_non_logged_in,
            redirect_url=restriction.redirect_url,
            priority=restriction.priority,
            is_active=restriction.is_active,
        )
        try:
            self._session.add(record)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RestrictionStoreError(f"Could not store restriction for {restriction.route_path!r}") from e

        logger.info(f"Created route restriction {record.id} for {record.route_path} (priority {record.priority})")
        return self._to_restriction(record)

    def delete(self, restriction_id: str) -> bool:
        """Delete a restriction; False when it does not exist."""
        try:
            record = self._session.get(RouteRestrictionRecord, restriction_id)
            if record is None:
                return False
            self._session.delete(record)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RestrictionStoreError(f"Could not delete restriction {restriction_id}") from e

        logger.info(f"Deleted route restriction {restriction_id}")
        return True

    def _load(self, stmt) -> List[RouteRestriction]:
        try:
            records = self._session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            raise RestrictionStoreError("Route restriction query failed") from e
        return [self._to_restriction(record) for record in records]

    @staticmethod
    def _to_restriction(record: RouteRestrictionRecord) -> RouteRestriction:
        return RouteRestriction(
            id=record.id,
            route_path=record.route_path,
            allowed_roles=record.allowed_roles or [],
            blocked_roles=record.blocked_roles or [],
            allowed_usernames=record.allowed_usernames or [],
            blocked_usernames=record.blocked_usernames or [],
            allow_non_logged_in=record.allow_non_logged_in,
            redirect_url=record.redirect_url,
            priority=record.priority,
            is_active=record.is_active,
        )
