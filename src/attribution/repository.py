"""Profile lookups for attribution and identity refresh.

The resolver depends only on the ProfileLookup protocol; ProfileRepository
is the SQLAlchemy-backed implementation. Referral-link clicks are stored
here too, so a later form submission can be matched by email or phone.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models import LinkClickRecord, ProfileRecord
from rbac.roles import UnknownRoleError, parse_role

from .models import ReferrerProfile

logger = logging.getLogger(__name__)


class AttributionLookupError(Exception):
    """The profile store could not be queried."""


class ProfileLookup(Protocol):
    def find_profile_by_any_tracking_code(self, code: str) -> Optional[ReferrerProfile]:
        ...

    def find_referrer_by_click_email(self, email: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        ...

    def find_referrer_by_click_phone(self, phone_key: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        ...


class ProfileRepository:
    """
    Repository for profile reads.

    Matches a code against tracking_code, custom_tracking_code and
    short_link_username as equal alternatives.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with a session.

        Args:
            session: SQLAlchemy session.
        """
        self._session = session

    def find_profile_by_any_tracking_code(self, code: str) -> Optional[ReferrerProfile]:
        """
        Find the profile owning a code in any namespace.

        Raises:
            AttributionLookupError: If the query fails.
        """
        stmt = (
            select(ProfileRecord)
            .where(
                or_(
                    ProfileRecord.tracking_code == code,
                    ProfileRecord.custom_tracking_code == code,
                    ProfileRecord.short_link_username == code,
                )
            )
            .order_by(ProfileRecord.created_at)
            .limit(1)
        )
        try:
            record = self._session.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise AttributionLookupError(f"Profile lookup failed for code {code!r}") from e

        if record is None:
            return None
        return self._to_referrer(record)

    def is_code_available(self, code: str) -> bool:
        """True when no profile uses code in any namespace."""
        stmt = select(ProfileRecord.id).where(
            or_(
                ProfileRecord.tracking_code == code,
                ProfileRecord.custom_tracking_code == code,
                ProfileRecord.short_link_username == code,
            )
        )
        try:
            return self._session.execute(stmt).first() is None
        except SQLAlchemyError as e:
            raise AttributionLookupError(f"Availability check failed for code {code!r}") from e

    def find_referrer_by_click_email(self, email: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        """
        Code and creator of the most recent link click since `since` whose
        visitor gave this (normalized) email.

        Raises:
            AttributionLookupError: If the query fails.
        """
        return self._find_click(LinkClickRecord.user_email == email, since)

    def find_referrer_by_click_phone(self, phone_key: str, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        """
        Like find_referrer_by_click_email, matching the last ten digits of
        the stored phone.

        Raises:
            AttributionLookupError: If the query fails.
        """
        return self._find_click(LinkClickRecord.user_phone.endswith(phone_key), since)

    def record_link_click(
        self,
        profile_id: str,
        code: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        clicked_at: Optional[datetime] = None,
    ) -> LinkClickRecord:
        """
        Store a referral-link click for the profile that owns code.

        email and phone must already be normalized (lowercased email,
        digits-only phone).
        """
        record = LinkClickRecord(
            profile_id=profile_id,
            code=code,
            user_email=email,
            user_phone=phone,
            clicked_at=clicked_at or datetime.utcnow(),
        )
        try:
            self._session.add(record)
            self._session.flush()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise AttributionLookupError(f"Could not record link click for {code!r}") from e
        logger.debug(f"Recorded link click {record.id} for {code!r}")
        return record

    def get_profile_by_user_id(self, user_id: str) -> Optional[ProfileRecord]:
        """Profile row for an identity-provider user id."""
        stmt = select(ProfileRecord).where(ProfileRecord.user_id == user_id)
        return self._session.execute(stmt).scalars().first()

    def get_identity_claims(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Role, overrides and names stored for a user, as identity claims."""
        record = self.get_profile_by_user_id(user_id)
        if record is None:
            return None
        return {
            "role": record.role,
            "permission_overrides": record.permission_overrides or {},
            "first_name": record.first_name,
            "last_name": record.last_name,
        }

    def _find_click(self, condition, since: datetime) -> Optional[Tuple[str, ReferrerProfile]]:
        stmt = (
            select(LinkClickRecord, ProfileRecord)
            .join(ProfileRecord, ProfileRecord.id == LinkClickRecord.profile_id)
            .where(condition, LinkClickRecord.clicked_at >= since)
            .order_by(LinkClickRecord.clicked_at.desc())
            .limit(1)
        )
        try:
            row = self._session.execute(stmt).first()
        except SQLAlchemyError as e:
            raise AttributionLookupError("Link click lookup failed") from e

        if row is None:
            return None
        click, record = row
        referrer = self._to_referrer(record)
        if referrer is None:
            return None
        return click.code, referrer

    @staticmethod
    def _to_referrer(record: ProfileRecord) -> Optional[ReferrerProfile]:
        try:
            role = parse_role(record.role)
        except UnknownRoleError:
            logger.warning(f"Profile {record.id} has unknown role {record.role!r}; skipping attribution")
            return None

        return ReferrerProfile(
            profile_id=record.id,
            role=role,
            user_id=record.user_id,
            first_name=record.first_name,
            last_name=record.last_name,
            tracking_code=record.tracking_code,
            custom_tracking_code=record.custom_tracking_code,
            short_link_username=record.short_link_username,
        )
