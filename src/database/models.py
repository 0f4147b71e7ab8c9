"""
SQLAlchemy ORM Models for the profile store.

Modelled here:
- ProfileRecord: the role and permission overrides an identity is authorized
  with, and the three tracking-code namespaces the attribution resolver
  matches against
- LinkClickRecord: a referral-link click, with the contact details the
  visitor later gave, for cross-device attribution
- RouteRestrictionRecord: admin-managed route access rules

Invariant: a tracking code is unique across tracking_code,
custom_tracking_code and short_link_username. Each column is unique on its
own; cross-column collisions are prevented when codes are assigned.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, JSON
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.orm import declarative_base, validates
from sqlalchemy.types import TypeDecorator

from rbac.roles import Role, parse_role


# Cross-database compatible JSON type
# Uses JSONB on PostgreSQL, JSON on SQLite/others
class JSONB(TypeDecorator):
    """A portable JSONB type that works with both PostgreSQL and SQLite."""
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PG_JSONB())
        else:
            return dialect.type_descriptor(JSON())


Base = declarative_base()


def _new_id() -> str:
    return str(uuid4())


class ProfileRecord(Base):
    """
    A user's profile.

    user_id links to the identity provider; it is empty for profiles created
    before the user signed up (e.g. an imported preparer).
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(255), unique=True, nullable=True, index=True)

    role = Column(String(20), nullable=False, default=Role.LEAD.value, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    # Tracking-code namespaces
    tracking_code = Column(String(50), unique=True, nullable=True)
    custom_tracking_code = Column(String(50), unique=True, nullable=True)
    short_link_username = Column(String(50), unique=True, nullable=True)

    # Partial {capability: bool} map merged over the role defaults
    permission_overrides = Column(JSONB, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_profiles_role_tracking", "role", "tracking_code"),
    )

    @validates("role")
    def _validate_role(self, key, value):
        return parse_role(value).value

    @property
    def role_enum(self) -> Role:
        return parse_role(self.role)

    def __repr__(self):
        return f"<ProfileRecord(id={self.id}, role={self.role}, tracking_code={self.tracking_code})>"


class LinkClickRecord(Base):
    """
    A click on a referral link.

    profile_id is the link creator. user_email and user_phone are filled in
    when the visitor later submits a form, so a submission from another
    device can be matched back to the click. user_email is stored lowercased,
    user_phone as digits only.
    """
    __tablename__ = "link_clicks"

    id = Column(String(36), primary_key=True, default=_new_id)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    code = Column(String(50), nullable=False)
    user_email = Column(String(255), nullable=True, index=True)
    user_phone = Column(String(20), nullable=True)
    clicked_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<LinkClickRecord(id={self.id}, profile_id={self.profile_id}, code={self.code})>"


class RouteRestrictionRecord(Base):
    """
    An admin-managed route restriction.

    route_path may contain "*" wildcards; the highest-priority active match
    applies. Role and username lists are JSON arrays of strings.
    """
    __tablename__ = "route_restrictions"

    id = Column(String(36), primary_key=True, default=_new_id)
    route_path = Column(String(255), nullable=False, index=True)

    allowed_roles = Column(JSONB, nullable=False, default=list)
    blocked_roles = Column(JSONB, nullable=False, default=list)
    allowed_usernames = Column(JSONB, nullable=False, default=list)
    blocked_usernames = Column(JSONB, nullable=False, default=list)

    allow_non_logged_in = Column(Boolean, nullable=False, default=False)
    redirect_url = Column(String(500), nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<RouteRestrictionRecord(id={self.id}, route_path={self.route_path}, priority={self.priority})>"
