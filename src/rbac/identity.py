"""
Tax Genius Pro - Identity Boundary

Identity claims arrive loosely typed (session JWT claims, profile rows,
identity-provider metadata). parse_identity() validates them once into a
strongly typed Identity; nothing downstream touches the raw mapping.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .permissions import Permission, coerce_permission
from .roles import Role, parse_role

logger = logging.getLogger(__name__)


class IdentityValidationError(ValueError):
    """Raised when identity claims cannot be turned into an Identity."""


class Identity(BaseModel):
    """
    Authenticated principal for the current request.

    Read-only: the identity provider and profile store own these values.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("id", "userId", "user_id", "sub"),
    )
    role: Role
    permission_overrides: Dict[Permission, bool] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("permission_overrides", "permissionOverrides"),
    )
    email: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("first_name", "firstName"),
    )
    last_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("last_name", "lastName"),
    )

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value: Any) -> Role:
        return parse_role(value)

    @field_validator("permission_overrides", mode="before")
    @classmethod
    def _parse_overrides(cls, value: Any) -> Dict[Permission, bool]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("permission overrides must be an object")

        overrides: Dict[Permission, bool] = {}
        for key, allowed in value.items():
            permission = coerce_permission(key)
            if permission is None:
                logger.debug(f"Dropping unknown permission override {key!r}")
                continue
            if not isinstance(allowed, bool):
                logger.warning(f"Dropping non-boolean override {permission.value}={allowed!r}")
                continue
            overrides[permission] = allowed
        return overrides

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or self.id


def parse_identity(raw: Optional[Mapping[str, Any]]) -> Optional[Identity]:
    """
    Validate raw identity claims.

    Returns None when there is no identity (unauthenticated).

    Raises:
        IdentityValidationError: If the claims are present but invalid.
    """
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise IdentityValidationError(f"Identity claims must be a mapping, got {type(raw).__name__}")

    try:
        return Identity.model_validate(dict(raw))
    except ValidationError as exc:
        raise IdentityValidationError(str(exc)) from exc
