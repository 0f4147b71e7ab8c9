"""
Tax Genius Pro - Protected Operations

Destructive and privileged operations are authorized against the ACTUAL
role and its stored overrides, never the role an admin is previewing.
"""

import logging
from enum import Enum
from typing import Dict, Optional

from .identity import Identity
from .permissions import Permission, has_permission, resolve_effective_permissions
from .roles import ADMIN_ROLES

logger = logging.getLogger(__name__)


class ProtectedOperation(str, Enum):
    DELETE_USER = "delete_user"
    MODIFY_PAYMENT = "modify_payment"
    CHANGE_SYSTEM_SETTINGS = "change_system_settings"
    GRANT_PERMISSIONS = "grant_permissions"
    ASSIGN_ROLES = "assign_roles"
    ACCESS_DATABASE = "access_database"
    VIEW_AUDIT_LOGS = "view_audit_logs"
    MANAGE_ROUTE_RESTRICTIONS = "manage_route_restrictions"


class ProtectedOperationDenied(PermissionError):
    """Raised by require_protected_operation when authorization fails."""

    def __init__(self, operation: ProtectedOperation, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation.value}: {reason}")


# Capability each operation additionally needs; absent means admin role only.
OPERATION_CAPABILITIES: Dict[ProtectedOperation, Permission] = {
    ProtectedOperation.DELETE_USER: Permission.USERS,
    ProtectedOperation.ASSIGN_ROLES: Permission.USERS,
    ProtectedOperation.MODIFY_PAYMENT: Permission.PAYOUTS,
    ProtectedOperation.CHANGE_SYSTEM_SETTINGS: Permission.SETTINGS,
    ProtectedOperation.GRANT_PERMISSIONS: Permission.ADMIN_MANAGEMENT,
    ProtectedOperation.ACCESS_DATABASE: Permission.DATABASE,
    ProtectedOperation.MANAGE_ROUTE_RESTRICTIONS: Permission.ROUTE_ACCESS_CONTROL,
}


def _denial_reason(identity: Identity, operation: ProtectedOperation) -> Optional[str]:
    if identity.role not in ADMIN_ROLES:
        return f"role {identity.role.value} is not an administrator"

    capability = OPERATION_CAPABILITIES.get(operation)
    if capability is None:
        return None

    permissions = resolve_effective_permissions(identity.role, identity.permission_overrides)
    if not has_permission(permissions, capability):
        return f"missing capability {capability.value}"
    return None


def authorize_protected_operation(identity: Optional[Identity], operation: ProtectedOperation) -> bool:
    """
    Check a protected operation for the actual identity.

    Takes no viewing state; the actual role always decides.
    """
    if identity is None:
        return False

    reason = _denial_reason(identity, operation)
    if reason is not None:
        logger.info(f"[PROTECTED] Denied {operation.value} for user {identity.id}: {reason}")
        return False
    return True


def require_protected_operation(identity: Optional[Identity], operation: ProtectedOperation) -> Identity:
    """
    Like authorize_protected_operation but raises.

    Raises:
        ProtectedOperationDenied: If the operation is not allowed.
    """
    if identity is None:
        raise ProtectedOperationDenied(operation, "not authenticated")

    reason = _denial_reason(identity, operation)
    if reason is not None:
        logger.info(f"[PROTECTED] Denied {operation.value} for user {identity.id}: {reason}")
        raise ProtectedOperationDenied(operation, reason)
    return identity
