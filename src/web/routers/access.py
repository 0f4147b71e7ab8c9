"""
Access API.

- GET    /api/me/access                         effective role and permissions
- POST   /api/admin/view-as                     preview the app as another role
- DELETE /api/admin/view-as                     stop previewing
- GET    /api/admin/permissions/{role}/editable capabilities an admin may toggle

Previewing only changes what the admin sees. Protected operations (such as
editing another user's permissions) are always checked against the admin's
actual role.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config.settings import Settings
from core.cookies import apply_cookie_mutations
from rbac.gate import AccessResult
from rbac.identity import Identity
from rbac.permissions import (
    PERMISSION_LABELS,
    SECTION_NAMES,
    Section,
    get_editable_permissions,
    get_section_permissions,
    to_wire,
)
from rbac.protected import ProtectedOperation, ProtectedOperationDenied, require_protected_operation
from rbac.roles import Role, UnknownRoleError, get_dashboard_url, get_role_info, parse_role
from rbac.viewing import (
    ViewingNotAllowedError,
    clear_viewing_state_cookie,
    get_viewable_roles,
    start_viewing,
    viewing_state_cookie,
)
from web.dependencies import get_app_settings, require_access, require_identity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Access"])


class ViewAsRequest(BaseModel):
    """Request to preview the app as another role."""
    role: str = Field(..., min_length=1, max_length=32, description="Role to preview; own role reverts")


def _parse_role_or_400(value: str) -> Role:
    try:
        return parse_role(value)
    except UnknownRoleError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown role: {value}",
        ) from None


@router.get("/api/me/access")
def get_my_access(
    identity: Identity = Depends(require_identity),
    access: AccessResult = Depends(require_access()),
):
    """Effective role, permissions and preview options for the current user."""
    role_info = access.role_info
    effective = get_role_info(role_info.effective_role)
    return {
        "user": {
            "id": identity.id,
            "email": identity.email,
            "name": identity.display_name,
        },
        "role": role_info.to_dict(),
        "roleName": effective.name,
        "dashboardUrl": get_dashboard_url(role_info.effective_role),
        "permissions": to_wire(access.permissions),
        "viewableRoles": sorted(r.value for r in get_viewable_roles(role_info.actual_role)),
    }


@router.post("/api/admin/view-as")
def view_as(
    body: ViewAsRequest,
    identity: Identity = Depends(require_identity),
    settings: Settings = Depends(get_app_settings),
):
    """Start previewing a role, or revert when it is the user's own role."""
    target = _parse_role_or_400(body.role)

    try:
        state = start_viewing(identity, target)
    except ViewingNotAllowedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from None

    if state is None:
        response = JSONResponse({
            "viewing": False,
            "effectiveRole": identity.role.value,
            "dashboardUrl": get_dashboard_url(identity.role),
        })
        return apply_cookie_mutations(response, [clear_viewing_state_cookie(settings)])

    response = JSONResponse({
        "viewing": True,
        "effectiveRole": state.viewing_role.value,
        "viewingRoleName": get_role_info(state.viewing_role).name,
        "dashboardUrl": get_dashboard_url(state.viewing_role),
    })
    return apply_cookie_mutations(response, [viewing_state_cookie(state, settings)])


@router.delete("/api/admin/view-as")
def stop_viewing(
    identity: Identity = Depends(require_identity),
    settings: Settings = Depends(get_app_settings),
):
    """Return to the actual role."""
    logger.info(f"[VIEW-AS] Cleared | user={identity.id}")
    response = JSONResponse({
        "viewing": False,
        "effectiveRole": identity.role.value,
        "dashboardUrl": get_dashboard_url(identity.role),
    })
    return apply_cookie_mutations(response, [clear_viewing_state_cookie(settings)])


@router.get("/api/admin/permissions/{role}/editable")
def get_editable(
    role: str,
    section: Optional[Section] = None,
    identity: Identity = Depends(require_identity),
):
    """
    Capabilities the permission manager can toggle for users of a role.

    Requires the grant_permissions operation on the actual role.
    """
    try:
        require_protected_operation(identity, ProtectedOperation.GRANT_PERMISSIONS)
    except ProtectedOperationDenied as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.reason) from None

    target = _parse_role_or_400(role)
    editable = get_editable_permissions(target)
    sections = [section] if section is not None else list(Section)

    return {
        "role": target.value,
        "sections": [
            {
                "id": s.value,
                "name": SECTION_NAMES[s],
                "permissions": [
                    {"key": p.value, "label": PERMISSION_LABELS.get(p, p.value)}
                    for p in get_section_permissions(s)
                    if p in editable
                ],
            }
            for s in sections
        ],
    }
