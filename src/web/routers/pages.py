"""
Gated pages.

Page routes only decide access here; each returns a small JSON payload
describing what the frontend should render.
"""

import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from rbac.gate import AccessResult
from rbac.permissions import Permission
from rbac.roles import ADMIN_ROLES, Role, get_dashboard_url, get_role_info
from web.dependencies import require_access

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


# path -> (allowed effective roles, required capability)
GATED_PAGES: dict[str, Tuple[Tuple[Role, ...], Optional[Permission]]] = {
    "/dashboard/admin": (tuple(ADMIN_ROLES), Permission.DASHBOARD),
    "/dashboard/tax-preparer": ((Role.TAX_PREPARER,), Permission.DASHBOARD),
    "/dashboard/affiliate": ((Role.AFFILIATE,), Permission.DASHBOARD),
    "/dashboard/client": ((Role.CLIENT,), Permission.DASHBOARD),
    "/dashboard/lead": ((Role.LEAD,), None),
    "/dashboard/tax-preparer/clients": ((Role.TAX_PREPARER,), Permission.CLIENTS),
    "/admin/users": (tuple(ADMIN_ROLES), Permission.USERS),
    "/admin/payouts": (tuple(ADMIN_ROLES), Permission.PAYOUTS),
    "/admin/database": (tuple(ADMIN_ROLES), Permission.DATABASE),
    "/admin/permissions": (tuple(ADMIN_ROLES), Permission.ADMIN_MANAGEMENT),
    "/admin/calendar": (tuple(ADMIN_ROLES), Permission.CALENDAR),
    "/admin/file-center": (tuple(ADMIN_ROLES), Permission.CLIENT_FILE_CENTER),
    "/admin/route-access-control": (tuple(ADMIN_ROLES), Permission.ROUTE_ACCESS_CONTROL),
    "/app/academy": ((), Permission.ACADEMY),
    "/store": ((), Permission.STORE),
}


def _page_payload(path: str, access: AccessResult) -> dict:
    role_info = access.role_info
    return {
        "page": path,
        "effectiveRole": role_info.effective_role.value,
        "isViewingAsOtherRole": role_info.is_viewing_as_other_role,
        "viewingRoleName": role_info.viewing_role_name,
    }


def _register_page(path: str, roles: Tuple[Role, ...], capability: Optional[Permission]) -> None:
    def page(access: AccessResult = Depends(require_access(*roles, capability=capability))):
        return _page_payload(path, access)

    page.__name__ = "page_" + path.strip("/").replace("/", "_").replace("-", "_")
    router.add_api_route(path, page, methods=["GET"])


for _path, (_roles, _capability) in GATED_PAGES.items():
    _register_page(_path, _roles, _capability)


@router.get("/dashboard")
def dashboard(access: AccessResult = Depends(require_access())):
    """Send the user to the dashboard of their effective role."""
    return RedirectResponse(get_dashboard_url(access.role_info.effective_role), status_code=303)


@router.get("/auth/signin")
def signin_page(request: Request):
    return {"page": "signin", "callbackUrl": request.query_params.get("callbackUrl")}


@router.get("/forbidden")
def forbidden_page():
    return {"page": "forbidden", "message": "You don't have permission to access this page."}


@router.get("/not-found")
def not_found_page():
    return {"page": "not-found", "message": "The page you're looking for doesn't exist."}


@router.get("/")
def home_page():
    return {"page": "home", "roles": [get_role_info(role).name for role in Role]}
