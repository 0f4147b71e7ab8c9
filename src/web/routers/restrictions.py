"""
Route Restrictions API.

- GET    /api/admin/route-restrictions       every restriction, highest priority first
- POST   /api/admin/route-restrictions       create a restriction
- DELETE /api/admin/route-restrictions/{id}  delete a restriction
- GET    /api/admin/route-restrictions/check which restriction applies to a path

Managing restrictions is a protected operation: it is authorized against the
actual role and is not itself subject to route restrictions, so an admin
cannot lock themselves out of this API.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from database.repositories import RestrictionStoreError, RouteRestrictionRepository
from rbac.identity import Identity
from rbac.protected import ProtectedOperation, ProtectedOperationDenied, require_protected_operation
from rbac.restrictions import RouteRestriction, check_route_restrictions
from rbac.roles import Role, UnknownRoleError, parse_role
from web.dependencies import get_route_restriction_repository, require_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/route-restrictions", tags=["Route Restrictions"])


def require_restriction_manager(identity: Identity = Depends(require_identity)) -> Identity:
    try:
        return require_protected_operation(identity, ProtectedOperation.MANAGE_ROUTE_RESTRICTIONS)
    except ProtectedOperationDenied as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.reason) from None


def _store_unavailable(e: RestrictionStoreError) -> HTTPException:
    logger.error(f"Route restriction store failed: {e}", exc_info=True)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Access rules unavailable")


@router.get("")
def list_restrictions(
    identity: Identity = Depends(require_restriction_manager),
    repository: RouteRestrictionRepository = Depends(get_route_restriction_repository),
):
    try:
        restrictions = repository.list_all()
    except RestrictionStoreError as e:
        raise _store_unavailable(e) from None
    return {"restrictions": [r.to_dict() for r in restrictions]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_restriction(
    body: RouteRestriction,
    identity: Identity = Depends(require_restriction_manager),
    repository: RouteRestrictionRepository = Depends(get_route_restriction_repository),
):
    try:
        stored = repository.create(body)
    except RestrictionStoreError as e:
        raise _store_unavailable(e) from None
    logger.info(f"[ROUTE-ACCESS] Created | user={identity.id} | route={stored.route_path}")
    return stored.to_dict()


@router.get("/check")
def check_restriction(
    path: str = Query(..., min_length=1),
    role: Optional[str] = None,
    username: Optional[str] = None,
    identity: Identity = Depends(require_restriction_manager),
    repository: RouteRestrictionRepository = Depends(get_route_restriction_repository),
):
    """Preview how the restrictions treat a visitor; no role means signed out."""
    visitor_role: Optional[Role] = None
    if role:
        try:
            visitor_role = parse_role(role)
        except UnknownRoleError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown role: {role}") from None

    try:
        restrictions = repository.list_active()
    except RestrictionStoreError as e:
        raise _store_unavailable(e) from None

    result = check_route_restrictions(path, restrictions, visitor_role, username)
    return {
        "path": path,
        "allowed": result.allowed,
        "reason": result.reason.value,
        "redirectUrl": result.redirect_url,
        "restriction": result.restriction.to_dict() if result.restriction else None,
    }


@router.delete("/{restriction_id}")
def delete_restriction(
    restriction_id: str,
    identity: Identity = Depends(require_restriction_manager),
    repository: RouteRestrictionRepository = Depends(get_route_restriction_repository),
):
    try:
        deleted = repository.delete(restriction_id)
    except RestrictionStoreError as e:
        raise _store_unavailable(e) from None
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restriction not found")
    logger.info(f"[ROUTE-ACCESS] Deleted | user={identity.id} | id={restriction_id}")
    return {"deleted": True, "id": restriction_id}
