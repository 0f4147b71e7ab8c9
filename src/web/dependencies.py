"""
FastAPI Dependencies

Identity, viewing state and access checks for routes.

Usage:
    @router.get("/dashboard/admin")
    async def admin_dashboard(access: AccessResult = Depends(require_access(*ADMIN_ROLES))):
        ...

Every dependency re-reads the session token, profile row and viewing cookie
on each request; nothing is cached between requests.
"""

import logging
from typing import Callable, Generator, List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from attribution import AttributionResolver, ProfileRepository
from config.settings import Settings
from database.connection import get_db_session
from database.repositories import RestrictionStoreError, RouteRestrictionRepository
from middleware.correlation import set_request_user
from rbac.gate import AccessDecision, AccessResult, check_access
from rbac.identity import Identity, IdentityValidationError, parse_identity
from rbac.jwt import validate_access_token
from rbac.permissions import Permission
from rbac.restrictions import RouteRestriction
from rbac.roles import Role
from rbac.viewing import ViewingState, decode_viewing_state

logger = logging.getLogger(__name__)


# =============================================================================
# HTTP BEARER SECURITY
# =============================================================================

security = HTTPBearer(auto_error=False)


class AccessRedirect(Exception):
    """A page request that must be redirected (sign-in or forbidden)."""

    def __init__(self, url: str, result: Optional[AccessResult] = None):
        self.url = url
        self.result = result
        super().__init__(url)


# =============================================================================
# CORE DEPENDENCIES
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_app_settings)) -> Generator[Session, None, None]:
    with get_db_session(settings) as session:
        yield session


def get_profile_repository(session: Session = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(session)


def get_attribution_resolver(
    repository: ProfileRepository = Depends(get_profile_repository),
    settings: Settings = Depends(get_app_settings),
) -> AttributionResolver:
    return AttributionResolver(repository, settings)


def get_route_restriction_repository(session: Session = Depends(get_db)) -> RouteRestrictionRepository:
    return RouteRestrictionRepository(session)


def get_route_restrictions(
    repository: RouteRestrictionRepository = Depends(get_route_restriction_repository),
) -> List[RouteRestriction]:
    """
    Active route restrictions for this request.

    Raises 503 when they cannot be loaded; gated routes are not served
    without their restrictions.
    """
    try:
        return repository.list_active()
    except RestrictionStoreError:
        logger.error("Route restrictions unavailable", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Access rules unavailable",
        )


def _session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: Settings,
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repository: ProfileRepository = Depends(get_profile_repository),
    settings: Settings = Depends(get_app_settings),
) -> Optional[Identity]:
    """
    Identity for this request, or None when unauthenticated.

    The session token says who the user is. Role and permission overrides
    come from the profile row, so changes take effect on the next request.
    """
    token = _session_token(request, credentials, settings)
    payload = validate_access_token(token, settings)
    if payload is None:
        if token:
            logger.debug("Ignoring invalid or expired session token")
        return None

    claims = dict(payload)
    stored = repository.get_identity_claims(str(payload.get("sub", "")))
    if stored is not None:
        claims.pop("permissionOverrides", None)
        claims.pop("firstName", None)
        claims.pop("lastName", None)
        claims.update({key: value for key, value in stored.items() if value is not None})

    try:
        identity = parse_identity(claims)
    except IdentityValidationError as e:
        logger.warning(f"Rejecting session for user {payload.get('sub')!r}: {e}")
        return None

    set_request_user(identity.id)
    return identity


def get_viewing_state(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[ViewingState]:
    return decode_viewing_state(request.cookies.get(settings.viewing_cookie_name), settings)


def require_identity(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """
    Require authentication.

    Raises 401 if not authenticated.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


# =============================================================================
# ACCESS GATE
# =============================================================================

def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _return_to(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def require_access(
    *roles: Role,
    capability: Optional[Permission] = None,
) -> Callable[..., AccessResult]:
    """
    Gate a route by effective role, capability and route restrictions.

    API routes get 401/403; page routes are redirected to the sign-in or
    forbidden page.
    """

    def dependency(
        request: Request,
        identity: Optional[Identity] = Depends(get_identity),
        viewing_state: Optional[ViewingState] = Depends(get_viewing_state),
        restrictions: List[RouteRestriction] = Depends(get_route_restrictions),
        settings: Settings = Depends(get_app_settings),
    ) -> AccessResult:
        result = check_access(
            identity,
            required_roles=roles,
            required_capability=capability,
            viewing_state=viewing_state,
            return_to=_return_to(request),
            settings=settings,
            restrictions=restrictions,
        )

        if result.decision == AccessDecision.ALLOW:
            return result

        if _is_api_request(request):
            if result.decision == AccessDecision.REDIRECT_SIGNIN:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Authentication required",
                    headers={"WWW-Authenticate": "Bearer"},
                )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

        raise AccessRedirect(result.redirect_url, result)

    return dependency
