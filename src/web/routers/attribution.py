"""
Attribution API.

- GET  /api/attribution                who this visit is credited to
- POST /api/attribution/lead           attribution for a lead form (email/phone)
- GET  /api/tracking-codes/validate    check a custom tracking code
- GET  /ref/{code}                     referral link: set cookies, go home
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from attribution import (
    AttributionLookupError,
    AttributionMethod,
    AttributionResult,
    AttributionResolver,
    ProfileRepository,
    assign_lead_owner,
    normalize_email,
    phone_digits,
    validate_custom_tracking_code,
)
from config.settings import Settings
from core.cookies import apply_cookie_mutations
from web.dependencies import get_app_settings, get_attribution_resolver, get_profile_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Attribution"])


class LeadContact(BaseModel):
    """Contact details from a lead form."""
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)


def _attribution_response(result: AttributionResult) -> JSONResponse:
    body = result.to_dict()
    body["leadOwnerId"] = assign_lead_owner(result.attribution)
    return apply_cookie_mutations(JSONResponse(body), result.cookies)


@router.get("/api/attribution")
def get_attribution(
    request: Request,
    resolver: AttributionResolver = Depends(get_attribution_resolver),
):
    """
    Resolve attribution from ?ref= / ?code= and the ref cookie.

    Also reports who would own a lead submitted now.
    """
    result = resolver.resolve(request.query_params, request.cookies)
    return _attribution_response(result)


@router.post("/api/attribution/lead")
def attribute_lead(
    request: Request,
    contact: LeadContact,
    resolver: AttributionResolver = Depends(get_attribution_resolver),
    repository: ProfileRepository = Depends(get_profile_repository),
):
    """
    Attribution for a submitted lead form.

    Falls back to the visitor's email and phone when there is no referral
    code or cookie. When a link or cookie did attribute the visit, the
    contact details are stored with a link click so the same visitor can
    be matched later from another device.
    """
    result = resolver.resolve(request.query_params, request.cookies, email=contact.email, phone=contact.phone)

    email = normalize_email(contact.email)
    phone = phone_digits(contact.phone)
    record = result.attribution
    if record is not None and record.method in (AttributionMethod.REF_PARAM, AttributionMethod.COOKIE) and (email or phone):
        try:
            repository.record_link_click(record.referrer_profile_id, record.referrer_username, email=email, phone=phone)
        except AttributionLookupError:
            logger.warning(f"Could not store link click for {record.referrer_username!r}", exc_info=True)

    return _attribution_response(result)


@router.get("/api/tracking-codes/validate")
def validate_tracking_code(
    code: str = Query(..., max_length=64),
    repository: ProfileRepository = Depends(get_profile_repository),
):
    """Format rules plus availability across all tracking-code namespaces."""
    validation = validate_custom_tracking_code(code)
    if not validation.valid:
        return {"code": code, "valid": False, "available": False, "error": validation.error}

    try:
        available = repository.is_code_available(code)
    except AttributionLookupError:
        logger.exception(f"Availability check failed for tracking code {code!r}")
        return JSONResponse(
            status_code=503,
            content={"code": code, "valid": True, "available": False, "error": "Please try again later"},
        )

    return {
        "code": code,
        "valid": True,
        "available": available,
        "error": None if available else "This code is already taken",
    }


@router.get("/ref/{code}")
def referral_link(
    code: str,
    resolver: AttributionResolver = Depends(get_attribution_resolver),
    settings: Settings = Depends(get_app_settings),
):
    """Vanity referral link."""
    resolution = resolver.resolve_vanity(code)
    if not resolution.found:
        return RedirectResponse(settings.not_found_url, status_code=303)

    response = RedirectResponse(settings.home_url, status_code=303)
    return apply_cookie_mutations(response, resolution.cookies)
