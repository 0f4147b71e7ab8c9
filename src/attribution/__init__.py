"""
Referral attribution.

Resolves which preparer, affiliate or client a visit is credited to from
the ref/code query parameters and the ref cookie, falling back to recent
referral-link clicks by the same email or phone.

Usage:
    from attribution import AttributionResolver, ProfileRepository

    resolver = AttributionResolver(ProfileRepository(session))
    result = resolver.resolve(request.query_params, request.cookies)
    apply_cookie_mutations(response, result.cookies)
"""

from .codes import (
    RESERVED_CODES,
    CodeValidation,
    is_reserved_code,
    is_well_formed_code,
    normalize_code,
    validate_custom_tracking_code,
)
from .contact import normalize_email, phone_digits, phone_match_key
from .models import (
    CONFIDENCE,
    AttributionMethod,
    AttributionRecord,
    AttributionResult,
    ReferrerProfile,
    ReferrerType,
    VanityResolution,
)
from .repository import AttributionLookupError, ProfileLookup, ProfileRepository
from .resolver import AttributionResolver, resolve_attribution
from .assignment import assign_lead_owner

__all__ = [
    "RESERVED_CODES",
    "CodeValidation",
    "is_reserved_code",
    "is_well_formed_code",
    "normalize_code",
    "validate_custom_tracking_code",
    "normalize_email",
    "phone_digits",
    "phone_match_key",
    "CONFIDENCE",
    "AttributionMethod",
    "AttributionRecord",
    "AttributionResult",
    "ReferrerProfile",
    "ReferrerType",
    "VanityResolution",
    "AttributionLookupError",
    "ProfileLookup",
    "ProfileRepository",
    "AttributionResolver",
    "resolve_attribution",
    "assign_lead_owner",
]
