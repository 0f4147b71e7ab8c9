"""
Attribution Resolver

Decides which referrer a request is credited to:

    1. ref / code query parameter that resolves to a profile   (ref_param, 100)
    2. the ref cookie from an earlier click, if it resolves    (cookie, 100)
    3. a recent link click by the same email                   (email_match, 90)
    4. a recent link click by the same phone number            (phone_match, 85)
    5. nothing                                                  (direct)

The email and phone fallbacks credit visitors who clicked a referral link on
one device and sign up on another. They only look back
attribution_match_window_days, and credit the link creator under their
short-link username (or the clicked code when they have none).

A resolved query code is persisted in the ref cookie together with a fresh
click id. The resolver returns cookie mutations; it never writes a response.

With attribution_model = "first_click", a still-resolvable cookie wins over
a new query code and is not rewritten.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Mapping, Optional, Tuple
from uuid import uuid4

from config.settings import Settings, get_settings
from core.cookies import CookieMutation, set_cookie

from .codes import is_lookup_candidate
from .contact import normalize_email, phone_match_key
from .models import (
    AttributionMethod,
    AttributionRecord,
    AttributionResult,
    ReferrerProfile,
    VanityResolution,
)
from .repository import AttributionLookupError, ProfileLookup

logger = logging.getLogger(__name__)

QUERY_PARAMS = ("ref", "code")


class AttributionResolver:
    """Resolve attribution against a profile lookup."""

    def __init__(self, lookup: ProfileLookup, settings: Optional[Settings] = None):
        self._lookup = lookup
        self._settings = settings or get_settings()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def resolve(
        self,
        query_params: Mapping[str, str],
        cookies: Mapping[str, str],
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> AttributionResult:
        """
        Resolve attribution for a request's query string and cookie jar.

        email and phone, when the visitor has given them, are tried after
        the cookie.
        """
        query_code = self._query_code(query_params)
        cookie_code = cookies.get(self._settings.attribution_cookie_name)

        if self._settings.attribution_model == "first_click" and cookie_code:
            existing = self._from_cookie(cookie_code)
            if existing is not None:
                if query_code:
                    logger.debug(f"First-click attribution kept {existing.referrer_username!r} over {query_code!r}")
                return AttributionResult(attribution=existing, method=AttributionMethod.COOKIE)

        if query_code:
            resolved = self._find(query_code)
            if resolved is not None:
                code, profile = resolved
                record = AttributionRecord.from_profile(code, profile, AttributionMethod.REF_PARAM)
                logger.info(f"Attributed visit to {code!r} ({record.referrer_type.value}) via query parameter")
                return AttributionResult(
                    attribution=record,
                    method=AttributionMethod.REF_PARAM,
                    cookies=self._persist(code),
                )

        if cookie_code:
            record = self._from_cookie(cookie_code)
            if record is not None:
                return AttributionResult(attribution=record, method=AttributionMethod.COOKIE)

        matched = self._from_contact(email, phone)
        if matched is not None:
            return AttributionResult(attribution=matched, method=matched.method)

        return AttributionResult()

    def resolve_vanity(self, segment: str) -> VanityResolution:
        """
        Treat a path segment (/ref/<segment>) as a referral link.

        found is False for reserved, malformed or unknown codes; the caller
        should send the visitor to the not-found page.
        """
        resolved = self._find(segment)
        if resolved is None:
            return VanityResolution(found=False)

        code, profile = resolved
        record = AttributionRecord.from_profile(code, profile, AttributionMethod.REF_PARAM)
        logger.info(f"Attributed vanity link {code!r} ({record.referrer_type.value})")
        return VanityResolution(found=True, attribution=record, cookies=self._persist(code))

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _query_code(query_params: Mapping[str, str]) -> Optional[str]:
        for name in QUERY_PARAMS:
            value = query_params.get(name)
            if value and value.strip():
                return value
        return None

    def _from_cookie(self, cookie_code: str) -> Optional[AttributionRecord]:
        resolved = self._find(cookie_code)
        if resolved is None:
            return None
        code, profile = resolved
        return AttributionRecord.from_profile(code, profile, AttributionMethod.COOKIE)

    def _find(self, raw: Optional[str]) -> Optional[Tuple[str, ReferrerProfile]]:
        code = is_lookup_candidate(raw)
        if code is None:
            logger.debug(f"Ignoring reserved or malformed code {raw!r}")
            return None

        try:
            profile = self._lookup.find_profile_by_any_tracking_code(code)
        except AttributionLookupError:
            logger.warning(f"Attribution lookup failed for {code!r}; treating as unattributed", exc_info=True)
            return None

        if profile is None:
            logger.debug(f"No profile for code {code!r}")
            return None
        return code, profile

    def _from_contact(self, email: Optional[str], phone: Optional[str]) -> Optional[AttributionRecord]:
        since = datetime.utcnow() - timedelta(days=self._settings.attribution_match_window_days)

        email_key = normalize_email(email)
        if email_key:
            record = self._match(self._lookup.find_referrer_by_click_email, email_key, since, AttributionMethod.EMAIL_MATCH)
            if record is not None:
                return record

        phone_key = phone_match_key(phone)
        if phone_key:
            return self._match(self._lookup.find_referrer_by_click_phone, phone_key, since, AttributionMethod.PHONE_MATCH)
        return None

    def _match(
        self,
        find: Callable[[str, datetime], Optional[Tuple[str, ReferrerProfile]]],
        key: str,
        since: datetime,
        method: AttributionMethod,
    ) -> Optional[AttributionRecord]:
        try:
            found = find(key, since)
        except AttributionLookupError:
            logger.warning(f"{method.value} lookup failed; treating as unattributed", exc_info=True)
            return None
        if found is None:
            return None

        code, profile = found
        record = AttributionRecord.from_profile(profile.short_link_username or code, profile, method)
        logger.info(f"Attributed visit to {record.referrer_username!r} ({record.referrer_type.value}) via {method.value}")
        return record

    def _persist(self, code: str) -> Tuple[CookieMutation, ...]:
        settings = self._settings
        mutations: List[CookieMutation] = [
            set_cookie(
                settings.attribution_cookie_name,
                code,
                max_age=settings.attribution_cookie_max_age,
                secure=settings.cookie_secure,
            ),
            set_cookie(
                settings.attribution_click_cookie_name,
                uuid4().hex,
                max_age=settings.attribution_cookie_max_age,
                secure=settings.cookie_secure,
            ),
        ]
        return tuple(mutations)


def resolve_attribution(
    query_params: Mapping[str, str],
    cookies: Mapping[str, str],
    lookup: ProfileLookup,
    settings: Optional[Settings] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> AttributionResult:
    """Functional form of AttributionResolver.resolve."""
    return AttributionResolver(lookup, settings).resolve(query_params, cookies, email=email, phone=phone)
