"""
Lead ownership.

A lead referred by a tax preparer belongs to that preparer. Client and
affiliate referrals, and unattributed leads, go to the corporate pool.
"""

import logging
from typing import Optional

from .models import AttributionRecord, ReferrerType

logger = logging.getLogger(__name__)


def assign_lead_owner(attribution: Optional[AttributionRecord]) -> Optional[str]:
    """
    User id of the preparer who owns a new lead, or None for corporate.
    """
    if attribution is None:
        return None

    if attribution.referrer_type == ReferrerType.TAX_PREPARER:
        if attribution.referrer_user_id is None:
            logger.warning(
                f"Preparer profile {attribution.referrer_profile_id} has no user; "
                f"lead goes to corporate"
            )
        return attribution.referrer_user_id

    logger.info(
        f"Lead from {attribution.referrer_type.value} referral "
        f"{attribution.referrer_username!r} assigned to corporate"
    )
    return None
