"""Returning-guest discount eligibility."""

from __future__ import annotations

import logging
from uuid import UUID

from .models import Account

logger = logging.getLogger(__name__)


class DiscountEligibilityTracker:
    """Reads and sets the per-account discount flag.

    Only booking admission calls this; the flag is never derived from
    booking history.
    """

    def is_eligible(self, account_id: UUID | None) -> bool:
        if account_id is None:
            return False
        return Account.objects.filter(pk=account_id, discount_eligible=True).exists()

    def mark_eligible(self, account_id: UUID) -> bool:
        """Set the flag; returns True only when it actually changed.

        The conditional update makes repeated calls no-ops.
        """
        changed = Account.objects.filter(pk=account_id, discount_eligible=False).update(
            discount_eligible=True
        )
        if changed:
            logger.info(f"Account {account_id} is now eligible for the returning guest discount")
        return bool(changed)
