import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from core.constants import REASONS
from .models import TrustLog

logger = logging.getLogger("togethr.gamification")


class TrustEngine:
    @classmethod
    def reason_for(cls, unit, event):
        return REASONS[unit.LABEL][event]

    @classmethod
    def award(cls, user_ids, amount, reason, unit):
        """
        Add `amount` trust points to every user in `user_ids`.

        One batch UPDATE with an F() expression, so concurrent awards never
        lose increments. Callers that need the award tied to another write
        (status change, member insert) call this inside their own atomic block.
        Returns the number of users rewarded.
        """
        user_ids = list(dict.fromkeys(user_ids))
        if not user_ids or amount <= 0:
            return 0

        User = get_user_model()
        with transaction.atomic():
            updated = User.objects.filter(id__in=user_ids).update(
                trust_points=F("trust_points") + amount
            )
            TrustLog.objects.bulk_create([
                TrustLog(
                    user_id=user_id,
                    amount=amount,
                    reason=reason,
                    unit_label=unit.LABEL,
                    unit_id=unit.pk,
                )
                for user_id in user_ids
            ])

        logger.info(f"Awarded {amount} trust points to {updated} users ({reason} {unit.LABEL}#{unit.pk})")
        return updated
