from decimal import Decimal
from typing import List, Optional
import logging
from sqlalchemy.orm import Session

from ..exceptions import PayrollNotFoundError, PayrollValidationError
from ..interfaces.repositories import PerformanceTierRepository, TierRecord
from ..models.payroll_configuration import PerformanceTier
from ..models.payroll_models import MonthlyPayroll
from ..schemas.error_schemas import PayrollErrorCodes

logger = logging.getLogger(__name__)

_TIER_FIELDS = (
    "name",
    "min_appointments",
    "max_appointments",
    "commission_multiplier",
    "monthly_bonus",
    "is_active",
)


def to_tier_record(tier: PerformanceTier) -> TierRecord:
    return TierRecord(
        id=tier.id,
        name=tier.name,
        min_appointments=tier.min_appointments,
        max_appointments=tier.max_appointments,
        commission_multiplier=tier.commission_multiplier if tier.commission_multiplier is not None else Decimal("1.00"),
        monthly_bonus=tier.monthly_bonus if tier.monthly_bonus is not None else Decimal("0.00"),
    )


def _check_range(min_appointments: int, max_appointments: Optional[int]) -> None:
    if max_appointments is not None and max_appointments < min_appointments:
        raise PayrollValidationError(
            f"max_appointments ({max_appointments}) is below min_appointments ({min_appointments})",
            field="max_appointments",
            code=PayrollErrorCodes.INVALID_TIER_RANGE,
        )


class SqlAlchemyPerformanceTierRepository(PerformanceTierRepository):

    def __init__(self, db: Session):
        self.db = db

    def list_active_tiers(self) -> List[TierRecord]:
        tiers = (
            self.db.query(PerformanceTier)
            .filter(PerformanceTier.is_active.is_(True))
            .order_by(PerformanceTier.min_appointments.desc())
            .all()
        )
        return [to_tier_record(t) for t in tiers]

    # Admin operations

    def list_tiers(self) -> List[PerformanceTier]:
        """All tiers, lowest threshold first, for the admin screens."""
        return (
            self.db.query(PerformanceTier)
            .order_by(PerformanceTier.min_appointments.asc())
            .all()
        )

    def get_tier(self, tier_id: int) -> PerformanceTier:
        tier = self.db.query(PerformanceTier).filter(PerformanceTier.id == tier_id).first()
        if not tier:
            raise PayrollNotFoundError("Performance tier", tier_id)
        return tier

    def create_tier(
        self,
        name: str,
        min_appointments: int,
        max_appointments: Optional[int] = None,
        commission_multiplier: Decimal = Decimal("1.00"),
        monthly_bonus: Decimal = Decimal("0.00"),
        is_active: bool = True,
    ) -> PerformanceTier:
        _check_range(min_appointments, max_appointments)

        tier = PerformanceTier(
            name=name,
            min_appointments=min_appointments,
            max_appointments=max_appointments,
            commission_multiplier=commission_multiplier,
            monthly_bonus=monthly_bonus,
            is_active=is_active,
        )
        self.db.add(tier)
        self.db.commit()
        self.db.refresh(tier)

        logger.info(f"Created performance tier {tier.id} ({tier.name}, from {tier.min_appointments})")
        return tier

    def update_tier(self, tier_id: int, **changes) -> PerformanceTier:
        """
        Change some fields of a tier.

        Args:
            tier_id: Tier to change
            **changes: New values; unknown names and None for required columns are ignored

        Raises:
            PayrollNotFoundError: If the tier does not exist
            PayrollValidationError: If the resulting range is inverted
        """
        tier = self.get_tier(tier_id)
        # max_appointments may be cleared to make the tier open ended
        changes = {
            k: v for k, v in changes.items()
            if k in _TIER_FIELDS and (v is not None or k == "max_appointments")
        }

        _check_range(
            changes.get("min_appointments", tier.min_appointments),
            changes["max_appointments"] if "max_appointments" in changes else tier.max_appointments,
        )

        for name, value in changes.items():
            setattr(tier, name, value)
        self.db.commit()
        self.db.refresh(tier)

        logger.info(f"Updated performance tier {tier_id}: {', '.join(sorted(changes)) or 'no changes'}")
        return tier

    def delete_tier(self, tier_id: int) -> bool:
        """
        Remove a tier, or deactivate it when stored payroll records point at it.

        Returns:
            True if the row was deleted, False if it was only deactivated
        """
        tier = self.get_tier(tier_id)
        in_use = (
            self.db.query(MonthlyPayroll.id)
            .filter(MonthlyPayroll.performance_tier_id == tier_id)
            .first()
        )

        if in_use:
            tier.is_active = False
            self.db.commit()
            logger.info(f"Performance tier {tier_id} is referenced by payroll records; deactivated")
            return False

        self.db.delete(tier)
        self.db.commit()
        logger.info(f"Deleted performance tier {tier_id}")
        return True
