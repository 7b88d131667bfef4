from datetime import date
from decimal import Decimal
from typing import List, Optional
import logging
from sqlalchemy.orm import Session

from ...staff.models.staff_models import StaffMember
from ..enums.payroll_enums import BonusType
from ..exceptions import PayrollNotFoundError
from ..interfaces.repositories import BonusRepository, TeamBonusRecord
from ..models.payroll_configuration import StaffBonus, TeamBonus

logger = logging.getLogger(__name__)

_BONUS_UPDATABLE_FIELDS = (
    "bonus_type",
    "amount",
    "description",
    "awarded_date",
    "period_month",
    "period_year",
    "notes",
)


class SqlAlchemyBonusRepository(BonusRepository):
    """Individual and team bonus ledgers."""

    def __init__(self, db: Session):
        self.db = db

    def list_individual_bonus_amounts(self, staff_id: int, month: int, year: int) -> List[Decimal]:
        rows = (
            self.db.query(StaffBonus.amount)
            .filter(
                StaffBonus.staff_id == staff_id,
                StaffBonus.period_month == month,
                StaffBonus.period_year == year,
            )
            .all()
        )
        return [row.amount for row in rows]

    def list_achieved_team_bonuses(self, start: date, end_exclusive: date) -> List[TeamBonusRecord]:
        rows = (
            self.db.query(TeamBonus)
            .filter(
                TeamBonus.is_achieved.is_(True),
                TeamBonus.period_start < end_exclusive,
                TeamBonus.period_end >= start,
            )
            .order_by(TeamBonus.id)
            .all()
        )
        return [
            TeamBonusRecord(
                id=row.id,
                bonus_amount=row.bonus_amount,
                period_start=row.period_start,
                period_end=row.period_end,
                distribution_method=row.distribution_method,
            )
            for row in rows
        ]

    # Admin operations

    def list_staff_bonuses(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        staff_id: Optional[int] = None,
    ) -> List[StaffBonus]:
        query = self.db.query(StaffBonus)
        if month is not None:
            query = query.filter(StaffBonus.period_month == month)
        if year is not None:
            query = query.filter(StaffBonus.period_year == year)
        if staff_id is not None:
            query = query.filter(StaffBonus.staff_id == staff_id)
        return query.order_by(StaffBonus.awarded_date.desc(), StaffBonus.id.desc()).all()

    def create_staff_bonus(
        self,
        staff_id: int,
        amount: Decimal,
        description: str,
        period_month: int,
        period_year: int,
        bonus_type: BonusType = BonusType.PERFORMANCE,
        awarded_date: Optional[date] = None,
        created_by: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> StaffBonus:
        staff_exists = self.db.query(StaffMember.id).filter(StaffMember.id == staff_id).first()
        if not staff_exists:
            raise PayrollNotFoundError("Staff member", staff_id)

        bonus = StaffBonus(
            staff_id=staff_id,
            bonus_type=bonus_type,
            amount=amount,
            description=description,
            awarded_date=awarded_date or date.today(),
            period_month=period_month,
            period_year=period_year,
            created_by=created_by,
            notes=notes,
        )
        self.db.add(bonus)
        self.db.commit()
        self.db.refresh(bonus)

        logger.info(
            f"Recorded {bonus.bonus_type.value} bonus {bonus.amount} for staff {staff_id} "
            f"({period_year}-{period_month:02d})"
        )
        return bonus

    def get_staff_bonus(self, bonus_id: int) -> StaffBonus:
        bonus = self.db.query(StaffBonus).filter(StaffBonus.id == bonus_id).first()
        if not bonus:
            raise PayrollNotFoundError("Staff bonus", bonus_id)
        return bonus

    def update_staff_bonus(self, bonus_id: int, **changes) -> StaffBonus:
        bonus = self.get_staff_bonus(bonus_id)
        changes = {
            k: v for k, v in changes.items()
            if k in _BONUS_UPDATABLE_FIELDS and (v is not None or k == "notes")
        }
        for name, value in changes.items():
            setattr(bonus, name, value)
        self.db.commit()
        self.db.refresh(bonus)

        logger.info(f"Updated staff bonus {bonus_id}: {', '.join(sorted(changes)) or 'no changes'}")
        return bonus

    def delete_staff_bonus(self, bonus_id: int) -> None:
        bonus = self.get_staff_bonus(bonus_id)
        self.db.delete(bonus)
        self.db.commit()
        logger.info(f"Deleted staff bonus {bonus_id}")
