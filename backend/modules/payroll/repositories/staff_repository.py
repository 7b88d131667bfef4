from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from ...staff.models.staff_models import StaffMember
from ..interfaces.repositories import StaffRecord, StaffRepository


def to_staff_record(staff: StaffMember) -> StaffRecord:
    return StaffRecord(
        id=staff.id,
        full_name=staff.full_name,
        hourly_rate=staff.hourly_rate,
        commission_rate=staff.commission_rate,
        skill_premium_hourly=staff.skill_premium_hourly,
        is_active=bool(staff.is_active),
    )


class SqlAlchemyStaffRepository(StaffRepository):

    def __init__(self, db: Session):
        self.db = db

    def get_staff(self, staff_id: int) -> Optional[StaffRecord]:
        staff = self.db.query(StaffMember).filter(StaffMember.id == staff_id).first()
        return to_staff_record(staff) if staff else None

    def list_active_staff(self, staff_ids: Optional[Sequence[int]] = None) -> List[StaffRecord]:
        query = self.db.query(StaffMember).filter(StaffMember.is_active.is_(True))
        if staff_ids is not None:
            query = query.filter(StaffMember.id.in_(list(staff_ids)))
        return [to_staff_record(s) for s in query.order_by(StaffMember.id).all()]

    def count_active_staff(self) -> int:
        return self.db.query(StaffMember).filter(StaffMember.is_active.is_(True)).count()
