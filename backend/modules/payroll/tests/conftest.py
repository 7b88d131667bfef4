# backend/modules/payroll/tests/conftest.py

"""
Pytest fixtures and factories for payroll module tests.

Provides in-memory repository fakes, SQLite sessions and record factories.
"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base
from ...appointments.enums.appointment_enums import AppointmentStatus
from ...appointments.models.appointment_models import (
    Appointment, AppointmentProduct, AppointmentService
)
from ...staff.models.staff_models import StaffMember
from ..enums.payroll_enums import TeamBonusDistribution
from ..interfaces.repositories import (
    AppointmentRecord, ServiceLine, StaffRecord, TeamBonusRecord, TierRecord
)
from ..models.payroll_configuration import PerformanceTier, StaffBonus, TeamBonus
from ..repositories import PayrollRepositories
from ..services.period_resolver import PayrollPeriod
from .fakes import (
    FakeAppointmentRepository,
    FakeBonusRepository,
    FakePayrollRecordRepository,
    FakeSettingsRepository,
    FakeStaffRepository,
    FakeTierRepository,
)


# Database fixtures
@pytest.fixture
def db_engine():
    """In-memory SQLite engine with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def file_session_factory(tmp_path):
    """Session factory over a temp-file SQLite database, safe for worker threads."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'payroll.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def march_2024():
    return PayrollPeriod(month=3, year=2024)


# ORM factories
@pytest.fixture
def staff_factory():
    def create_staff(
        db,
        full_name: str = "Thandar Aung",
        hourly_rate: Decimal = Decimal("10000.00"),
        commission_rate: Optional[Decimal] = Decimal("15.00"),
        skill_premium_hourly: Optional[Decimal] = None,
        is_active: bool = True,
        email: Optional[str] = None,
    ) -> StaffMember:
        staff = StaffMember(
            full_name=full_name,
            email=email,
            hourly_rate=hourly_rate,
            commission_rate=commission_rate,
            skill_premium_hourly=skill_premium_hourly,
            is_active=is_active,
        )
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff

    return create_staff


@pytest.fixture
def appointment_factory():
    def create_appointment(
        db,
        staff_id: Optional[int],
        appointment_date: date,
        status: AppointmentStatus = AppointmentStatus.COMPLETED,
        customer_email: Optional[str] = None,
        services: Sequence[tuple] = ((Decimal("100000.00"), 1, 60),),
        products: Sequence[tuple] = (),
    ) -> Appointment:
        """``services`` are (price, quantity, duration_minutes), ``products`` are (price, quantity)."""
        appointment = Appointment(
            staff_id=staff_id,
            appointment_date=appointment_date,
            status=status,
            customer_email=customer_email,
        )
        for price, quantity, duration in services:
            appointment.services.append(
                AppointmentService(price=price, quantity=quantity, duration_minutes=duration)
            )
        for price, quantity in products:
            appointment.products.append(AppointmentProduct(price=price, quantity=quantity))
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return create_appointment


@pytest.fixture
def seed_tiers():
    def create_tiers(db):
        tiers = [
            PerformanceTier(name="Junior", min_appointments=0, max_appointments=10,
                            commission_multiplier=Decimal("1.00"), monthly_bonus=Decimal("0.00")),
            PerformanceTier(name="Senior", min_appointments=11, max_appointments=20,
                            commission_multiplier=Decimal("1.10"), monthly_bonus=Decimal("20000.00")),
            PerformanceTier(name="Master", min_appointments=21, max_appointments=None,
                            commission_multiplier=Decimal("1.25"), monthly_bonus=Decimal("50000.00")),
        ]
        db.add_all(tiers)
        db.commit()
        return tiers

    return create_tiers


@pytest.fixture
def bonus_factory():
    def create_bonus(db, staff_id: int, amount: Decimal, month: int = 3, year: int = 2024,
                     description: str = "Monthly top seller"):
        bonus = StaffBonus(
            staff_id=staff_id,
            amount=amount,
            description=description,
            awarded_date=date(year, month, 28),
            period_month=month,
            period_year=year,
        )
        db.add(bonus)
        db.commit()
        db.refresh(bonus)
        return bonus

    return create_bonus


@pytest.fixture
def team_bonus_factory():
    def create_team_bonus(db, amount: Decimal, period_start: date, period_end: date,
                          is_achieved: bool = True,
                          distribution_method: TeamBonusDistribution = TeamBonusDistribution.EQUAL):
        bonus = TeamBonus(
            goal_description="Salon revenue target",
            bonus_amount=amount,
            period_start=period_start,
            period_end=period_end,
            is_achieved=is_achieved,
            distribution_method=distribution_method,
        )
        db.add(bonus)
        db.commit()
        db.refresh(bonus)
        return bonus

    return create_team_bonus


# In-memory fakes
@pytest.fixture
def staff_record():
    return StaffRecord(
        id=1,
        full_name="Thandar Aung",
        hourly_rate=Decimal("10000.00"),
        commission_rate=Decimal("15.00"),
        skill_premium_hourly=Decimal("1000.00"),
    )


@pytest.fixture
def tier_records():
    return [
        TierRecord(id=1, name="Junior", min_appointments=0, max_appointments=10,
                   commission_multiplier=Decimal("1.00"), monthly_bonus=Decimal("0.00")),
        TierRecord(id=2, name="Senior", min_appointments=11, max_appointments=20,
                   commission_multiplier=Decimal("1.10"), monthly_bonus=Decimal("20000.00")),
        TierRecord(id=3, name="Master", min_appointments=21, max_appointments=None,
                   commission_multiplier=Decimal("1.25"), monthly_bonus=Decimal("50000.00")),
    ]


@pytest.fixture
def appointment_record():
    def create_record(id: int, appointment_date: date, customer_key: Optional[str] = None,
                      services: Sequence[ServiceLine] = (), staff_id: int = 1):
        return AppointmentRecord(
            id=id,
            staff_id=staff_id,
            appointment_date=appointment_date,
            customer_key=customer_key,
            services=tuple(services),
        )

    return create_record


@pytest.fixture
def fake_repositories():
    """Build a PayrollRepositories bundle out of fakes; unspecified parts are empty."""
    def build(
        staff=(),
        appointments: Optional[FakeAppointmentRepository] = None,
        tiers=(),
        bonuses: Optional[FakeBonusRepository] = None,
        settings: Optional[dict] = None,
        records=(),
    ) -> PayrollRepositories:
        return PayrollRepositories(
            staff=FakeStaffRepository(staff),
            appointments=appointments or FakeAppointmentRepository(),
            tiers=FakeTierRepository(tiers),
            bonuses=bonuses or FakeBonusRepository(),
            settings=FakeSettingsRepository(settings),
            payroll_records=FakePayrollRecordRepository(records),
        )

    return build


@pytest.fixture
def team_bonus_record():
    def create_record(id: int, amount: Decimal, period_start: date, period_end: date,
                      method: TeamBonusDistribution = TeamBonusDistribution.EQUAL):
        return TeamBonusRecord(
            id=id,
            bonus_amount=amount,
            period_start=period_start,
            period_end=period_end,
            distribution_method=method,
        )

    return create_record
