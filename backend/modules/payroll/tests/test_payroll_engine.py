# backend/modules/payroll/tests/test_payroll_engine.py

"""
Unit tests for PayrollEngine against in-memory repositories.
"""

import pytest
from datetime import date
from decimal import Decimal

from ..exceptions import PayrollNotFoundError
from ..interfaces.repositories import ProductLine, ServiceLine, StaffRecord, TierRecord
from ..services.payroll_engine import (
    PayrollEngine, calculate_base_pay, calculate_gross_pay, calculate_net_pay
)
from ..services.period_resolver import PayrollPeriod
from ..services.settings_provider import ResolvedSettings
from .fakes import FakeAppointmentRepository, FakeBonusRepository


class TestPayFormulas:

    def test_base_pay(self):
        assert calculate_base_pay(Decimal("10000"), Decimal("40")) == Decimal("400000.00")

    def test_base_pay_without_hours(self):
        assert calculate_base_pay(Decimal("10000"), Decimal("0")) == Decimal("0.00")

    def test_gross_pay(self):
        assert calculate_gross_pay(
            Decimal("200000"), Decimal("80000"), Decimal("10000"), Decimal("50000")
        ) == Decimal("340000")

    def test_net_pay(self):
        assert calculate_net_pay(Decimal("500000"), Decimal("25000")) == Decimal("475000")
        assert calculate_net_pay(Decimal("500000"), Decimal("0")) == Decimal("500000")

    def test_net_pay_may_be_negative(self):
        assert calculate_net_pay(Decimal("100"), Decimal("250")) == Decimal("-150")


class TestPayrollEngine:

    @pytest.fixture
    def period(self):
        return PayrollPeriod(month=3, year=2024)

    @pytest.fixture
    def salon(self, staff_record, appointment_record, team_bonus_record):
        """One stylist with three completed March appointments and an April one."""
        appointments = FakeAppointmentRepository(
            completed=[
                appointment_record(1, date(2024, 3, 2), customer_key="alice@example.com",
                                   services=[ServiceLine(Decimal("100000"), 1, 45)]),
                appointment_record(2, date(2024, 3, 10), customer_key="alice@example.com",
                                   services=[ServiceLine(Decimal("50000"), 2, 60)]),
                appointment_record(3, date(2024, 3, 31), customer_key="bob@example.com",
                                   services=[ServiceLine(Decimal("100000"), None, 75)]),
                appointment_record(4, date(2024, 4, 1), customer_key="bob@example.com",
                                   services=[ServiceLine(Decimal("700000"), 1, 120)]),
            ],
            products=[
                ProductLine(appointment_id=1, price=Decimal("20000"), quantity=2),
                ProductLine(appointment_id=4, price=Decimal("80000"), quantity=1),
            ],
            other_status_counts={1: 1},
        )
        tiers = [
            TierRecord(id=1, name="Junior", min_appointments=0, max_appointments=2,
                       commission_multiplier=Decimal("1.00"), monthly_bonus=Decimal("0")),
            TierRecord(id=2, name="Senior", min_appointments=3, max_appointments=None,
                       commission_multiplier=Decimal("1.10"), monthly_bonus=Decimal("30000")),
        ]
        bonuses = FakeBonusRepository(
            individual={(1, 3, 2024): [Decimal("10000")]},
            team=[team_bonus_record(1, Decimal("100000"), date(2024, 3, 1), date(2024, 3, 31))],
        )
        colleagues = [StaffRecord(id=i, full_name=f"Stylist {i}") for i in (2, 3, 4)]
        return dict(
            staff=[staff_record] + colleagues,
            appointments=appointments,
            tiers=tiers,
            bonuses=bonuses,
        )

    def test_full_breakdown(self, fake_repositories, salon, period):
        engine = PayrollEngine(fake_repositories(**salon))
        result = engine.calculate_staff_payroll(1, period)

        assert result.staff_name == "Thandar Aung"
        assert (result.period_month, result.period_year) == (3, 2024)
        assert result.completed_appointments == 3
        assert result.total_appointments == 4
        assert result.total_service_revenue == Decimal("300000.00")
        assert result.total_product_sales == Decimal("40000.00")

        # (45 + 60 + 75) minutes + 3 x 15 buffer = 225 minutes
        assert result.total_hours == Decimal("3.75")
        assert result.base_pay == Decimal("37500.00")

        assert result.performance_tier_id == 2
        assert result.performance_tier_name == "Senior"
        assert result.tier_multiplier == Decimal("1.10")
        assert result.base_commission == Decimal("45000.00")
        assert result.adjusted_commission == Decimal("49500.00")
        assert result.product_commission == Decimal("4000.00")
        assert result.total_commission == Decimal("53500.00")

        assert result.tier_bonus == Decimal("30000.00")
        assert result.individual_bonuses == Decimal("10000.00")
        assert result.team_bonuses == Decimal("25000.00")
        assert result.retention_bonus == Decimal("50.00")
        assert result.skill_premium == Decimal("3750.00")
        assert result.total_bonuses == Decimal("68800.00")

        assert result.gross_pay == Decimal("159800.00")
        assert result.deductions == Decimal("0.00")
        assert result.net_pay == result.gross_pay

    def test_gross_pay_is_sum_of_parts(self, fake_repositories, salon, period):
        result = PayrollEngine(fake_repositories(**salon)).calculate_staff_payroll(1, period)
        assert result.gross_pay == (
            result.base_pay + result.adjusted_commission + result.product_commission + result.total_bonuses
        )
        assert result.net_pay == result.gross_pay - result.deductions

    def test_explicit_settings_snapshot_is_used(self, fake_repositories, salon, period):
        repositories = fake_repositories(**salon, settings={"buffer_time_minutes": Decimal("30")})
        settings = ResolvedSettings(buffer_time_minutes=Decimal("0"))

        result = PayrollEngine(repositories).calculate_staff_payroll(1, period, settings=settings)

        assert result.total_hours == Decimal("3.00")
        assert repositories.settings.lookups == []

    def test_stored_settings_resolved_when_not_given(self, fake_repositories, salon, period):
        repositories = fake_repositories(
            **salon, settings={"product_commission_rate": Decimal("5"), "buffer_time_minutes": Decimal("0")}
        )
        result = PayrollEngine(repositories).calculate_staff_payroll(1, period)
        assert result.product_commission == Decimal("2000.00")
        assert result.total_hours == Decimal("3.00")

    def test_staff_without_activity(self, fake_repositories, period):
        staff = StaffRecord(id=7, full_name="New Hire", hourly_rate=None, commission_rate=None)
        result = PayrollEngine(fake_repositories(staff=[staff])).calculate_staff_payroll(7, period)

        assert result.total_hours == Decimal("0.00")
        assert result.base_pay == Decimal("0.00")
        assert result.performance_tier_id is None
        assert result.tier_multiplier == Decimal("1.00")
        assert result.tier_bonus == Decimal("0.00")
        assert result.total_commission == Decimal("0.00")
        assert result.retention_bonus == Decimal("0.00")
        assert result.gross_pay == Decimal("0.00")
        assert result.net_pay == Decimal("0.00")

    def test_unknown_staff_raises_not_found(self, fake_repositories, period):
        with pytest.raises(PayrollNotFoundError) as exc_info:
            PayrollEngine(fake_repositories()).calculate_staff_payroll(99, period)
        assert exc_info.value.status_code == 404
        assert "99" in exc_info.value.message

    def test_breakdown_to_dict(self, fake_repositories, salon, period):
        data = PayrollEngine(fake_repositories(**salon)).calculate_staff_payroll(1, period).to_dict()
        assert data["staff_id"] == 1
        assert data["gross_pay"] == Decimal("159800.00")
        assert "deductions" in data
