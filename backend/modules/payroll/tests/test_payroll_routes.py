# backend/modules/payroll/tests/test_payroll_routes.py

"""
Unit tests for salon payroll API routes.

Tests cover:
- Calculation for one staff member and for the whole salon
- Approval and payment transitions
- Summary, bonus ledger, settings and tier endpoints
- Error responses
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal

from core.database import get_db, get_session_factory
from ..repositories.settings_repository import SqlAlchemySettingsRepository
from ..routes.payroll_routes import router
from ..schemas.error_schemas import PayrollErrorCodes

BASE = "/api/v1/salon-payroll"


@pytest.fixture
def client(file_session_factory):
    app = FastAPI()
    app.include_router(router)

    def override_get_db():
        db = file_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: file_session_factory
    return TestClient(app)


@pytest.fixture
def salon(file_session_factory, staff_factory, appointment_factory, seed_tiers):
    db = file_session_factory()
    try:
        seed_tiers(db)
        SqlAlchemySettingsRepository(db).ensure_defaults()
        stylist = staff_factory(db, full_name="Hnin Wai", email="hnin@salon.test")
        colorist = staff_factory(db, full_name="Ko Zaw", email="zaw@salon.test")
        appointment_factory(db, stylist.id, date(2024, 3, 4), services=((Decimal("120000.00"), 1, 90),))
        appointment_factory(db, colorist.id, date(2024, 3, 9), services=((Decimal("80000.00"), 1, 60),))
        return {"stylist": stylist.id, "colorist": colorist.id}
    finally:
        db.close()


def calculate(client, staff_id, month=3, year=2024):
    return client.post(f"{BASE}/calculate", json={"month": month, "year": year, "staff_id": staff_id})


class TestCalculateRoutes:

    def test_calculate_single_staff(self, client, salon):
        response = calculate(client, salon["stylist"])

        assert response.status_code == 200
        data = response.json()
        assert data["payroll"]["status"] == "calculated"
        assert data["breakdown"]["staff_name"] == "Hnin Wai"
        # 120000 x 15% commission, 105 minutes at 10000/hour
        assert Decimal(data["breakdown"]["base_commission"]) == Decimal("18000.00")
        assert Decimal(data["breakdown"]["total_hours"]) == Decimal("1.75")
        assert Decimal(data["breakdown"]["base_pay"]) == Decimal("17500.00")
        assert Decimal(data["payroll"]["gross_pay"]) == Decimal(data["breakdown"]["gross_pay"])
        assert data["batch"] is None

    def test_calculate_unknown_staff(self, client, salon):
        response = calculate(client, 9999)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == PayrollErrorCodes.RECORD_NOT_FOUND

    def test_calculate_invalid_month(self, client, salon):
        response = client.post(f"{BASE}/calculate", json={"month": 13, "year": 2024})
        assert response.status_code == 422

    def test_calculate_whole_salon(self, client, salon):
        response = client.post(f"{BASE}/calculate", json={"month": 3, "year": 2024})

        assert response.status_code == 200
        data = response.json()
        assert data["batch"]["successful_count"] == 2
        assert data["batch"]["failed_count"] == 0
        assert data["summary"]["total_staff"] == 2
        assert data["payroll"] is None

    def test_recalculate_paid_payroll_conflicts(self, client, salon):
        payroll_id = calculate(client, salon["stylist"]).json()["payroll"]["id"]
        client.post(f"{BASE}/{payroll_id}/approve", json={"approved_by": "owner"})
        client.post(f"{BASE}/{payroll_id}/mark-paid")

        response = calculate(client, salon["stylist"])

        assert response.status_code == 409


class TestLifecycleRoutes:

    def test_approve_then_pay(self, client, salon):
        payroll_id = calculate(client, salon["stylist"]).json()["payroll"]["id"]

        approved = client.post(f"{BASE}/{payroll_id}/approve", json={"approved_by": "owner"})
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"
        assert approved.json()["approved_by"] == "owner"

        paid = client.post(f"{BASE}/{payroll_id}/mark-paid")
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert paid.json()["paid_at"] is not None

    def test_double_approval_conflicts(self, client, salon):
        payroll_id = calculate(client, salon["stylist"]).json()["payroll"]["id"]
        client.post(f"{BASE}/{payroll_id}/approve", json={"approved_by": "owner"})

        response = client.post(f"{BASE}/{payroll_id}/approve", json={"approved_by": "owner"})

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["code"] == PayrollErrorCodes.INVALID_STATUS_TRANSITION
        assert detail["error"] == "InvalidPayrollTransitionError"

    def test_pay_unapproved_conflicts(self, client, salon):
        payroll_id = calculate(client, salon["stylist"]).json()["payroll"]["id"]
        assert client.post(f"{BASE}/{payroll_id}/mark-paid").status_code == 409

    def test_approve_unknown_payroll(self, client, salon):
        response = client.post(f"{BASE}/4242/approve", json={"approved_by": "owner"})
        assert response.status_code == 404

    def test_blank_approver_rejected(self, client, salon):
        payroll_id = calculate(client, salon["stylist"]).json()["payroll"]["id"]
        response = client.post(f"{BASE}/{payroll_id}/approve", json={"approved_by": "   "})
        assert response.status_code == 422


class TestSummaryRoute:

    def test_empty_summary(self, client, salon):
        response = client.get(f"{BASE}/summary", params={"month": 1, "year": 2024})

        assert response.status_code == 200
        data = response.json()
        assert data["total_staff"] == 0
        assert Decimal(data["total_gross_pay"]) == Decimal("0")
        assert data["records"] == []
        assert data["currency"] == "MMK"

    def test_summary_after_calculation(self, client, salon):
        calculate(client, salon["stylist"])
        calculate(client, salon["colorist"])

        data = client.get(f"{BASE}/summary", params={"month": 3, "year": 2024}).json()

        assert data["total_staff"] == 2
        assert [r["staff_name"] for r in data["records"]] == ["Hnin Wai", "Ko Zaw"]
        assert Decimal(data["total_net_pay"]) == sum(Decimal(r["net_pay"]) for r in data["records"])


class TestBonusRoutes:

    def test_create_list_delete(self, client, salon):
        created = client.post(f"{BASE}/bonuses", json={
            "staff_id": salon["stylist"],
            "bonus_type": "holiday",
            "amount": "25000.00",
            "description": "Thingyan festival bonus",
            "period_month": 4,
            "period_year": 2024,
            "awarded_date": "2024-04-12",
        })
        assert created.status_code == 201
        bonus = created.json()
        assert bonus["bonus_type"] == "holiday"

        listed = client.get(f"{BASE}/bonuses", params={"month": 4, "year": 2024}).json()
        assert [b["id"] for b in listed] == [bonus["id"]]

        assert client.delete(f"{BASE}/bonuses/{bonus['id']}").status_code == 204
        assert client.get(f"{BASE}/bonuses", params={"month": 4, "year": 2024}).json() == []

    def test_bonus_counts_toward_payroll(self, client, salon):
        client.post(f"{BASE}/bonuses", json={
            "staff_id": salon["colorist"],
            "amount": "10000",
            "description": "Top reviews",
            "period_month": 3,
            "period_year": 2024,
        })
        breakdown = calculate(client, salon["colorist"]).json()["breakdown"]
        assert Decimal(breakdown["individual_bonuses"]) == Decimal("10000.00")

    def test_bonus_for_unknown_staff(self, client, salon):
        response = client.post(f"{BASE}/bonuses", json={
            "staff_id": 9999, "amount": "1", "description": "x", "period_month": 3, "period_year": 2024,
        })
        assert response.status_code == 404

    def test_non_positive_amount_rejected(self, client, salon):
        response = client.post(f"{BASE}/bonuses", json={
            "staff_id": salon["stylist"], "amount": "0", "description": "x",
            "period_month": 3, "period_year": 2024,
        })
        assert response.status_code == 422

    def test_update_bonus(self, client, salon):
        bonus = client.post(f"{BASE}/bonuses", json={
            "staff_id": salon["colorist"],
            "amount": "10000",
            "description": "Top reviews",
            "period_month": 3,
            "period_year": 2024,
        }).json()

        response = client.patch(f"{BASE}/bonuses/{bonus['id']}", json={
            "amount": "15000.00", "notes": "Corrected after review count",
        })

        assert response.status_code == 200
        assert Decimal(response.json()["amount"]) == Decimal("15000.00")
        assert response.json()["description"] == "Top reviews"
        breakdown = calculate(client, salon["colorist"]).json()["breakdown"]
        assert Decimal(breakdown["individual_bonuses"]) == Decimal("15000.00")

    def test_update_bonus_validation_and_missing(self, client, salon):
        assert client.patch(f"{BASE}/bonuses/4242", json={"amount": "5"}).status_code == 404
        bonus = client.post(f"{BASE}/bonuses", json={
            "staff_id": salon["stylist"], "amount": "1", "description": "x",
            "period_month": 3, "period_year": 2024,
        }).json()
        assert client.patch(f"{BASE}/bonuses/{bonus['id']}", json={"amount": "0"}).status_code == 422

    def test_delete_unknown_bonus(self, client, salon):
        assert client.delete(f"{BASE}/bonuses/4242").status_code == 404


class TestSettingsAndTierRoutes:

    def test_list_settings(self, client, salon):
        keys = {s["setting_key"] for s in client.get(f"{BASE}/settings").json()}
        assert "product_commission_rate" in keys
        assert "buffer_time_minutes" in keys

    def test_update_setting_changes_calculation(self, client, salon):
        response = client.patch(f"{BASE}/settings", json={
            "setting_key": "buffer_time_minutes", "setting_value": "0", "updated_by": "owner",
        })
        assert response.status_code == 200
        assert Decimal(response.json()["setting_value"]) == Decimal("0")

        breakdown = calculate(client, salon["stylist"]).json()["breakdown"]
        assert Decimal(breakdown["total_hours"]) == Decimal("1.50")

    def test_update_unknown_setting_key(self, client, salon):
        response = client.patch(f"{BASE}/settings", json={"setting_key": "tip_rate", "setting_value": "5"})
        assert response.status_code == 422

    def test_list_tiers_ascending(self, client, salon):
        tiers = client.get(f"{BASE}/tiers").json()
        assert [t["name"] for t in tiers] == ["Junior", "Senior", "Master"]


def tier_id(client, name):
    return next(t["id"] for t in client.get(f"{BASE}/tiers").json() if t["name"] == name)


class TestTierAdminRoutes:

    def test_create_tier(self, client, salon):
        response = client.post(f"{BASE}/tiers", json={
            "name": "Legend",
            "min_appointments": 50,
            "commission_multiplier": "1.50",
            "monthly_bonus": "100000.00",
        })

        assert response.status_code == 201
        tier = response.json()
        assert tier["is_active"] is True
        assert tier["max_appointments"] is None
        assert [t["name"] for t in client.get(f"{BASE}/tiers").json()] == ["Junior", "Senior", "Master", "Legend"]

    def test_create_inverted_range_rejected(self, client, salon):
        response = client.post(f"{BASE}/tiers", json={
            "name": "Broken", "min_appointments": 10, "max_appointments": 5,
        })
        assert response.status_code == 422

    def test_update_tier_changes_calculation(self, client, salon):
        response = client.patch(f"{BASE}/tiers/{tier_id(client, 'Junior')}", json={"monthly_bonus": "5000.00"})

        assert response.status_code == 200
        assert Decimal(response.json()["monthly_bonus"]) == Decimal("5000.00")
        breakdown = calculate(client, salon["stylist"]).json()["breakdown"]
        assert breakdown["performance_tier_name"] == "Junior"
        assert Decimal(breakdown["tier_bonus"]) == Decimal("5000.00")

    def test_update_tier_open_ended(self, client, salon):
        response = client.patch(f"{BASE}/tiers/{tier_id(client, 'Senior')}", json={"max_appointments": None})
        assert response.status_code == 200
        assert response.json()["max_appointments"] is None
        assert response.json()["min_appointments"] == 11

    def test_update_tier_inverted_range(self, client, salon):
        response = client.patch(f"{BASE}/tiers/{tier_id(client, 'Senior')}", json={"max_appointments": 5})

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == PayrollErrorCodes.INVALID_TIER_RANGE

    def test_update_unknown_tier(self, client, salon):
        response = client.patch(f"{BASE}/tiers/4242", json={"name": "Ghost"})
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == PayrollErrorCodes.RECORD_NOT_FOUND

    def test_delete_unused_tier(self, client, salon):
        assert client.delete(f"{BASE}/tiers/{tier_id(client, 'Master')}").status_code == 204
        assert [t["name"] for t in client.get(f"{BASE}/tiers").json()] == ["Junior", "Senior"]

    def test_delete_tier_used_by_payroll_deactivates_it(self, client, salon):
        calculate(client, salon["stylist"])
        junior_id = tier_id(client, "Junior")

        assert client.delete(f"{BASE}/tiers/{junior_id}").status_code == 204

        junior = next(t for t in client.get(f"{BASE}/tiers").json() if t["id"] == junior_id)
        assert junior["is_active"] is False
        breakdown = calculate(client, salon["colorist"]).json()["breakdown"]
        assert breakdown["performance_tier_name"] is None

    def test_delete_unknown_tier(self, client, salon):
        assert client.delete(f"{BASE}/tiers/4242").status_code == 404
