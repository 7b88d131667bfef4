# backend/modules/payroll/routes/payroll_routes.py

"""
Salon payroll admin API endpoints.

- Payroll calculation (single staff member or the whole salon)
- Approval and payment status changes
- Period summaries
- Individual bonus ledger, payroll settings and performance tiers
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from core.config import settings
from core.database import get_db, get_session_factory
from ..exceptions import PayrollException
from ..repositories import PayrollRepositories
from ..repositories.bonus_repository import SqlAlchemyBonusRepository
from ..repositories.settings_repository import SqlAlchemySettingsRepository
from ..repositories.tier_repository import SqlAlchemyPerformanceTierRepository
from ..schemas.error_schemas import ErrorResponse
from ..schemas.payroll_schemas import (
    ApprovePayrollRequest,
    BatchPayrollReportResponse,
    CalculatePayrollRequest,
    CalculatePayrollResponse,
    MonthlyPayrollResponse,
    PayrollSettingResponse,
    PayrollSettingUpdate,
    PayrollSummaryResponse,
    PerformanceTierCreate,
    PerformanceTierResponse,
    PerformanceTierUpdate,
    StaffBonusCreate,
    StaffBonusResponse,
    StaffBonusUpdate,
    StaffPayrollBreakdownResponse,
)
from ..services.batch_payroll_service import BatchPayrollService
from ..services.payroll_engine import PayrollEngine
from ..services.payroll_persister import PayrollPersister
from ..services.payroll_summary_service import PayrollSummaryService
from ..services.period_resolver import PayrollPeriod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/salon-payroll", tags=["Salon Payroll"])


def raise_http_error(exc: PayrollException) -> None:
    """Translate a payroll exception into an HTTP error with an ErrorResponse body."""
    raise HTTPException(
        status_code=exc.status_code,
        detail=ErrorResponse(
            error=type(exc).__name__,
            message=exc.message,
            code=exc.code,
            details=exc.details or None,
        ).model_dump(mode="json"),
    ) from exc


def _summary_for(db: Session, period: PayrollPeriod) -> PayrollSummaryResponse:
    summary = PayrollSummaryService(
        PayrollRepositories.from_session(db).payroll_records
    ).get_payroll_summary(period)
    response = PayrollSummaryResponse.model_validate(summary)
    response.currency = settings.payroll_currency
    return response


@router.post("/calculate", response_model=CalculatePayrollResponse)
async def calculate_payroll(
    request: CalculatePayrollRequest,
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
):
    """
    Calculate and store payroll for a month.

    ## Request Body
    - **month**, **year**: Payroll period
    - **staff_id**: Optional; when omitted every active staff member is processed

    ## Error Responses
    - **404**: Staff member not found
    - **409**: Existing payroll for the period is already paid
    """
    try:
        period = PayrollPeriod(month=request.month, year=request.year)

        if request.staff_id is not None:
            breakdown = PayrollEngine.from_session(db).calculate_staff_payroll(
                request.staff_id, period
            )
            record = PayrollPersister(db).save_payroll_record(breakdown, period)
            return CalculatePayrollResponse(
                period_month=period.month,
                period_year=period.year,
                payroll=MonthlyPayrollResponse.model_validate(record),
                breakdown=StaffPayrollBreakdownResponse.model_validate(breakdown),
            )

        report = await BatchPayrollService(session_factory).process_batch(period)
        return CalculatePayrollResponse(
            period_month=period.month,
            period_year=period.year,
            batch=BatchPayrollReportResponse.model_validate(report),
            summary=_summary_for(db, period),
        )
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.post("/{payroll_id}/approve", response_model=MonthlyPayrollResponse)
async def approve_payroll(
    payroll_id: int,
    request: ApprovePayrollRequest,
    db: Session = Depends(get_db),
):
    try:
        record = PayrollPersister(db).approve_payroll(payroll_id, request.approved_by)
        return MonthlyPayrollResponse.model_validate(record)
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.post("/{payroll_id}/mark-paid", response_model=MonthlyPayrollResponse)
async def mark_payroll_paid(payroll_id: int, db: Session = Depends(get_db)):
    try:
        record = PayrollPersister(db).mark_as_paid(payroll_id)
        return MonthlyPayrollResponse.model_validate(record)
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.get("/summary", response_model=PayrollSummaryResponse)
async def get_payroll_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    db: Session = Depends(get_db),
):
    """Totals of every stored payroll in the period, highest net pay first."""
    return _summary_for(db, PayrollPeriod(month=month, year=year))


# Bonus ledger


@router.get("/bonuses", response_model=List[StaffBonusResponse])
async def list_bonuses(
    staff_id: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    db: Session = Depends(get_db),
):
    return SqlAlchemyBonusRepository(db).list_staff_bonuses(
        month=month, year=year, staff_id=staff_id
    )


@router.post("/bonuses", response_model=StaffBonusResponse, status_code=status.HTTP_201_CREATED)
async def create_bonus(bonus: StaffBonusCreate, db: Session = Depends(get_db)):
    try:
        return SqlAlchemyBonusRepository(db).create_staff_bonus(**bonus.model_dump())
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.patch("/bonuses/{bonus_id}", response_model=StaffBonusResponse)
async def update_bonus(bonus_id: int, update: StaffBonusUpdate, db: Session = Depends(get_db)):
    try:
        return SqlAlchemyBonusRepository(db).update_staff_bonus(
            bonus_id, **update.model_dump(exclude_unset=True)
        )
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.delete("/bonuses/{bonus_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bonus(bonus_id: int, db: Session = Depends(get_db)):
    try:
        SqlAlchemyBonusRepository(db).delete_staff_bonus(bonus_id)
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


# Settings and tiers


@router.get("/settings", response_model=List[PayrollSettingResponse])
async def list_payroll_settings(db: Session = Depends(get_db)):
    return SqlAlchemySettingsRepository(db).list_settings()


@router.patch("/settings", response_model=PayrollSettingResponse)
async def update_payroll_setting(update: PayrollSettingUpdate, db: Session = Depends(get_db)):
    try:
        return SqlAlchemySettingsRepository(db).update_setting(
            update.setting_key.value, update.setting_value, updated_by=update.updated_by
        )
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.get("/tiers", response_model=List[PerformanceTierResponse])
async def list_performance_tiers(db: Session = Depends(get_db)):
    return SqlAlchemyPerformanceTierRepository(db).list_tiers()


@router.post("/tiers", response_model=PerformanceTierResponse, status_code=status.HTTP_201_CREATED)
async def create_performance_tier(tier: PerformanceTierCreate, db: Session = Depends(get_db)):
    try:
        return SqlAlchemyPerformanceTierRepository(db).create_tier(**tier.model_dump())
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.patch("/tiers/{tier_id}", response_model=PerformanceTierResponse)
async def update_performance_tier(
    tier_id: int,
    update: PerformanceTierUpdate,
    db: Session = Depends(get_db),
):
    """
    Change a performance tier.

    Only the fields present in the body are changed; send
    ``"max_appointments": null`` to make the tier open ended.

    ## Error Responses
    - **404**: Tier not found
    - **422**: Resulting max_appointments below min_appointments
    """
    try:
        return SqlAlchemyPerformanceTierRepository(db).update_tier(
            tier_id, **update.model_dump(exclude_unset=True)
        )
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)


@router.delete("/tiers/{tier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_performance_tier(tier_id: int, db: Session = Depends(get_db)):
    """Delete a tier; a tier already used by stored payroll is deactivated instead."""
    try:
        SqlAlchemyPerformanceTierRepository(db).delete_tier(tier_id)
    except PayrollException as e:
        db.rollback()
        raise_http_error(e)
