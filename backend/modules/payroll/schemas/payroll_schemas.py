# backend/modules/payroll/schemas/payroll_schemas.py

"""
Pydantic schemas for the salon payroll API endpoints.

Provides request/response models for:
- Payroll calculation and lifecycle
- Period summaries and batch reports
- Bonus ledger, settings and tiers
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from ..enums.payroll_enums import BonusType, PayrollStatus, PayrollSettingKey


# Calculation Schemas


class CalculatePayrollRequest(BaseModel):
    """Request model for payroll calculation; omit staff_id to run the whole salon"""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    staff_id: Optional[int] = Field(None, gt=0)


class StaffPayrollBreakdownResponse(BaseModel):
    """Every figure of one calculated payroll"""

    model_config = ConfigDict(from_attributes=True)

    staff_id: int
    staff_name: str
    period_month: int
    period_year: int
    total_hours: Decimal
    hourly_rate: Decimal
    base_pay: Decimal
    total_appointments: int
    completed_appointments: int
    total_service_revenue: Decimal
    total_product_sales: Decimal
    commission_rate: Decimal
    base_commission: Decimal
    performance_tier_id: Optional[int] = None
    performance_tier_name: Optional[str] = None
    tier_multiplier: Decimal
    tier_bonus: Decimal
    adjusted_commission: Decimal
    product_commission: Decimal
    total_commission: Decimal
    individual_bonuses: Decimal
    team_bonuses: Decimal
    skill_premium: Decimal
    retention_bonus: Decimal
    total_bonuses: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal


class MonthlyPayrollResponse(BaseModel):
    """Response model for a stored payroll record"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    staff_id: int
    period_month: int
    period_year: int
    total_hours: Decimal
    base_pay: Decimal
    total_commission: Decimal
    total_bonuses: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus
    calculated_at: datetime
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    paid_at: Optional[datetime] = None


class ApprovePayrollRequest(BaseModel):
    approved_by: str = Field(..., min_length=1, max_length=100)

    @field_validator("approved_by")
    @classmethod
    def approver_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("approved_by must not be blank")
        return v.strip()


# Summary and batch schemas


class PayrollSummaryRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    staff_id: int
    staff_name: Optional[str] = None
    tier_name: Optional[str] = None
    total_hours: Decimal
    base_pay: Decimal
    total_commission: Decimal
    total_bonuses: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus
    approved_by: Optional[str] = None


class PayrollSummaryResponse(BaseModel):
    """Period totals across all stored payroll records"""

    model_config = ConfigDict(from_attributes=True)

    period_month: int
    period_year: int
    total_staff: int
    total_gross_pay: Decimal
    total_net_pay: Decimal
    total_commissions: Decimal
    total_bonuses: Decimal
    total_hours: Decimal
    currency: str = "MMK"
    records: List[PayrollSummaryRow] = []


class StaffPayrollResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    staff_id: int
    staff_name: str
    payroll_id: int
    gross_pay: Decimal
    net_pay: Decimal
    total_commission: Decimal
    total_bonuses: Decimal
    total_hours: Decimal


class PayrollFailureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    staff_id: int
    staff_name: str
    error_type: str
    error_message: str


class BatchPayrollReportResponse(BaseModel):
    """Outcome of a salon-wide payroll run"""

    model_config = ConfigDict(from_attributes=True)

    period_month: int
    period_year: int
    total_staff: int
    successful_count: int
    failed_count: int
    successful: List[StaffPayrollResultResponse] = []
    failed: List[PayrollFailureResponse] = []


class CalculatePayrollResponse(BaseModel):
    """Single staff runs fill payroll/breakdown, salon runs fill batch/summary"""

    period_month: int
    period_year: int
    payroll: Optional[MonthlyPayrollResponse] = None
    breakdown: Optional[StaffPayrollBreakdownResponse] = None
    batch: Optional[BatchPayrollReportResponse] = None
    summary: Optional[PayrollSummaryResponse] = None


# Bonus ledger schemas


class StaffBonusCreate(BaseModel):
    """Request model for recording an individual bonus"""

    staff_id: int = Field(..., gt=0)
    bonus_type: BonusType = BonusType.PERFORMANCE
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=255)
    period_month: int = Field(..., ge=1, le=12)
    period_year: int = Field(..., ge=2000, le=2100)
    awarded_date: Optional[date] = None
    created_by: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class StaffBonusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    staff_id: int
    bonus_type: BonusType
    amount: Decimal
    description: str
    awarded_date: date
    period_month: int
    period_year: int
    created_by: Optional[str] = None
    notes: Optional[str] = None


class StaffBonusUpdate(BaseModel):
    """Request model for correcting a bonus ledger entry; only sent fields change"""

    bonus_type: Optional[BonusType] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    period_month: Optional[int] = Field(None, ge=1, le=12)
    period_year: Optional[int] = Field(None, ge=2000, le=2100)
    awarded_date: Optional[date] = None
    notes: Optional[str] = None


# Settings and tier schemas


class PayrollSettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    setting_key: str
    setting_value: Decimal
    description: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class PayrollSettingUpdate(BaseModel):
    """Request model for changing one payroll setting"""

    setting_key: PayrollSettingKey
    setting_value: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    updated_by: Optional[str] = Field(None, max_length=100)


class PerformanceTierResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    min_appointments: int
    max_appointments: Optional[int] = None
    commission_multiplier: Decimal
    monthly_bonus: Decimal
    is_active: bool


class PerformanceTierCreate(BaseModel):
    """Request model for adding a performance tier"""

    name: str = Field(..., min_length=1, max_length=100)
    min_appointments: int = Field(..., ge=0)
    max_appointments: Optional[int] = Field(None, ge=0)
    commission_multiplier: Decimal = Field(Decimal("1.00"), gt=0, max_digits=5, decimal_places=2)
    monthly_bonus: Decimal = Field(Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)
    is_active: bool = True

    @model_validator(mode="after")
    def validate_range(self):
        if self.max_appointments is not None and self.max_appointments < self.min_appointments:
            raise ValueError("max_appointments must not be below min_appointments")
        return self


class PerformanceTierUpdate(BaseModel):
    """Request model for changing a performance tier; only sent fields change"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    min_appointments: Optional[int] = Field(None, ge=0)
    max_appointments: Optional[int] = Field(None, ge=0)
    commission_multiplier: Optional[Decimal] = Field(None, gt=0, max_digits=5, decimal_places=2)
    monthly_bonus: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    is_active: Optional[bool] = None
