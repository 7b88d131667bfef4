"""Payroll schemas module."""

from .error_schemas import ErrorDetail, ErrorResponse, PayrollErrorCodes
from .payroll_schemas import (
    CalculatePayrollRequest,
    CalculatePayrollResponse,
    StaffPayrollBreakdownResponse,
    MonthlyPayrollResponse,
    ApprovePayrollRequest,
    PayrollSummaryRow,
    PayrollSummaryResponse,
    StaffPayrollResultResponse,
    PayrollFailureResponse,
    BatchPayrollReportResponse,
    StaffBonusCreate,
    StaffBonusResponse,
    StaffBonusUpdate,
    PayrollSettingResponse,
    PayrollSettingUpdate,
    PerformanceTierCreate,
    PerformanceTierResponse,
    PerformanceTierUpdate,
)

__all__ = [
    'ErrorDetail',
    'ErrorResponse',
    'PayrollErrorCodes',
    'CalculatePayrollRequest',
    'CalculatePayrollResponse',
    'StaffPayrollBreakdownResponse',
    'MonthlyPayrollResponse',
    'ApprovePayrollRequest',
    'PayrollSummaryRow',
    'PayrollSummaryResponse',
    'StaffPayrollResultResponse',
    'PayrollFailureResponse',
    'BatchPayrollReportResponse',
    'StaffBonusCreate',
    'StaffBonusResponse',
    'StaffBonusUpdate',
    'PayrollSettingResponse',
    'PayrollSettingUpdate',
    'PerformanceTierCreate',
    'PerformanceTierResponse',
    'PerformanceTierUpdate',
]
