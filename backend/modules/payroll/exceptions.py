# backend/modules/payroll/exceptions.py

"""
Exceptions raised by the salon payroll services.

Each carries an HTTP status and a machine-readable code so the routes can
turn it into an ``ErrorResponse`` without inspecting the message.
"""

from typing import Optional, List, Any
from .schemas.error_schemas import ErrorDetail, PayrollErrorCodes

_PERIOD_FIELDS = ("month", "year", "period")


class PayrollException(Exception):
    """Base exception for payroll module"""
    def __init__(
        self,
        message: str,
        code: str = PayrollErrorCodes.DATABASE_ERROR,
        details: Optional[List[ErrorDetail]] = None,
        status_code: int = 400
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or []
        self.status_code = status_code


class PayrollValidationError(PayrollException):
    """Rejected input such as a bad payroll period, amount or tier range"""
    def __init__(self, message: str, field: Optional[str] = None, code: Optional[str] = None):
        if code is None:
            code = (
                PayrollErrorCodes.INVALID_PERIOD
                if field in _PERIOD_FIELDS
                else PayrollErrorCodes.INVALID_AMOUNT
            )
        details = [ErrorDetail(field=field, message=message, code=code)] if field else None
        super().__init__(message=message, code=code, details=details, status_code=422)
        self.field = field


class PayrollNotFoundError(PayrollException):
    """A staff member, bonus, setting or payroll record does not exist"""
    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} with identifier {identifier} not found",
            code=PayrollErrorCodes.RECORD_NOT_FOUND,
            status_code=404
        )
        self.resource = resource
        self.identifier = identifier


class InvalidPayrollTransitionError(PayrollException):
    """Status change that the calculated -> approved -> paid lifecycle forbids"""
    def __init__(self, payroll_id: Any, current_status: str, target_status: str):
        super().__init__(
            message=f"Payroll {payroll_id} cannot move from {current_status} to {target_status}",
            code=PayrollErrorCodes.INVALID_STATUS_TRANSITION,
            details=[
                ErrorDetail(
                    field="status",
                    message=f"{current_status} -> {target_status}",
                    code=PayrollErrorCodes.INVALID_STATUS_TRANSITION,
                )
            ],
            status_code=409
        )
        self.payroll_id = payroll_id
        self.current_status = current_status
        self.target_status = target_status


class BatchProcessingError(PayrollException):
    """The batch could not start, e.g. the active staff list failed to load"""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=PayrollErrorCodes.BATCH_PROCESSING_ERROR,
            status_code=500
        )
