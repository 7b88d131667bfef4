# backend/modules/payroll/schemas/error_schemas.py

"""
Error payloads returned by the salon payroll API.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class ErrorDetail(BaseModel):
    field: Optional[str] = None
    message: str
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body placed under ``detail`` of every payroll HTTP error"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "InvalidPayrollTransitionError",
                "message": "Payroll 12 cannot move from calculated to paid",
                "code": "PAYROLL_INVALID_STATUS_TRANSITION",
                "details": [
                    {
                        "field": "status",
                        "message": "calculated -> paid",
                        "code": "PAYROLL_INVALID_STATUS_TRANSITION",
                    }
                ],
                "timestamp": "2024-04-01T08:30:00Z",
            }
        }
    )

    error: str = Field(..., description="Exception class that produced the error")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="One of PayrollErrorCodes")
    details: Optional[List[ErrorDetail]] = Field(
        None, description="Per-field problems, when known"
    )
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class PayrollErrorCodes:
    """Machine-readable codes shared by exceptions and responses"""

    INVALID_PERIOD = "PAYROLL_INVALID_PERIOD"
    INVALID_AMOUNT = "PAYROLL_INVALID_AMOUNT"
    INVALID_TIER_RANGE = "PAYROLL_INVALID_TIER_RANGE"
    INVALID_STATUS_TRANSITION = "PAYROLL_INVALID_STATUS_TRANSITION"
    RECORD_NOT_FOUND = "PAYROLL_RECORD_NOT_FOUND"
    BATCH_PROCESSING_ERROR = "PAYROLL_BATCH_PROCESSING_ERROR"
    DATABASE_ERROR = "PAYROLL_DATABASE_ERROR"
