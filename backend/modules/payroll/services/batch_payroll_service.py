# backend/modules/payroll/services/batch_payroll_service.py

"""
Batch payroll processing service.

Calculates and stores the monthly payroll of every active staff member on a
bounded worker pool. A failing staff member never aborts the batch; it is
reported as a ``PayrollFailure`` so nobody silently goes unpaid.
"""

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings as app_settings
from ..exceptions import BatchProcessingError
from ..interfaces.repositories import StaffRecord
from ..repositories import PayrollRepositories
from .payroll_engine import PayrollEngine
from .payroll_persister import PayrollPersister
from .period_resolver import PayrollPeriod
from .settings_provider import ResolvedSettings, SettingsProvider

logger = logging.getLogger(__name__)


@dataclass
class StaffPayrollResult:
    staff_id: int
    staff_name: str
    payroll_id: int
    gross_pay: Decimal
    net_pay: Decimal
    total_commission: Decimal
    total_bonuses: Decimal
    total_hours: Decimal
    processing_time: float = 0.0


@dataclass
class PayrollFailure:
    staff_id: int
    staff_name: str
    error_type: str
    error_message: str


@dataclass
class BatchPayrollReport:
    period_month: int
    period_year: int
    successful: List[StaffPayrollResult] = field(default_factory=list)
    failed: List[PayrollFailure] = field(default_factory=list)
    started_at: float = 0.0
    finished_at: float = 0.0

    @property
    def total_staff(self) -> int:
        return len(self.successful) + len(self.failed)

    @property
    def successful_count(self) -> int:
        return len(self.successful)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


class BatchPayrollService:
    """Service for batch payroll processing."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        max_workers: Optional[int] = None,
        engine_factory: Callable[[Session], PayrollEngine] = PayrollEngine.from_session,
    ):
        """Initialize batch payroll service.

        Args:
            session_factory: Creates a new database session; each job gets its own
            max_workers: Size of the worker pool
            engine_factory: Builds a payroll engine bound to a session
        """
        self.session_factory = session_factory
        self.max_workers = max(1, max_workers or app_settings.payroll_batch_max_workers)
        self.engine_factory = engine_factory

    async def process_batch(
        self,
        period: PayrollPeriod,
        staff_ids: Optional[Sequence[int]] = None,
    ) -> BatchPayrollReport:
        """Calculate and store payroll for many staff members.

        Args:
            period: Payroll month
            staff_ids: Restrict the batch to these staff IDs; None means all active staff

        Returns:
            BatchPayrollReport with one entry per staff member processed
        """
        report = BatchPayrollReport(
            period_month=period.month, period_year=period.year, started_at=time.time()
        )

        db = self.session_factory()
        try:
            repositories = PayrollRepositories.from_session(db)
            staff_members = repositories.staff.list_active_staff(staff_ids)
            resolved = SettingsProvider(repositories.settings).resolve()
        except SQLAlchemyError as e:
            logger.error(f"Could not prepare payroll batch for {period.label}: {e}")
            raise BatchProcessingError(f"Could not prepare payroll batch for {period.label}") from e
        finally:
            db.close()

        logger.info(
            f"Starting payroll batch for {period.label}: {len(staff_members)} staff, "
            f"{self.max_workers} workers"
        )

        if staff_members:
            loop = asyncio.get_running_loop()
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                tasks = [
                    loop.run_in_executor(executor, self._process_staff, staff, period, resolved)
                    for staff in staff_members
                ]
                outcomes = await asyncio.gather(*tasks, return_exceptions=True)

            for staff, outcome in zip(staff_members, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error(
                        f"Error processing payroll for staff {staff.id} ({period.label}): {outcome}"
                    )
                    report.failed.append(
                        PayrollFailure(
                            staff_id=staff.id,
                            staff_name=staff.full_name,
                            error_type=type(outcome).__name__,
                            error_message=str(outcome),
                        )
                    )
                else:
                    report.successful.append(outcome)

        report.finished_at = time.time()
        logger.info(
            f"Finished payroll batch for {period.label}: "
            f"{report.successful_count} succeeded, {report.failed_count} failed"
        )
        return report

    def _process_staff(
        self,
        staff: StaffRecord,
        period: PayrollPeriod,
        resolved: ResolvedSettings,
    ) -> StaffPayrollResult:
        start_time = time.time()
        db = self.session_factory()
        try:
            engine = self.engine_factory(db)
            breakdown = engine.calculate_staff_payroll(staff.id, period, settings=resolved)
            record = PayrollPersister(db).save_payroll_record(breakdown, period)

            return StaffPayrollResult(
                staff_id=staff.id,
                staff_name=staff.full_name,
                payroll_id=record.id,
                gross_pay=breakdown.gross_pay,
                net_pay=breakdown.net_pay,
                total_commission=breakdown.total_commission,
                total_bonuses=breakdown.total_bonuses,
                total_hours=breakdown.total_hours,
                processing_time=time.time() - start_time,
            )
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def get_batch_statistics(self, report: BatchPayrollReport) -> Dict[str, Any]:
        """Calculate statistics from a batch report.

        Args:
            report: Result of ``process_batch``

        Returns:
            Dictionary of statistics
        """
        successful = report.successful
        total_gross = sum((r.gross_pay for r in successful), Decimal('0.00'))
        total_net = sum((r.net_pay for r in successful), Decimal('0.00'))
        avg_processing_time = (
            sum(r.processing_time for r in successful) / len(successful) if successful else 0
        )

        return {
            "total_processed": report.total_staff,
            "successful_count": report.successful_count,
            "failed_count": report.failed_count,
            "total_gross_pay": total_gross,
            "total_net_pay": total_net,
            "failed_staff_ids": [f.staff_id for f in report.failed],
            "average_processing_time": avg_processing_time,
            "success_rate": report.successful_count / report.total_staff * 100 if report.total_staff else 0,
        }
