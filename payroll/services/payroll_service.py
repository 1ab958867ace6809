"""
Main payroll orchestrator service.

This module provides the PayrollService class that loads the applicable pay
profile and approved work-log days, runs the pure computation core, renders
the statement and hands results to the settlement lifecycle.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from django.db import transaction

from core.logging_utils import err_tag, public_emp_id
from worktime.models import WorkLogEntry

from .composer import PayrollComposer
from .contracts import Incentive, PayrollAdjustment, PayrollComputation, WorkLogRecord
from .lifecycle import SettlementLifecycle
from .messages import MessageComposer
from .payroll_utils import period_label
from .profiles import resolve_profile

logger = logging.getLogger(__name__)


@dataclass
class BulkPayrollResult:
    """Outcome of a batch computation, keyed by teacher id"""

    computations: Dict[int, PayrollComputation] = field(default_factory=dict)
    errors: Dict[int, str] = field(default_factory=dict)

    @property
    def successful_count(self) -> int:
        return len(self.computations)

    @property
    def failed_count(self) -> int:
        return len(self.errors)


def _normalize_adjustments(adjustments) -> List[PayrollAdjustment]:
    normalized = []
    for item in adjustments or []:
        if not isinstance(item, PayrollAdjustment):
            item = PayrollAdjustment.from_mapping(item)
        if not item.label:
            logger.warning(
                "Adjustment without a label dropped",
                extra={
                    "amount": str(item.amount),
                    "is_deduction": item.is_deduction,
                    "action": "adjustment_dropped",
                },
            )
            continue
        normalized.append(item)
    return normalized


class PayrollService:
    """
    Main orchestrator for teacher payroll.

    Computation is pure with respect to persistence; save_draft and
    submit_for_acknowledgement add the lifecycle transitions.
    """

    def __init__(
        self,
        composer: Optional[PayrollComposer] = None,
        message_composer: Optional[MessageComposer] = None,
        lifecycle: Optional[SettlementLifecycle] = None,
    ):
        self.composer = composer or PayrollComposer()
        self.message_composer = message_composer or MessageComposer()
        self.lifecycle = lifecycle or SettlementLifecycle()

    def load_work_logs(self, teacher, period_start, period_end) -> List[WorkLogRecord]:
        """Approved work-log days of one teacher within the period"""
        entries = (
            WorkLogEntry.objects.approved()
            .for_teacher(teacher)
            .within(period_start, period_end)
            .order_by("work_date", "pk")
        )
        return [WorkLogRecord.from_entry(entry) for entry in entries]

    def compute(
        self,
        teacher,
        period_start,
        period_end,
        adjustments: Iterable = (),
        incentives: Iterable = (),
        message_append: str = "",
    ) -> PayrollComputation:
        """
        Compute the breakdown and statement for one teacher.

        Raises:
            ConfigurationError: If no pay profile covers the period
        """
        profile = resolve_profile(teacher, period_start, period_end)
        records = self.load_work_logs(teacher, period_start, period_end)

        breakdown = self.composer.compose_for_profile(
            profile,
            records,
            period_start,
            period_end,
            adjustments=_normalize_adjustments(adjustments),
            incentives=Incentive.normalize(incentives),
        )
        label = period_label(period_start, period_end)
        message = self.message_composer.compose(
            breakdown, teacher.display_name, label, message_append=message_append
        )

        logger.debug(
            "Payroll computed",
            extra={
                "employee_hash": public_emp_id(teacher.pk),
                "entry_count": len(records),
                "action": "payroll_compute",
            },
        )
        return PayrollComputation(
            breakdown=breakdown, profile=profile, message=message, period_label=label
        )

    def save_draft(
        self,
        teacher,
        period_start,
        period_end,
        actor=None,
        adjustments: Iterable = (),
        incentives: Iterable = (),
        message_append: str = "",
        request_note: str = "",
    ):
        """Compute and persist the draft run"""
        computation = self.compute(
            teacher, period_start, period_end, adjustments, incentives, message_append
        )
        run = self.lifecycle.compute(
            teacher,
            computation.breakdown,
            profile=computation.profile,
            message=computation.message,
            actor=actor,
            request_note=request_note,
        )
        return run, computation

    def submit_for_acknowledgement(
        self,
        teacher,
        period_start,
        period_end,
        actor=None,
        adjustments: Iterable = (),
        incentives: Iterable = (),
        message_append: str = "",
        request_note: str = "",
    ):
        """Compute, persist the draft and request acknowledgement together"""
        with transaction.atomic():
            run, computation = self.save_draft(
                teacher,
                period_start,
                period_end,
                actor=actor,
                adjustments=adjustments,
                incentives=incentives,
                message_append=message_append,
                request_note=request_note,
            )
            run = self.lifecycle.request_acknowledgement(run, actor=actor, note=request_note)
        return run, computation

    def compute_bulk(self, teachers, period_start, period_end) -> BulkPayrollResult:
        """
        Compute every teacher independently; failures are collected, not raised.
        """
        start_time = time.time()
        teachers = list(teachers)
        result = BulkPayrollResult()

        logger.info(
            f"Starting bulk payroll computation for {len(teachers)} teachers",
            extra={
                "teacher_count": len(teachers),
                "period_start": period_start.isoformat(),
                "period_end": period_end.isoformat(),
                "action": "bulk_compute_start",
            },
        )

        for teacher in teachers:
            try:
                result.computations[teacher.pk] = self.compute(
                    teacher, period_start, period_end
                )
            except Exception as e:
                result.errors[teacher.pk] = err_tag(e)
                logger.error(
                    "Bulk computation failed for teacher",
                    extra={
                        "employee_hash": public_emp_id(teacher.pk),
                        "error": err_tag(e),
                        "error_type": type(e).__name__,
                        "action": "bulk_compute_teacher_failed",
                    },
                )

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Bulk payroll computation completed: {result.successful_count} successful, "
            f"{result.failed_count} failed",
            extra={
                "successful_count": result.successful_count,
                "failed_count": result.failed_count,
                "duration_ms": duration_ms,
                "action": "bulk_compute_complete",
            },
        )
        return result


_service = None


def get_payroll_service() -> PayrollService:
    """Shared service instance"""
    global _service
    if _service is None:
        _service = PayrollService()
    return _service
