"""
Settlement lifecycle: draft -> pending_ack -> confirmed.

Each transition runs in one transaction. Line items are replaced with a
delete-then-insert inside the same transaction as the run upsert, so readers
never observe a partially rebuilt run.
"""

import logging
from typing import Any, Dict, List

from django.db import DatabaseError, transaction
from django.utils import timezone

from core.logging_utils import err_tag, public_emp_id
from payroll.models import (
    TeacherPayrollAcknowledgement,
    TeacherPayrollRun,
    TeacherPayrollRunItem,
)

from ..exceptions import PersistenceError, StateTransitionError
from .contracts import PayrollCalculationBreakdown
from .enums import AckStatus, ItemKind, RunStatus

logger = logging.getLogger(__name__)


def build_run_items(breakdown: PayrollCalculationBreakdown) -> List[Dict[str, Any]]:
    """Line items in their fixed display order"""
    items = [
        {
            "item_kind": ItemKind.EARNING,
            "label": "Hourly pay",
            "amount": breakdown.hourly_total,
            "metadata": {
                "total_work_hours": str(breakdown.total_work_hours),
                "hourly_rate": str(breakdown.hourly_rate),
            },
        }
    ]

    if breakdown.allowance_total > 0:
        items.append(
            {
                "item_kind": ItemKind.EARNING,
                "label": "Weekly rest allowance",
                "amount": breakdown.allowance_total,
                "metadata": {"allowance_hours": str(breakdown.total_allowance_hours)},
            }
        )

    if breakdown.base_salary_total > 0:
        items.append(
            {
                "item_kind": ItemKind.EARNING,
                "label": "Base salary",
                "amount": breakdown.base_salary_total,
                "metadata": {},
            }
        )

    for addition in breakdown.additions:
        items.append(
            {
                "item_kind": ItemKind.EARNING,
                "label": addition.label,
                "amount": addition.amount,
                "metadata": {"source": "adjustment"},
            }
        )

    for line in breakdown.statutory_deductions + breakdown.manual_deductions:
        items.append(
            {
                "item_kind": ItemKind.DEDUCTION,
                "label": line.label,
                "amount": line.amount,
                "metadata": {"code": line.code.value, "statutory": line.statutory},
            }
        )

    items.append(
        {
            "item_kind": ItemKind.INFO,
            "label": "Total hours",
            "amount": 0,
            "metadata": {
                "total_work_hours": str(breakdown.total_work_hours),
                "weekly_summaries": [w.to_dict() for w in breakdown.weekly_summaries],
            },
        }
    )
    return items


def build_run_meta(breakdown: PayrollCalculationBreakdown, request_note: str = "") -> Dict[str, Any]:
    data = breakdown.to_dict()
    return {
        "total_work_hours": data["total_work_hours"],
        "total_allowance_hours": data["total_allowance_hours"],
        "weekly_summaries": data["weekly_summaries"],
        "adjustments": data["adjustments"],
        "deduction_adjustments": [
            item.to_dict() for item in breakdown.deduction_adjustments
        ],
        "incentives": data["incentives"],
        "request_note": request_note or "",
    }


class SettlementLifecycle:
    """Persists breakdowns as runs and moves them through their states"""

    def compute(
        self,
        teacher,
        breakdown: PayrollCalculationBreakdown,
        profile=None,
        message: str = "",
        actor=None,
        request_note: str = "",
    ) -> TeacherPayrollRun:
        """
        Create or overwrite the draft run for (teacher, period).

        Raises:
            StateTransitionError: If the run exists and is no longer a draft
            PersistenceError: If the upsert or item replacement fails
        """
        try:
            with transaction.atomic():
                run = (
                    TeacherPayrollRun.objects.select_for_update()
                    .filter(
                        teacher=teacher,
                        period_start=breakdown.period_start,
                        period_end=breakdown.period_end,
                    )
                    .first()
                )
                if run is not None and not run.run_status.is_recomputable:
                    raise StateTransitionError(
                        f"Cannot recompute a run in '{run.status}' status",
                        details={"run_id": run.pk, "status": run.status},
                    )

                if run is None:
                    run = TeacherPayrollRun(
                        teacher=teacher,
                        period_start=breakdown.period_start,
                        period_end=breakdown.period_end,
                        created_by=actor,
                    )

                run.payroll_profile = profile
                run.contract_type = breakdown.contract_type.value
                run.insurance_enrolled = breakdown.insurance_enrolled
                run.total_work_hours = breakdown.total_work_hours
                run.hourly_total = breakdown.hourly_total
                run.weekly_allowance = breakdown.allowance_total
                run.base_salary_total = breakdown.base_salary_total
                run.adjustment_total = breakdown.additions_total
                run.gross_pay = breakdown.gross_pay
                run.deductions_total = breakdown.deductions_total
                run.net_pay = breakdown.net_pay
                run.status = RunStatus.DRAFT.value
                run.message_preview = message
                run.meta = build_run_meta(breakdown, request_note)
                run.save()

                self._replace_items(run, build_run_items(breakdown))
        except DatabaseError as exc:
            self._log_failure("compute", teacher, exc)
            raise PersistenceError(
                "Failed to save the payroll run; no changes were applied"
            ) from exc

        logger.info(
            "Payroll run computed",
            extra={
                "employee_hash": public_emp_id(run.teacher_id),
                "run_id": run.pk,
                "period_start": run.period_start.isoformat(),
                "period_end": run.period_end.isoformat(),
                "action": "payroll_run_compute",
            },
        )
        return run

    def _replace_items(self, run, items):
        run.items.all().delete()
        TeacherPayrollRunItem.objects.bulk_create(
            [
                TeacherPayrollRunItem(
                    run=run,
                    item_kind=item["item_kind"].value,
                    label=item["label"][:200],
                    amount=item["amount"],
                    metadata=item["metadata"],
                    order_index=index,
                )
                for index, item in enumerate(items)
            ]
        )

    def request_acknowledgement(self, run, actor=None, note: str = "") -> TeacherPayrollRun:
        """
        Ask the teacher to confirm. Repeating on a pending run only refreshes
        requested_at.

        Raises:
            StateTransitionError: If the run is already confirmed
            PersistenceError: If the run or acknowledgement update fails
        """
        try:
            with transaction.atomic():
                run = TeacherPayrollRun.objects.select_for_update().get(pk=run.pk)
                if run.run_status is RunStatus.CONFIRMED:
                    raise StateTransitionError(
                        "A confirmed run cannot be sent for acknowledgement again",
                        details={"run_id": run.pk, "status": run.status},
                    )

                now = timezone.now()
                run.status = RunStatus.PENDING_ACK.value
                run.requested_by = actor
                run.requested_at = now
                run.save(update_fields=["status", "requested_by", "requested_at", "updated_at"])

                defaults = {
                    "status": AckStatus.PENDING.value,
                    "requested_at": now,
                    "requested_by": actor,
                    "confirmed_at": None,
                }
                if note:
                    defaults["note"] = note
                TeacherPayrollAcknowledgement.objects.update_or_create(
                    run=run, defaults=defaults
                )
        except DatabaseError as exc:
            self._log_failure("request_acknowledgement", run.teacher_id, exc)
            raise PersistenceError(
                "Failed to request acknowledgement; no changes were applied"
            ) from exc

        logger.info(
            "Payroll acknowledgement requested",
            extra={
                "employee_hash": public_emp_id(run.teacher_id),
                "run_id": run.pk,
                "action": "payroll_request_ack",
            },
        )
        return run

    def confirm(self, run, actor, note: str = "") -> TeacherPayrollRun:
        """
        Confirm a pending run on behalf of its own teacher. Confirming an
        already confirmed run is a no-op.

        Raises:
            StateTransitionError: If actor does not own the run or the run is
                still a draft
            PersistenceError: If the run or acknowledgement update fails
        """
        if actor is None or actor.pk != run.teacher_id:
            raise StateTransitionError(
                "Only the teacher who owns this run can confirm it",
                details={"run_id": run.pk},
            )

        try:
            with transaction.atomic():
                run = TeacherPayrollRun.objects.select_for_update().get(pk=run.pk)
                if run.run_status is RunStatus.CONFIRMED:
                    return run
                if run.run_status is not RunStatus.PENDING_ACK:
                    raise StateTransitionError(
                        "Only runs awaiting confirmation can be confirmed",
                        details={"run_id": run.pk, "status": run.status},
                    )

                now = timezone.now()
                run.status = RunStatus.CONFIRMED.value
                run.save(update_fields=["status", "updated_at"])

                defaults = {"status": AckStatus.CONFIRMED.value, "confirmed_at": now}
                if note:
                    defaults["note"] = note
                TeacherPayrollAcknowledgement.objects.update_or_create(
                    run=run, defaults=defaults
                )
        except DatabaseError as exc:
            self._log_failure("confirm", run.teacher_id, exc)
            raise PersistenceError(
                "Failed to confirm the payroll run; no changes were applied"
            ) from exc

        logger.info(
            "Payroll run confirmed",
            extra={
                "employee_hash": public_emp_id(run.teacher_id),
                "run_id": run.pk,
                "action": "payroll_confirm",
            },
        )
        return run

    @staticmethod
    def _log_failure(transition: str, teacher, exc: Exception):
        logger.error(
            f"Payroll {transition} failed and was rolled back",
            extra={
                "employee_hash": public_emp_id(getattr(teacher, "pk", teacher)),
                "transition": transition,
                "error": err_tag(exc),
                "action": "payroll_persistence_failed",
            },
        )
