"""
Data contracts for payroll calculations.

This module defines the plain data structures that flow between the
aggregator, the allowance evaluator, the deduction calculator and the
composer. Everything here is JSON-serializable through to_dict(): money and
hours render as strings, dates as ISO strings.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .enums import ContractType, DeductionCode, WorkLogStatus
from .payroll_utils import ZERO, round_half_up, to_decimal, to_local_date


def _money(value: Decimal) -> str:
    return str(round_half_up(value))


@dataclass(frozen=True)
class WorkLogRecord:
    """
    One approved work-log day as seen by the payroll core.

    Lightweight alternative to the worktime WorkLogEntry model.
    """

    work_date: date
    status: WorkLogStatus
    hours: Decimal = ZERO

    @property
    def billable_hours(self) -> Decimal:
        return self.hours if self.status.bears_hours else ZERO

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "WorkLogRecord":
        """Build from a mapping with date/status/hours keys"""
        raw_date = data.get("work_date", data.get("date"))
        raw_hours = data.get("work_hours", data.get("hours"))
        return cls(
            work_date=to_local_date(raw_date),
            status=WorkLogStatus(data["status"]),
            hours=to_decimal(raw_hours, field="work_hours"),
        )

    @classmethod
    def from_entry(cls, entry) -> "WorkLogRecord":
        """Build from a worktime.WorkLogEntry row"""
        return cls(
            work_date=to_local_date(entry.work_date),
            status=WorkLogStatus(entry.status),
            hours=to_decimal(entry.work_hours, field="work_hours"),
        )


@dataclass(frozen=True)
class PayrollAdjustment:
    """A manual one-off addition or deduction"""

    label: str
    amount: Decimal
    is_deduction: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "PayrollAdjustment":
        return cls(
            label=str(data.get("label", "")).strip(),
            amount=round_half_up(to_decimal(data.get("amount"), field="amount")),
            is_deduction=bool(data.get("is_deduction", data.get("isDeduction", False))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "amount": _money(self.amount),
            "is_deduction": self.is_deduction,
        }


@dataclass(frozen=True)
class Incentive:
    """A positive bonus folded into the additions"""

    label: str
    amount: Decimal

    @classmethod
    def normalize(cls, items) -> List["Incentive"]:
        """Keep only items with a label and a positive amount"""
        normalized = []
        for item in items or []:
            label = str(item.get("label") or "").strip()
            amount = round_half_up(to_decimal(item.get("amount"), field="incentive"))
            if label and amount > 0:
                normalized.append(cls(label=label, amount=amount))
        return normalized

    def as_adjustment(self) -> PayrollAdjustment:
        return PayrollAdjustment(label=self.label, amount=self.amount)

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "amount": _money(self.amount)}


@dataclass(frozen=True)
class WeeklyWorkSummary:
    """
    One Monday-to-Sunday week, clipped to the settlement period for display.

    week_key is the true Monday; start and end are the in-period portion.
    """

    week_key: date
    start: date
    end: date
    total_work_hours: Decimal = ZERO
    has_tardy: bool = False
    has_absence: bool = False
    has_substitute: bool = False
    eligible_for_allowance: bool = False
    allowance_hours: Decimal = ZERO

    @property
    def has_blocking_status(self) -> bool:
        return self.has_tardy or self.has_absence or self.has_substitute

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.start.isoformat(),
            "week_end": self.end.isoformat(),
            "total_work_hours": _money(self.total_work_hours),
            "has_tardy": self.has_tardy,
            "has_absence": self.has_absence,
            "has_substitute": self.has_substitute,
            "eligible_for_allowance": self.eligible_for_allowance,
            "allowance_hours": _money(self.allowance_hours),
        }


@dataclass(frozen=True)
class DeductionLine:
    """A single deduction: statutory (rate based) or manual"""

    code: DeductionCode
    label: str
    amount: Decimal
    statutory: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "label": self.label,
            "amount": _money(self.amount),
            "statutory": self.statutory,
        }


@dataclass(frozen=True)
class PayrollCalculationBreakdown:
    """
    The computed result for one teacher over one period.

    Never mutated after creation; recomputation builds a new breakdown.
    """

    period_start: date
    period_end: date
    contract_type: ContractType
    insurance_enrolled: bool
    hourly_rate: Decimal
    total_work_hours: Decimal
    total_allowance_hours: Decimal
    hourly_total: Decimal
    allowance_total: Decimal
    base_salary_total: Decimal
    adjustments: Tuple[PayrollAdjustment, ...]
    additions_total: Decimal
    gross_pay: Decimal
    deductions: Tuple[DeductionLine, ...]
    statutory_deductions_total: Decimal
    manual_deductions_total: Decimal
    deductions_total: Decimal
    net_pay: Decimal
    weekly_summaries: Tuple[WeeklyWorkSummary, ...] = field(default_factory=tuple)
    incentives: Tuple[Incentive, ...] = field(default_factory=tuple)

    @property
    def additions(self) -> List[PayrollAdjustment]:
        return [item for item in self.adjustments if not item.is_deduction]

    @property
    def deduction_adjustments(self) -> List[PayrollAdjustment]:
        return [item for item in self.adjustments if item.is_deduction]

    @property
    def statutory_deductions(self) -> List[DeductionLine]:
        return [line for line in self.deductions if line.statutory]

    @property
    def manual_deductions(self) -> List[DeductionLine]:
        return [line for line in self.deductions if not line.statutory]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "contract_type": self.contract_type.value,
            "insurance_enrolled": self.insurance_enrolled,
            "hourly_rate": _money(self.hourly_rate),
            "total_work_hours": _money(self.total_work_hours),
            "total_allowance_hours": _money(self.total_allowance_hours),
            "hourly_total": _money(self.hourly_total),
            "allowance_total": _money(self.allowance_total),
            "base_salary_total": _money(self.base_salary_total),
            "adjustments": [item.to_dict() for item in self.adjustments],
            "additions_total": _money(self.additions_total),
            "gross_pay": _money(self.gross_pay),
            "deductions": [line.to_dict() for line in self.deductions],
            "statutory_deductions_total": _money(self.statutory_deductions_total),
            "manual_deductions_total": _money(self.manual_deductions_total),
            "deductions_total": _money(self.deductions_total),
            "net_pay": _money(self.net_pay),
            "weekly_summaries": [week.to_dict() for week in self.weekly_summaries],
            "incentives": [item.to_dict() for item in self.incentives],
        }


@dataclass(frozen=True)
class PayrollComputation:
    """Breakdown plus the profile it was computed from and its statement text"""

    breakdown: PayrollCalculationBreakdown
    profile: Any
    message: str
    period_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakdown": self.breakdown.to_dict(),
            "profile_id": getattr(self.profile, "pk", None),
            "period_label": self.period_label,
            "message": self.message,
        }
