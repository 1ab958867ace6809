"""
Weekly aggregation of approved work-log days and the weekly rest allowance.
"""

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List

from .contracts import WeeklyWorkSummary, WorkLogRecord
from .enums import ContractType, WorkLogStatus
from .payroll_utils import ZERO, round_half_up

# Minimum weekly hours for the rest allowance
ALLOWANCE_MIN_WEEKLY_HOURS = Decimal("15")
# Standard work-week divisor
STANDARD_WORK_DAYS = Decimal("5")


def week_start(day: date) -> date:
    """Monday of the week containing day"""
    return day - timedelta(days=day.weekday())


class WorkLogAggregator:
    """Groups one teacher's work-log days into Monday-based weeks"""

    def __init__(self, period_start: date, period_end: date):
        if period_end < period_start:
            raise ValueError("Period end must not be before period start")
        self.period_start = period_start
        self.period_end = period_end

    def contains(self, day: date) -> bool:
        return self.period_start <= day <= self.period_end

    def _build_week(self, key: date, totals: Dict[str, object]) -> WeeklyWorkSummary:
        return WeeklyWorkSummary(
            week_key=key,
            start=max(key, self.period_start),
            end=min(key + timedelta(days=6), self.period_end),
            **totals,
        )

    def aggregate(self, records: Iterable[WorkLogRecord]) -> List[WeeklyWorkSummary]:
        """
        Build per-week summaries for the in-period records.

        Returns:
            list: WeeklyWorkSummary ordered by week start ascending
        """
        weeks: Dict[date, Dict[str, object]] = {}

        for record in records:
            if not self.contains(record.work_date):
                continue

            totals = weeks.setdefault(
                week_start(record.work_date),
                {
                    "total_work_hours": ZERO,
                    "has_tardy": False,
                    "has_absence": False,
                    "has_substitute": False,
                },
            )

            if record.status.bears_hours:
                totals["total_work_hours"] = round_half_up(
                    totals["total_work_hours"] + record.billable_hours
                )

            if record.status is WorkLogStatus.TARDY:
                totals["has_tardy"] = True
            elif record.status is WorkLogStatus.ABSENCE:
                totals["has_absence"] = True
            elif record.status is WorkLogStatus.SUBSTITUTE:
                totals["has_substitute"] = True

        return [self._build_week(key, weeks[key]) for key in sorted(weeks)]


class WeeklyAllowanceEvaluator:
    """Applies the weekly rest allowance rule to week summaries"""

    def __init__(self, contract_type: ContractType):
        self.contract_type = contract_type

    def is_eligible(self, summary: WeeklyWorkSummary) -> bool:
        return (
            self.contract_type.grants_weekly_allowance
            and summary.total_work_hours >= ALLOWANCE_MIN_WEEKLY_HOURS
            and not summary.has_blocking_status
        )

    def evaluate(self, summary: WeeklyWorkSummary) -> WeeklyWorkSummary:
        """Copy of summary with eligibility and allowance hours filled in"""
        eligible = self.is_eligible(summary)
        allowance_hours = (
            round_half_up(summary.total_work_hours / STANDARD_WORK_DAYS) if eligible else ZERO
        )
        return replace(
            summary, eligible_for_allowance=eligible, allowance_hours=allowance_hours
        )

    def evaluate_all(self, summaries: Iterable[WeeklyWorkSummary]) -> List[WeeklyWorkSummary]:
        return [self.evaluate(summary) for summary in summaries]
