"""
Pure payroll composition for one teacher over one settlement period.

No database access happens here: inputs arrive by value and a new
PayrollCalculationBreakdown is returned, so batches can run in any order
or in parallel with identical results.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from .aggregation import WeeklyAllowanceEvaluator, WorkLogAggregator
from .contracts import (
    Incentive,
    PayrollAdjustment,
    PayrollCalculationBreakdown,
    WorkLogRecord,
)
from .deductions import DeductionCalculator
from .enums import ContractType
from .payroll_utils import ZERO, round_half_up, to_decimal


class PayrollComposer:
    """Combines aggregation, allowance, adjustments and deductions"""

    def __init__(self, deduction_calculator: Optional[DeductionCalculator] = None):
        self.deduction_calculator = deduction_calculator or DeductionCalculator()

    def compose(
        self,
        records: Iterable[WorkLogRecord],
        period_start: date,
        period_end: date,
        hourly_rate,
        contract_type: ContractType,
        insurance_enrolled: bool = False,
        base_salary_amount=None,
        adjustments: Sequence[PayrollAdjustment] = (),
        incentives: Sequence[Incentive] = (),
    ) -> PayrollCalculationBreakdown:
        """
        Compute the full breakdown.

        Args:
            records: Approved work-log days (out-of-period days are ignored)
            period_start: First day of the period, inclusive
            period_end: Last day of the period, inclusive
            hourly_rate: Pay per billable hour
            contract_type: Contract classification
            insurance_enrolled: Social insurance enrollment (employees only)
            base_salary_amount: Optional fixed amount for the period
            adjustments: Manual additions and deductions
            incentives: Positive bonuses, folded in as additions

        Returns:
            PayrollCalculationBreakdown: Net pay may be negative
        """
        contract_type = ContractType.from_string(contract_type)
        insurance_enrolled = bool(insurance_enrolled) and contract_type is ContractType.EMPLOYEE
        rate = round_half_up(to_decimal(hourly_rate, field="hourly_rate"))

        weeks = WorkLogAggregator(period_start, period_end).aggregate(records)
        weeks = WeeklyAllowanceEvaluator(contract_type).evaluate_all(weeks)

        total_work_hours = round_half_up(sum((w.total_work_hours for w in weeks), ZERO))
        if contract_type.grants_weekly_allowance:
            total_allowance_hours = round_half_up(
                sum((w.allowance_hours for w in weeks), ZERO)
            )
        else:
            total_allowance_hours = ZERO

        hourly_total = round_half_up(total_work_hours * rate)
        allowance_total = round_half_up(total_allowance_hours * rate)
        base_salary_total = round_half_up(
            to_decimal(base_salary_amount, field="base_salary_amount")
        )

        incentives = tuple(incentives)
        normalized = tuple(
            PayrollAdjustment(
                label=item.label,
                amount=round_half_up(item.amount),
                is_deduction=item.is_deduction,
            )
            for item in adjustments
        ) + tuple(item.as_adjustment() for item in incentives)

        additions_total = round_half_up(
            sum((item.amount for item in normalized if not item.is_deduction), ZERO)
        )

        gross_pay = round_half_up(
            hourly_total + allowance_total + base_salary_total + additions_total
        )

        (
            deduction_lines,
            statutory_total,
            manual_total,
            deductions_total,
        ) = self.deduction_calculator.calculate(
            gross_pay, contract_type, insurance_enrolled, normalized
        )

        net_pay = round_half_up(gross_pay - deductions_total)

        return PayrollCalculationBreakdown(
            period_start=period_start,
            period_end=period_end,
            contract_type=contract_type,
            insurance_enrolled=insurance_enrolled,
            hourly_rate=rate,
            total_work_hours=total_work_hours,
            total_allowance_hours=total_allowance_hours,
            hourly_total=hourly_total,
            allowance_total=allowance_total,
            base_salary_total=base_salary_total,
            adjustments=normalized,
            additions_total=additions_total,
            gross_pay=gross_pay,
            deductions=tuple(deduction_lines),
            statutory_deductions_total=statutory_total,
            manual_deductions_total=manual_total,
            deductions_total=deductions_total,
            net_pay=net_pay,
            weekly_summaries=tuple(weeks),
            incentives=incentives,
        )

    def compose_for_profile(
        self,
        profile,
        records: Iterable[WorkLogRecord],
        period_start: date,
        period_end: date,
        adjustments: Sequence[PayrollAdjustment] = (),
        incentives: Sequence[Incentive] = (),
    ) -> PayrollCalculationBreakdown:
        """Compose using the rate and contract fields of a pay profile"""
        return self.compose(
            records,
            period_start,
            period_end,
            hourly_rate=profile.hourly_rate,
            contract_type=profile.contract_type,
            insurance_enrolled=profile.insurance_enrolled,
            base_salary_amount=profile.base_salary_amount,
            adjustments=adjustments,
            incentives=incentives,
        )
