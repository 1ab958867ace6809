"""
Test utilities for payroll module using unittest.TestCase approach.

Provides common utilities and mixins, and re-exports the builders from
conftest.py for TestCase classes that cannot use pytest fixtures.
"""

from decimal import Decimal

from payroll.tests.conftest import (
    OCTOBER_END,
    OCTOBER_START,
    SCENARIO_MONDAY,
    create_entry,
    create_profile,
    create_scenario_week,
    make_record,
    scenario_week_records,
)

__all__ = [
    "OCTOBER_END",
    "OCTOBER_START",
    "SCENARIO_MONDAY",
    "PayrollTestMixin",
    "create_entry",
    "create_profile",
    "create_scenario_week",
    "make_record",
    "scenario_week_records",
]


class PayrollTestMixin:
    """
    Mixin for TestCase classes with composer access and breakdown assertions.
    """

    def compose(self, records, contract_type="employee", insurance_enrolled=True, **kwargs):
        from payroll.services.composer import PayrollComposer

        kwargs.setdefault("hourly_rate", Decimal("10000"))
        period_start = kwargs.pop("period_start", OCTOBER_START)
        period_end = kwargs.pop("period_end", OCTOBER_END)
        return PayrollComposer().compose(
            records,
            period_start,
            period_end,
            contract_type=contract_type,
            insurance_enrolled=insurance_enrolled,
            **kwargs,
        )

    def assertBalanced(self, breakdown):
        """gross - deductions == net, exactly"""
        self.assertEqual(breakdown.gross_pay - breakdown.deductions_total, breakdown.net_pay)

    def assertDeductionCodes(self, breakdown, codes):
        self.assertEqual([line.code.value for line in breakdown.deductions], list(codes))
