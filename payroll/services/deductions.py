"""
Statutory deduction lines derived from gross pay.
"""

from decimal import Decimal
from typing import Iterable, List

from .contracts import DeductionLine, PayrollAdjustment
from .enums import ContractType, DeductionCode
from .payroll_utils import ZERO, round_half_up

HEALTH_INSURANCE_RATE = Decimal("0.045")
NATIONAL_PENSION_RATE = Decimal("0.03545")
# Applied to the health insurance amount, not to gross
LONG_TERM_CARE_RATE = Decimal("0.1281")
EMPLOYMENT_INSURANCE_RATE = Decimal("0.009")
FREELANCER_WITHHOLDING_RATE = Decimal("0.033")


class DeductionCalculator:
    """Builds itemized deduction lines for one gross amount"""

    def statutory_lines(
        self, gross_pay: Decimal, contract_type: ContractType, insurance_enrolled: bool
    ) -> List[DeductionLine]:
        if contract_type is ContractType.EMPLOYEE and insurance_enrolled:
            health = round_half_up(gross_pay * HEALTH_INSURANCE_RATE)
            return [
                self._line(DeductionCode.HEALTH_INSURANCE, health),
                self._line(
                    DeductionCode.NATIONAL_PENSION,
                    round_half_up(gross_pay * NATIONAL_PENSION_RATE),
                ),
                self._line(
                    DeductionCode.LONG_TERM_CARE,
                    round_half_up(health * LONG_TERM_CARE_RATE),
                ),
                self._line(
                    DeductionCode.EMPLOYMENT_INSURANCE,
                    round_half_up(gross_pay * EMPLOYMENT_INSURANCE_RATE),
                ),
            ]
        if contract_type is ContractType.FREELANCER:
            return [
                self._line(
                    DeductionCode.FREELANCER_WITHHOLDING,
                    round_half_up(gross_pay * FREELANCER_WITHHOLDING_RATE),
                )
            ]
        return []

    def manual_lines(self, adjustments: Iterable[PayrollAdjustment]) -> List[DeductionLine]:
        """Manual deductions keep their literal label and amount"""
        return [
            DeductionLine(
                code=DeductionCode.MANUAL,
                label=item.label,
                amount=item.amount,
                statutory=False,
            )
            for item in adjustments
            if item.is_deduction
        ]

    def calculate(
        self,
        gross_pay: Decimal,
        contract_type: ContractType,
        insurance_enrolled: bool,
        adjustments: Iterable[PayrollAdjustment] = (),
    ):
        """
        Compute all deduction lines and their subtotals.

        Returns:
            tuple: (lines, statutory_total, manual_total, deductions_total)
        """
        statutory = self.statutory_lines(gross_pay, contract_type, insurance_enrolled)
        manual = self.manual_lines(adjustments)

        statutory_total = round_half_up(sum((line.amount for line in statutory), ZERO))
        manual_total = round_half_up(sum((line.amount for line in manual), ZERO))
        deductions_total = round_half_up(statutory_total + manual_total)

        return statutory + manual, statutory_total, manual_total, deductions_total

    @staticmethod
    def _line(code: DeductionCode, amount: Decimal) -> DeductionLine:
        return DeductionLine(code=code, label=code.display_name, amount=amount)
