"""
Plain-text settlement statement rendered from a breakdown.

The output depends only on its arguments: the same breakdown and labels
always produce byte-identical text.
"""

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

from .contracts import PayrollCalculationBreakdown

ONE_PLACE = Decimal("0.1")


def format_currency(amount, symbol=None) -> str:
    """Whole-unit currency with thousands separators, e.g. "₩192,000" """
    if symbol is None:
        symbol = getattr(settings, "PAYROLL_CURRENCY_SYMBOL", "₩")
    whole = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{abs(whole):,}"


def format_hours(hours) -> str:
    """Hours to one decimal place, dropping a trailing .0"""
    rounded = Decimal(hours).quantize(ONE_PLACE, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        rounded = rounded.quantize(Decimal("1"))
    unit = "hour" if rounded == 1 else "hours"
    return f"{rounded} {unit}"


class MessageComposer:
    """Renders the statement shown to a teacher for confirmation"""

    def __init__(self, currency_symbol=None):
        self.currency_symbol = currency_symbol

    def _money(self, amount) -> str:
        return format_currency(amount, self.currency_symbol)

    def compose(
        self,
        breakdown: PayrollCalculationBreakdown,
        teacher_name: str,
        period_label: str,
        message_append: str = "",
    ) -> str:
        greeting = f"Hello {teacher_name}," if teacher_name else "Hello,"
        lines = [
            f"{greeting} here is your payroll statement for {period_label}.",
            "Please review the details below and confirm if everything is correct.",
            "",
            f"- Hours worked: {format_hours(breakdown.total_work_hours)}",
            f"- Hourly pay: {self._money(breakdown.hourly_total)}",
        ]

        if breakdown.allowance_total > 0:
            lines.append(f"- Weekly rest allowance: {self._money(breakdown.allowance_total)}")
        if breakdown.base_salary_total > 0:
            lines.append(f"- Base salary: {self._money(breakdown.base_salary_total)}")

        for addition in breakdown.additions:
            lines.append(f"- Addition ({addition.label}): {self._money(addition.amount)}")

        statutory = breakdown.statutory_deductions
        manual = breakdown.manual_deductions
        if statutory or manual:
            lines.append("")
            lines.append("Deductions")
            for line in statutory + manual:
                lines.append(f"- {line.label}: {self._money(line.amount)}")

        lines.append("")
        lines.append(f"Net pay: {self._money(breakdown.net_pay)}")
        lines.append("Press the confirm button to send your confirmation to the principal.")

        text = "\n".join(lines)
        if message_append and message_append.strip():
            text = f"{text}\n\n{message_append.strip()}"
        return text
