"""
Enumerations for the tutor payroll system.

This module defines the closed sets of values used across the payroll
computation and settlement lifecycle, so components branch on enum members
instead of comparing raw strings.
"""

from enum import Enum


class ContractType(Enum):
    """Contract classification driving statutory deductions"""

    EMPLOYEE = "employee"
    """Employed staff; social insurance applies when enrolled"""

    FREELANCER = "freelancer"
    """Business-income contractor; flat withholding, no weekly allowance"""

    NONE = "none"
    """No contract classification; nothing is withheld"""

    def __str__(self):
        return self.value

    @property
    def grants_weekly_allowance(self) -> bool:
        return self is not ContractType.FREELANCER

    @classmethod
    def from_string(cls, value) -> "ContractType":
        """Parse a stored value, treating blanks as NONE"""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NONE
        return cls(str(value).strip().lower())


class WorkLogStatus(Enum):
    """Attendance status of a single work-log day"""

    WORKED = "worked"
    TARDY = "tardy"
    ABSENCE = "absence"
    SUBSTITUTE = "substitute"

    def __str__(self):
        return self.value

    @property
    def bears_hours(self) -> bool:
        """Whether this status contributes billable hours"""
        return self in (WorkLogStatus.WORKED, WorkLogStatus.TARDY)

    @property
    def blocks_allowance(self) -> bool:
        """Whether one such day makes its week ineligible for the allowance"""
        return self is not WorkLogStatus.WORKED


class RunStatus(Enum):
    """Settlement run lifecycle states"""

    DRAFT = "draft"
    PENDING_ACK = "pending_ack"
    CONFIRMED = "confirmed"

    def __str__(self):
        return self.value

    @property
    def is_recomputable(self) -> bool:
        return self is RunStatus.DRAFT

    @property
    def display_name(self) -> str:
        return {
            RunStatus.DRAFT: "Draft",
            RunStatus.PENDING_ACK: "Awaiting confirmation",
            RunStatus.CONFIRMED: "Confirmed",
        }[self]


class AckStatus(Enum):
    """Acknowledgement state of a settlement run"""

    PENDING = "pending"
    CONFIRMED = "confirmed"

    def __str__(self):
        return self.value


class ItemKind(Enum):
    """Kind of a settlement run line item"""

    EARNING = "earning"
    DEDUCTION = "deduction"
    INFO = "info"

    def __str__(self):
        return self.value


class DeductionCode(Enum):
    """Identifiers of deduction lines"""

    HEALTH_INSURANCE = "health_insurance"
    NATIONAL_PENSION = "national_pension"
    LONG_TERM_CARE = "long_term_care"
    EMPLOYMENT_INSURANCE = "employment_insurance"
    FREELANCER_WITHHOLDING = "freelancer_withholding"
    MANUAL = "manual"

    def __str__(self):
        return self.value

    @property
    def display_name(self) -> str:
        return {
            DeductionCode.HEALTH_INSURANCE: "Health insurance (4.5%)",
            DeductionCode.NATIONAL_PENSION: "National pension (3.545%)",
            DeductionCode.LONG_TERM_CARE: "Long-term care (12.81% of health insurance)",
            DeductionCode.EMPLOYMENT_INSURANCE: "Employment insurance (0.9%)",
            DeductionCode.FREELANCER_WITHHOLDING: "Freelancer withholding (3.3%)",
            DeductionCode.MANUAL: "Manual deduction",
        }[self]


def choices(enum_cls):
    """Django field choices built from an enum"""
    return [(member.value, member.value.replace("_", " ").title()) for member in enum_cls]
