# Payroll services package
#
# Only the pure computation core is exported here; lifecycle and
# payroll_service touch the ORM and are imported by their full path.

from .composer import PayrollComposer
from .contracts import (
    DeductionLine,
    Incentive,
    PayrollAdjustment,
    PayrollCalculationBreakdown,
    PayrollComputation,
    WeeklyWorkSummary,
    WorkLogRecord,
)
from .enums import ContractType, RunStatus, WorkLogStatus
from .messages import MessageComposer

__all__ = [
    "ContractType",
    "DeductionLine",
    "Incentive",
    "MessageComposer",
    "PayrollAdjustment",
    "PayrollCalculationBreakdown",
    "PayrollComposer",
    "PayrollComputation",
    "RunStatus",
    "WeeklyWorkSummary",
    "WorkLogRecord",
    "WorkLogStatus",
]
