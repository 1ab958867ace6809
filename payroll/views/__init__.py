"""
Payroll views package.

Views are split into modules by functionality:
- settlement_views.py - Preview, drafts, acknowledgement and confirmation
- profile_views.py - Pay profile management
- substitute_views.py - External substitute ledger
"""

from .profile_views import payroll_profiles
from .settlement_views import (
    confirm_payroll_run,
    payroll_run_detail,
    payroll_run_list,
    preview_payroll,
    request_payroll_acknowledgement,
    rerequest_acknowledgement,
    save_payroll_draft,
)
from .substitute_views import external_substitutes, update_external_pay_status

__all__ = [
    "confirm_payroll_run",
    "external_substitutes",
    "payroll_profiles",
    "payroll_run_detail",
    "payroll_run_list",
    "preview_payroll",
    "request_payroll_acknowledgement",
    "rerequest_acknowledgement",
    "save_payroll_draft",
    "update_external_pay_status",
]
