"""
Helper functions shared across payroll views.
"""

from django.http import Http404
from django.shortcuts import get_object_or_404

from users.permissions import get_user_employee_profile

from ..models import TeacherPayrollRun


def can_view_run(employee, run):
    """Payroll admins see every run; teachers see their own"""
    if employee is None:
        return False
    return employee.is_payroll_admin or run.teacher_id == employee.pk


def get_run_for_user(user, run_id):
    """
    Load a run the user may see. Runs owned by other teachers are reported
    as not found.
    """
    employee = get_user_employee_profile(user)
    run = get_object_or_404(
        TeacherPayrollRun.objects.select_related("teacher"), pk=run_id
    )
    if not can_view_run(employee, run):
        raise Http404("Payroll run not found")
    return employee, run
