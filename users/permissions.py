# users/permissions.py
from rest_framework.permissions import BasePermission


def get_user_employee_profile(user):
    """
    Return the staff record linked to a user, or None.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    return user.employees.filter(is_active=True).first()


class IsPayrollAdmin(BasePermission):
    """
    Permission for roles allowed to compute and publish settlements
    """

    message = "Principal or Admin access required"

    def has_permission(self, request, view):
        employee = get_user_employee_profile(request.user)
        return employee is not None and employee.is_payroll_admin


class IsStaffMember(BasePermission):
    """
    Permission for any active staff record
    """

    message = "Staff access required"

    def has_permission(self, request, view):
        return get_user_employee_profile(request.user) is not None
