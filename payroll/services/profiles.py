"""
Pay profile resolution for a settlement period.
"""

import logging

from core.logging_utils import public_emp_id

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_profile(teacher, period_start, period_end):
    """
    Return the profile whose effective range covers the whole period.

    When several profiles qualify, the latest effective_from wins.

    Raises:
        ConfigurationError: If no profile covers the period
    """
    from payroll.models import TeacherPayrollProfile

    profile = (
        TeacherPayrollProfile.objects.for_teacher(teacher)
        .covering(period_start, period_end)
        .order_by("-effective_from", "-created_at")
        .first()
    )
    if profile is None:
        logger.warning(
            "No payroll profile covers the requested period",
            extra={
                "employee_hash": public_emp_id(getattr(teacher, "pk", teacher)),
                "period_start": period_start.isoformat(),
                "period_end": period_end.isoformat(),
                "action": "resolve_profile_missing",
            },
        )
        raise ConfigurationError(
            "No payroll profile is configured for this teacher and period",
            details={
                "period_start": period_start.isoformat(),
                "period_end": period_end.isoformat(),
            },
        )
    return profile


def close_profile(profile, effective_to):
    """End a profile's effective range on effective_to (inclusive)"""
    profile.effective_to = effective_to
    profile.save()
    logger.info(
        "Payroll profile closed",
        extra={
            "employee_hash": public_emp_id(profile.teacher_id),
            "profile_id": profile.pk,
            "effective_to": effective_to.isoformat(),
            "action": "close_profile",
        },
    )
    return profile
