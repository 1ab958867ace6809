"""
Test configuration and fixtures for payroll tests.

Factory functions live here so TestCase-based tests (via helpers.py) and
plain pytest tests share the same builders.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

# Monday of the week used by the reference scenarios
SCENARIO_MONDAY = date(2026, 10, 5)
OCTOBER_START = date(2026, 10, 1)
OCTOBER_END = date(2026, 10, 31)


@pytest.fixture
def payroll_service():
    """Provide PayrollService instance for tests."""
    from payroll.services.payroll_service import PayrollService

    return PayrollService()


def make_record(day, status="worked", hours="4"):
    """Build a WorkLogRecord without touching the database"""
    from payroll.services.contracts import WorkLogRecord
    from payroll.services.enums import WorkLogStatus

    status = WorkLogStatus(status)
    return WorkLogRecord(
        work_date=day,
        status=status,
        hours=Decimal(hours) if status.bears_hours else Decimal("0"),
    )


def scenario_week_records(statuses=("worked", "worked", "worked", "worked"), hours="4"):
    """Four consecutive days starting on SCENARIO_MONDAY"""
    return [
        make_record(SCENARIO_MONDAY + timedelta(days=offset), status, hours)
        for offset, status in enumerate(statuses)
    ]


def create_profile(teacher, **overrides):
    from payroll.models import TeacherPayrollProfile

    values = {
        "hourly_rate": Decimal("10000"),
        "contract_type": "employee",
        "insurance_enrolled": True,
        "effective_from": date(2026, 1, 1),
    }
    values.update(overrides)
    return TeacherPayrollProfile.objects.create(teacher=teacher, **values)


def create_entry(teacher, work_date, status="worked", hours="4", approved=True, reviewer=None, **extra):
    from worktime.models import WorkLogEntry

    entry = WorkLogEntry.objects.create(
        teacher=teacher,
        work_date=work_date,
        status=status,
        work_hours=Decimal(hours) if status in ("worked", "tardy") else None,
        **extra,
    )
    if approved:
        entry.approve(reviewer)
    return entry


def create_scenario_week(teacher, statuses=("worked", "worked", "worked", "worked"), **kwargs):
    return [
        create_entry(teacher, SCENARIO_MONDAY + timedelta(days=offset), status, **kwargs)
        for offset, status in enumerate(statuses)
    ]
