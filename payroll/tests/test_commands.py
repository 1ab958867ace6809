"""
Tests for the compute_payroll management command.
"""

from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError

from payroll.models import TeacherPayrollRun, TeacherPayrollRunItem
from payroll.services.lifecycle import SettlementLifecycle
from payroll.services.payroll_service import PayrollService
from payroll.tests.helpers import (
    OCTOBER_END,
    OCTOBER_START,
    create_profile,
    create_scenario_week,
)
from tests.base import BaseTestCase, create_employee


class ComputePayrollCommandTest(BaseTestCase):
    def setUp(self):
        super().setUp()
        create_profile(self.teacher)
        create_scenario_week(self.teacher, reviewer=self.principal)

    def call(self, *args):
        out = StringIO()
        call_command("compute_payroll", *args, stdout=out)
        return out.getvalue()

    def test_saves_drafts(self):
        output = self.call("--month", "2026-10")

        self.assertIn("Period: October 2026", output)
        self.assertIn("net 173718.82", output)
        self.assertIn("Saved: 1, skipped: 0", output)
        run = TeacherPayrollRun.objects.get(teacher=self.teacher)
        self.assertEqual(run.status, "draft")

    def test_dry_run_saves_nothing(self):
        output = self.call("--month", "2026-10", "--dry-run")

        self.assertIn("gross 192000.00", output)
        self.assertIn("Computed: 1, skipped: 0", output)
        self.assertFalse(TeacherPayrollRun.objects.exists())

    def test_skips_teacher_without_profile(self):
        newcomer = create_employee(first_name="Nora", last_name="Lee")
        create_scenario_week(newcomer)

        output = self.call("--month", "2026-10")

        self.assertIn("Nora Lee: skipped", output)
        self.assertIn("Saved: 1, skipped: 1", output)

    def test_skips_runs_awaiting_confirmation(self):
        run, _ = PayrollService().save_draft(self.teacher, OCTOBER_START, OCTOBER_END)
        SettlementLifecycle().request_acknowledgement(run)

        output = self.call("--month", "2026-10")

        self.assertIn("Saved: 0, skipped: 1", output)
        run.refresh_from_db()
        self.assertEqual(run.status, "pending_ack")

    def test_single_teacher(self):
        other = create_employee(first_name="Jane", last_name="Smith")
        create_profile(other)
        create_scenario_week(other)

        output = self.call("--month", "2026-10", "--teacher-id", str(other.pk))

        self.assertIn("Teachers: 1", output)
        self.assertEqual(TeacherPayrollRun.objects.get().teacher, other)

    def test_month_without_work(self):
        output = self.call("--month", "2026-11")

        self.assertIn("No teachers with approved work logs", output)

    def test_invalid_arguments(self):
        with self.assertRaises(CommandError):
            self.call("--month", "October")
        with self.assertRaises(CommandError):
            self.call("--month", "2026-10", "--teacher-id", "999999")

    def test_failed_save_does_not_stop_other_teachers(self):
        other = create_employee(first_name="Jane", last_name="Smith")
        create_profile(other)
        create_scenario_week(other)
        real_bulk_create = TeacherPayrollRunItem.objects.bulk_create
        calls = []

        def fail_first(*args, **kwargs):
            calls.append(1)
            if len(calls) == 1:
                raise DatabaseError("disk full")
            return real_bulk_create(*args, **kwargs)

        with mock.patch.object(
            TeacherPayrollRunItem.objects, "bulk_create", side_effect=fail_first
        ):
            output = self.call("--month", "2026-10")

        # Doe sorts before Smith, so the first save is John Doe's
        self.assertIn("John Doe: failed", output)
        self.assertIn("Saved: 1, skipped: 0, failed: 1", output)
        self.assertFalse(TeacherPayrollRun.objects.filter(teacher=self.teacher).exists())
        self.assertTrue(TeacherPayrollRun.objects.filter(teacher=other).exists())
