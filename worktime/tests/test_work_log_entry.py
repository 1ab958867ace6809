"""
Tests for WorkLogEntry validation, review and supersede behaviour.
"""

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError

from tests.base import BaseTestCase, create_employee
from worktime.models import WorkLogEntry


class WorkLogEntryValidationTest(BaseTestCase):
    """Status, hours and substitute rules"""

    def build(self, **kwargs):
        values = {
            "teacher": self.teacher,
            "work_date": date(2026, 10, 5),
            "status": WorkLogEntry.STATUS_WORKED,
            "work_hours": Decimal("4"),
        }
        values.update(kwargs)
        return WorkLogEntry(**values)

    def test_worked_day_needs_positive_hours(self):
        for hours in (None, Decimal("0"), Decimal("-1")):
            with self.subTest(hours=hours):
                with self.assertRaises(ValidationError) as ctx:
                    self.build(work_hours=hours).save()
                self.assertIn("work_hours", ctx.exception.message_dict)

    def test_tardy_day_keeps_its_hours(self):
        entry = self.build(status=WorkLogEntry.STATUS_TARDY, work_hours=Decimal("3.5"))
        entry.save()

        entry.refresh_from_db()
        self.assertEqual(entry.work_hours, Decimal("3.50"))
        self.assertTrue(entry.is_hour_bearing)

    def test_absence_cannot_carry_hours(self):
        with self.assertRaises(ValidationError):
            self.build(status=WorkLogEntry.STATUS_ABSENCE).save()

        entry = self.build(status=WorkLogEntry.STATUS_ABSENCE, work_hours=None)
        entry.save()
        self.assertFalse(entry.is_hour_bearing)

    def test_substitute_needs_a_type(self):
        with self.assertRaises(ValidationError) as ctx:
            self.build(status=WorkLogEntry.STATUS_SUBSTITUTE, work_hours=None).save()
        self.assertIn("substitute_type", ctx.exception.message_dict)

    def test_internal_substitute_rules(self):
        colleague = create_employee(first_name="Jane", last_name="Smith")
        base = {
            "status": WorkLogEntry.STATUS_SUBSTITUTE,
            "work_hours": None,
            "substitute_type": WorkLogEntry.SUBSTITUTE_INTERNAL,
        }

        with self.assertRaises(ValidationError):
            self.build(**base).save()
        with self.assertRaises(ValidationError):
            self.build(substitute_teacher=self.teacher, **base).save()

        entry = self.build(substitute_teacher=colleague, **base)
        entry.save()
        self.assertFalse(entry.has_external_substitute)

    def test_external_substitute_rules(self):
        base = {
            "status": WorkLogEntry.STATUS_SUBSTITUTE,
            "work_hours": None,
            "substitute_type": WorkLogEntry.SUBSTITUTE_EXTERNAL,
        }

        with self.assertRaises(ValidationError):
            self.build(external_teacher_name="  ", **base).save()
        with self.assertRaises(ValidationError):
            self.build(
                external_teacher_name="Mina Cho",
                external_teacher_hours=Decimal("-1"),
                **base,
            ).save()

        entry = self.build(
            external_teacher_name="Mina Cho", external_teacher_hours=Decimal("3"), **base
        )
        entry.save()
        self.assertTrue(entry.has_external_substitute)
        self.assertEqual(entry.external_teacher_pay_status, WorkLogEntry.PAY_PENDING)

    def test_substitute_details_need_substitute_status(self):
        with self.assertRaises(ValidationError):
            self.build(substitute_type=WorkLogEntry.SUBSTITUTE_EXTERNAL).save()


class WorkLogEntryReviewTest(BaseTestCase):
    def setUp(self):
        super().setUp()
        self.entry = WorkLogEntry.objects.create(
            teacher=self.teacher,
            work_date=date(2026, 10, 5),
            status=WorkLogEntry.STATUS_WORKED,
            work_hours=Decimal("4"),
        )

    def test_new_entries_are_pending(self):
        self.assertEqual(self.entry.review_status, WorkLogEntry.REVIEW_PENDING)

    def test_approve(self):
        self.entry.approve(self.principal, note="ok")

        self.entry.refresh_from_db()
        self.assertEqual(self.entry.review_status, WorkLogEntry.REVIEW_APPROVED)
        self.assertEqual(self.entry.reviewed_by, self.principal)
        self.assertIsNotNone(self.entry.reviewed_at)

    def test_pending_entries_are_editable(self):
        self.entry.work_hours = Decimal("5")
        self.entry.save()

        self.entry.refresh_from_db()
        self.assertEqual(self.entry.work_hours, Decimal("5.00"))

    def test_approved_entries_are_immutable(self):
        self.entry.approve(self.principal)

        entry = WorkLogEntry.objects.get(pk=self.entry.pk)
        entry.work_hours = Decimal("8")
        with self.assertRaises(ValidationError):
            entry.save()

        entry = WorkLogEntry.objects.get(pk=self.entry.pk)
        entry.status = WorkLogEntry.STATUS_ABSENCE
        entry.work_hours = None
        with self.assertRaises(ValidationError):
            entry.save()

    def test_approved_entries_accept_pay_status_changes(self):
        self.entry.approve(self.principal)

        self.entry.external_teacher_pay_status = WorkLogEntry.PAY_COMPLETED
        self.entry.save()

    def test_supersede_keeps_history(self):
        self.entry.approve(self.principal)

        successor = self.entry.supersede(self.principal, work_hours=Decimal("6"))

        self.entry.refresh_from_db()
        self.assertEqual(self.entry.review_status, WorkLogEntry.REVIEW_REJECTED)
        self.assertEqual(self.entry.review_note, f"Superseded by entry #{successor.pk}")
        self.assertEqual(self.entry.work_hours, Decimal("4.00"))
        self.assertEqual(successor.review_status, WorkLogEntry.REVIEW_PENDING)
        self.assertEqual(successor.work_hours, Decimal("6.00"))
        self.assertEqual(successor.teacher, self.teacher)
        self.assertEqual(successor.work_date, self.entry.work_date)

    def test_invalid_supersede_leaves_original_untouched(self):
        self.entry.approve(self.principal)

        with self.assertRaises(ValidationError):
            self.entry.supersede(self.principal, status=WorkLogEntry.STATUS_ABSENCE)

        stored = WorkLogEntry.objects.get(pk=self.entry.pk)
        self.assertEqual(stored.review_status, WorkLogEntry.REVIEW_APPROVED)
        self.assertEqual(WorkLogEntry.objects.count(), 1)
