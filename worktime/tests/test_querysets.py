from datetime import date
from decimal import Decimal

from tests.base import BaseTestCase, create_employee
from worktime.models import WorkLogEntry


class WorkLogEntryQuerySetTest(BaseTestCase):
    def setUp(self):
        super().setUp()
        self.other = create_employee(first_name="Jane", last_name="Smith")

        def entry(teacher, day, approved=True, **kwargs):
            kwargs.setdefault("status", WorkLogEntry.STATUS_WORKED)
            if kwargs["status"] == WorkLogEntry.STATUS_WORKED:
                kwargs.setdefault("work_hours", Decimal("4"))
            obj = WorkLogEntry.objects.create(teacher=teacher, work_date=day, **kwargs)
            if approved:
                obj.approve(self.principal)
            return obj

        external = {
            "status": WorkLogEntry.STATUS_SUBSTITUTE,
            "substitute_type": WorkLogEntry.SUBSTITUTE_EXTERNAL,
            "external_teacher_name": "Mina Cho",
        }
        self.first_day = entry(self.teacher, date(2026, 10, 1))
        self.last_day = entry(self.teacher, date(2026, 10, 31))
        self.next_month = entry(self.teacher, date(2026, 11, 1))
        self.pending = entry(self.teacher, date(2026, 10, 2), approved=False)
        self.ext_a = entry(
            self.teacher, date(2026, 10, 6), external_teacher_hours=Decimal("2.5"), **external
        )
        self.ext_b = entry(
            self.other, date(2026, 10, 7), external_teacher_hours=Decimal("3"), **external
        )
        self.ext_c = entry(self.other, date(2026, 10, 8), **external)

    def test_within_is_inclusive(self):
        rows = WorkLogEntry.objects.for_teacher(self.teacher).within(
            date(2026, 10, 1), date(2026, 10, 31)
        )

        self.assertIn(self.first_day, rows)
        self.assertIn(self.last_day, rows)
        self.assertNotIn(self.next_month, rows)

    def test_review_filters(self):
        self.assertNotIn(self.pending, WorkLogEntry.objects.approved())
        self.assertEqual(list(WorkLogEntry.objects.pending()), [self.pending])

    def test_external_summary(self):
        summary = (
            WorkLogEntry.objects.approved()
            .external_substitutes()
            .within(date(2026, 10, 1), date(2026, 10, 31))
            .external_summary()
        )

        self.assertEqual(summary["count"], 3)
        self.assertEqual(summary["total_hours"], Decimal("5.5"))
        self.assertEqual(summary["teacher_count"], 2)

    def test_external_summary_of_nothing(self):
        summary = WorkLogEntry.objects.none().external_summary()

        self.assertEqual(summary["count"], 0)
        self.assertEqual(summary["total_hours"], 0)
