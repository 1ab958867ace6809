"""
Tests for weekly work-log aggregation and the weekly rest allowance rule.
"""

from dataclasses import FrozenInstanceError
from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from payroll.services.aggregation import (
    WeeklyAllowanceEvaluator,
    WorkLogAggregator,
    week_start,
)
from payroll.services.enums import ContractType
from payroll.tests.helpers import (
    OCTOBER_END,
    OCTOBER_START,
    SCENARIO_MONDAY,
    make_record,
    scenario_week_records,
)


class WeekStartTest(SimpleTestCase):
    def test_week_starts_on_monday(self):
        self.assertEqual(week_start(date(2026, 10, 8)), date(2026, 10, 5))
        self.assertEqual(week_start(date(2026, 10, 5)), date(2026, 10, 5))
        self.assertEqual(week_start(date(2026, 10, 11)), date(2026, 10, 5))


class WorkLogAggregatorTest(SimpleTestCase):
    def setUp(self):
        self.aggregator = WorkLogAggregator(OCTOBER_START, OCTOBER_END)

    def test_single_week_totals(self):
        weeks = self.aggregator.aggregate(scenario_week_records())

        self.assertEqual(len(weeks), 1)
        self.assertEqual(weeks[0].week_key, SCENARIO_MONDAY)
        self.assertEqual(weeks[0].start, SCENARIO_MONDAY)
        self.assertEqual(weeks[0].end, SCENARIO_MONDAY + timedelta(days=6))
        self.assertEqual(weeks[0].total_work_hours, Decimal("16.00"))
        self.assertFalse(weeks[0].has_blocking_status)

    def test_weeks_are_ordered_by_start(self):
        records = [
            make_record(date(2026, 10, 20)),
            make_record(date(2026, 10, 6)),
            make_record(date(2026, 10, 13)),
        ]

        weeks = self.aggregator.aggregate(records)

        self.assertEqual(
            [w.week_key for w in weeks],
            [date(2026, 10, 5), date(2026, 10, 12), date(2026, 10, 19)],
        )

    def test_out_of_period_entries_are_ignored(self):
        records = [
            make_record(date(2026, 9, 30), hours="8"),
            make_record(date(2026, 10, 2), hours="3"),
            make_record(date(2026, 11, 1), hours="8"),
        ]

        weeks = self.aggregator.aggregate(records)

        self.assertEqual(len(weeks), 1)
        self.assertEqual(weeks[0].total_work_hours, Decimal("3.00"))

    def test_straddling_week_is_clipped_for_display_only(self):
        aggregator = WorkLogAggregator(date(2026, 10, 1), date(2026, 10, 15))
        records = [
            make_record(date(2026, 10, 1)),
            make_record(date(2026, 10, 2)),
            make_record(date(2026, 10, 15)),
        ]

        first, last = aggregator.aggregate(records)

        # Grouping key stays the true Monday
        self.assertEqual(first.week_key, date(2026, 9, 28))
        self.assertEqual(first.start, date(2026, 10, 1))
        self.assertEqual(first.end, date(2026, 10, 4))
        self.assertEqual(last.week_key, date(2026, 10, 12))
        self.assertEqual(last.start, date(2026, 10, 12))
        self.assertEqual(last.end, date(2026, 10, 15))

    def test_only_hour_bearing_statuses_add_hours(self):
        records = [
            make_record(SCENARIO_MONDAY, "worked", "4"),
            make_record(SCENARIO_MONDAY + timedelta(days=1), "tardy", "3.5"),
            make_record(SCENARIO_MONDAY + timedelta(days=2), "absence"),
            make_record(SCENARIO_MONDAY + timedelta(days=3), "substitute"),
        ]

        (week,) = self.aggregator.aggregate(records)

        self.assertEqual(week.total_work_hours, Decimal("7.50"))
        self.assertTrue(week.has_tardy)
        self.assertTrue(week.has_absence)
        self.assertTrue(week.has_substitute)

    def test_week_hours_sum_to_billable_entry_hours(self):
        entry_sets = [
            [],
            scenario_week_records(),
            scenario_week_records(("worked", "absence", "tardy", "substitute"), "2.25"),
            [
                make_record(date(2026, 10, day), status, hours)
                for day, status, hours in [
                    (1, "worked", "1.5"),
                    (7, "tardy", "6"),
                    (14, "absence", "0"),
                    (22, "worked", "7.75"),
                    (31, "worked", "2"),
                ]
            ],
        ]

        for records in entry_sets:
            weeks = self.aggregator.aggregate(records)
            expected = sum(
                (r.hours for r in records if r.status.bears_hours), Decimal("0")
            )
            self.assertEqual(sum((w.total_work_hours for w in weeks), Decimal("0")), expected)

    def test_reversed_period_is_rejected(self):
        with self.assertRaises(ValueError):
            WorkLogAggregator(OCTOBER_END, OCTOBER_START)


class WeeklyAllowanceEvaluatorTest(SimpleTestCase):
    def _week(self, statuses=("worked",) * 4, hours="4", contract=ContractType.EMPLOYEE):
        aggregator = WorkLogAggregator(OCTOBER_START, OCTOBER_END)
        (week,) = aggregator.aggregate(scenario_week_records(statuses, hours))
        return WeeklyAllowanceEvaluator(contract).evaluate(week)

    def test_sixteen_hours_earn_allowance(self):
        week = self._week()

        self.assertTrue(week.eligible_for_allowance)
        self.assertEqual(week.allowance_hours, Decimal("3.20"))

    def test_fifteen_hours_is_the_threshold(self):
        week = self._week(hours="3.75")

        self.assertEqual(week.total_work_hours, Decimal("15.00"))
        self.assertTrue(week.eligible_for_allowance)
        self.assertEqual(week.allowance_hours, Decimal("3.00"))

    def test_below_threshold_gets_zero(self):
        week = self._week(hours="3.74")

        self.assertFalse(week.eligible_for_allowance)
        self.assertEqual(week.allowance_hours, Decimal("0.00"))

    def test_allowance_hours_round_half_up(self):
        # 4 x 4.08 = 16.32 -> 3.264 -> 3.26; 4 x 4.11 = 16.44 -> 3.288 -> 3.29
        self.assertEqual(self._week(hours="4.08").allowance_hours, Decimal("3.26"))
        self.assertEqual(self._week(hours="4.11").allowance_hours, Decimal("3.29"))

    def test_freelancer_never_earns_allowance(self):
        week = self._week(hours="8", contract=ContractType.FREELANCER)

        self.assertFalse(week.eligible_for_allowance)
        self.assertEqual(week.allowance_hours, Decimal("0.00"))

    def test_blocking_status_toggles_eligibility(self):
        eligible = self._week(("worked",) * 4, hours="5")
        self.assertTrue(eligible.eligible_for_allowance)

        for status in ("tardy", "absence", "substitute"):
            with self.subTest(status=status):
                week = self._week(("worked",) * 4 + (status,), hours="5")
                self.assertGreaterEqual(week.total_work_hours, Decimal("15"))
                self.assertFalse(week.eligible_for_allowance)
                self.assertEqual(week.allowance_hours, Decimal("0.00"))

        restored = self._week(("worked",) * 4, hours="5")
        self.assertTrue(restored.eligible_for_allowance)

    def test_evaluate_returns_a_copy(self):
        aggregator = WorkLogAggregator(OCTOBER_START, OCTOBER_END)
        (week,) = aggregator.aggregate(scenario_week_records())

        evaluated = WeeklyAllowanceEvaluator(ContractType.EMPLOYEE).evaluate(week)

        self.assertIsNot(evaluated, week)
        self.assertTrue(evaluated.eligible_for_allowance)
        self.assertFalse(week.eligible_for_allowance)
        self.assertEqual(week.allowance_hours, Decimal("0"))

    def test_summaries_cannot_be_reassigned(self):
        week = self._week()

        with self.assertRaises(FrozenInstanceError):
            week.allowance_hours = Decimal("0")
