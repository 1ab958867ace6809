"""
Django management command that stores draft payroll runs for a month.

Usage:
    # Drafts for every active teacher with approved work logs in October 2026
    python manage.py compute_payroll --month 2026-10

    # One teacher only
    python manage.py compute_payroll --month 2026-10 --teacher-id 12

    # Compute and print without saving
    python manage.py compute_payroll --month 2026-10 --dry-run
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from payroll.exceptions import ConfigurationError, PersistenceError, StateTransitionError
from payroll.services.payroll_service import get_payroll_service
from payroll.services.payroll_utils import period_label, resolve_month_range
from users.models import Employee
from worktime.models import WorkLogEntry


class Command(BaseCommand):
    help = "Compute payroll drafts for teachers with approved work logs"

    def add_arguments(self, parser):
        parser.add_argument(
            "--month",
            type=str,
            required=True,
            help="Settlement month in YYYY-MM format (e.g., 2026-10)",
        )

        parser.add_argument(
            "--teacher-id",
            type=int,
            help="Only compute this teacher. If not provided, all active teachers are processed.",
        )

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Compute without saving runs",
        )

    def handle(self, *args, **options):
        try:
            period_start, period_end = resolve_month_range(options["month"])
        except ValidationError:
            raise CommandError("Month must use the YYYY-MM format (e.g., 2026-10)")

        teachers = self._get_teachers(options["teacher_id"], period_start, period_end)
        if not teachers:
            self.stdout.write(self.style.WARNING("No teachers with approved work logs"))
            return

        self.stdout.write(self.style.SUCCESS("Payroll Computation"))
        self.stdout.write(f"Period: {period_label(period_start, period_end)}")
        self.stdout.write(f"Teachers: {len(teachers)}")
        self.stdout.write(f'Dry run: {options["dry_run"]}')
        self.stdout.write("")

        if options["dry_run"]:
            self._dry_run(teachers, period_start, period_end)
        else:
            self._save_drafts(teachers, period_start, period_end)

    def _get_teachers(self, teacher_id, period_start, period_end):
        if teacher_id:
            teacher = Employee.objects.filter(pk=teacher_id).first()
            if teacher is None:
                raise CommandError(f"Teacher {teacher_id} not found")
            return [teacher]

        teacher_ids = (
            WorkLogEntry.objects.approved()
            .within(period_start, period_end)
            .values_list("teacher_id", flat=True)
        )
        return list(
            Employee.objects.active().teachers().filter(pk__in=teacher_ids).distinct()
        )

    def _dry_run(self, teachers, period_start, period_end):
        result = get_payroll_service().compute_bulk(teachers, period_start, period_end)
        for teacher in teachers:
            computation = result.computations.get(teacher.pk)
            if computation is None:
                self.stdout.write(
                    self.style.WARNING(
                        f"  {teacher.display_name}: skipped ({result.errors[teacher.pk]})"
                    )
                )
                continue
            breakdown = computation.breakdown
            self.stdout.write(
                f"  {teacher.display_name}: {breakdown.total_work_hours}h, "
                f"gross {breakdown.gross_pay}, net {breakdown.net_pay}"
            )

        self.stdout.write("")
        self.stdout.write(
            self.style.SUCCESS(
                f"Computed: {result.successful_count}, skipped: {result.failed_count}"
            )
        )

    def _save_drafts(self, teachers, period_start, period_end):
        service = get_payroll_service()
        saved = skipped = failed = 0

        for teacher in teachers:
            try:
                run, _ = service.save_draft(teacher, period_start, period_end)
            except (ConfigurationError, StateTransitionError) as e:
                skipped += 1
                self.stdout.write(
                    self.style.WARNING(f"  {teacher.display_name}: skipped ({e.message})")
                )
                continue
            except PersistenceError as e:
                failed += 1
                self.stdout.write(
                    self.style.ERROR(f"  {teacher.display_name}: failed ({e.message})")
                )
                continue

            saved += 1
            self.stdout.write(
                f"  {teacher.display_name}: draft #{run.pk}, net {run.net_pay}"
            )

        self.stdout.write("")
        self.stdout.write(
            self.style.SUCCESS(f"Saved: {saved}, skipped: {skipped}, failed: {failed}")
        )
