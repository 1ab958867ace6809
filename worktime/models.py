from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from users.models import Employee

from .querysets import WorkLogEntryQuerySet


def _round2(val):
    """Round hours to 2 decimal places"""
    if val is None:
        return None
    try:
        return Decimal(val).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except (ArithmeticError, ValueError, TypeError):
        return val  # Let validators catch invalid data


class WorkLogEntry(models.Model):
    """One teacher, one calendar date, one attendance status"""

    STATUS_WORKED = "worked"
    STATUS_TARDY = "tardy"
    STATUS_ABSENCE = "absence"
    STATUS_SUBSTITUTE = "substitute"

    STATUS_CHOICES = [
        (STATUS_WORKED, "Worked"),
        (STATUS_TARDY, "Tardy"),
        (STATUS_ABSENCE, "Absence"),
        (STATUS_SUBSTITUTE, "Substitute"),
    ]

    HOUR_BEARING_STATUSES = (STATUS_WORKED, STATUS_TARDY)

    SUBSTITUTE_INTERNAL = "internal"
    SUBSTITUTE_EXTERNAL = "external"

    SUBSTITUTE_TYPE_CHOICES = [
        (SUBSTITUTE_INTERNAL, "Internal teacher"),
        (SUBSTITUTE_EXTERNAL, "External teacher"),
    ]

    REVIEW_PENDING = "pending"
    REVIEW_APPROVED = "approved"
    REVIEW_REJECTED = "rejected"

    REVIEW_STATUS_CHOICES = [
        (REVIEW_PENDING, "Pending"),
        (REVIEW_APPROVED, "Approved"),
        (REVIEW_REJECTED, "Rejected"),
    ]

    PAY_PENDING = "pending"
    PAY_COMPLETED = "completed"

    PAY_STATUS_CHOICES = [
        (PAY_PENDING, "Pending"),
        (PAY_COMPLETED, "Completed"),
    ]

    # Fields a reviewer may still change once a row is approved
    REVIEW_FIELDS = (
        "review_status",
        "review_note",
        "reviewed_by",
        "reviewed_at",
        "external_teacher_pay_status",
        "updated_at",
    )

    teacher = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="work_log_entries"
    )
    work_date = models.DateField(help_text="Calendar date in the school's time zone")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    work_hours = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Billable hours, only for worked and tardy days",
    )

    # Substitute details
    substitute_type = models.CharField(
        max_length=20, choices=SUBSTITUTE_TYPE_CHOICES, blank=True
    )
    substitute_teacher = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="substitute_entries",
    )
    external_teacher_name = models.CharField(max_length=100, blank=True)
    external_teacher_phone = models.CharField(max_length=30, blank=True)
    external_teacher_bank = models.CharField(max_length=50, blank=True)
    external_teacher_account = models.CharField(max_length=50, blank=True)
    external_teacher_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    external_teacher_pay_status = models.CharField(
        max_length=20, choices=PAY_STATUS_CHOICES, default=PAY_PENDING
    )

    notes = models.TextField(blank=True)

    # Review
    review_status = models.CharField(
        max_length=20, choices=REVIEW_STATUS_CHOICES, default=REVIEW_PENDING
    )
    review_note = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_work_log_entries",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = WorkLogEntryQuerySet.as_manager()

    class Meta:
        ordering = ["-work_date", "-created_at"]
        verbose_name = "Work Log Entry"
        verbose_name_plural = "Work Log Entries"
        indexes = [
            models.Index(
                fields=["teacher", "work_date"], name="wt_entry_teacher_date_idx"
            ),
            models.Index(
                fields=["review_status", "work_date"], name="wt_entry_review_idx"
            ),
        ]

    def clean(self):
        """Custom validation"""
        self.work_hours = _round2(self.work_hours)
        self.external_teacher_hours = _round2(self.external_teacher_hours)

        super().clean()

        if self.status in self.HOUR_BEARING_STATUSES:
            if self.work_hours is None or self.work_hours <= 0:
                raise ValidationError(
                    {"work_hours": "Worked and tardy days require positive hours"}
                )
        elif self.work_hours:
            raise ValidationError(
                {"work_hours": "Only worked and tardy days may carry hours"}
            )

        if self.status == self.STATUS_SUBSTITUTE:
            self._validate_substitute()
        elif self.substitute_type:
            raise ValidationError(
                {"substitute_type": "Substitute details require substitute status"}
            )

        self._validate_approved_is_unchanged()

    def _validate_substitute(self):
        if self.substitute_type == self.SUBSTITUTE_INTERNAL:
            if self.substitute_teacher_id is None:
                raise ValidationError(
                    {"substitute_teacher": "Internal substitutes need a teacher"}
                )
            if self.substitute_teacher_id == self.teacher_id:
                raise ValidationError(
                    {"substitute_teacher": "A teacher cannot substitute for themselves"}
                )
        elif self.substitute_type == self.SUBSTITUTE_EXTERNAL:
            if not self.external_teacher_name.strip():
                raise ValidationError(
                    {"external_teacher_name": "External substitutes need a name"}
                )
            if self.external_teacher_hours is not None and self.external_teacher_hours < 0:
                raise ValidationError(
                    {"external_teacher_hours": "Hours cannot be negative"}
                )
        else:
            raise ValidationError(
                {"substitute_type": "Substitute days need a substitute type"}
            )

    def _validate_approved_is_unchanged(self):
        """Approved rows only accept review bookkeeping changes"""
        if self.pk is None:
            return
        stored = (
            type(self).objects.filter(pk=self.pk).values().first()
        )
        if stored is None or stored["review_status"] != self.REVIEW_APPROVED:
            return

        for field in self._meta.concrete_fields:
            if field.name in self.REVIEW_FIELDS:
                continue
            if stored[field.attname] != getattr(self, field.attname):
                raise ValidationError(
                    "Approved work log entries are immutable; use supersede() to edit"
                )

    @property
    def is_hour_bearing(self):
        return self.status in self.HOUR_BEARING_STATUSES

    @property
    def has_external_substitute(self):
        return (
            self.status == self.STATUS_SUBSTITUTE
            and self.substitute_type == self.SUBSTITUTE_EXTERNAL
        )

    def approve(self, reviewer, note=""):
        self.review_status = self.REVIEW_APPROVED
        self.review_note = note
        self.reviewed_by = reviewer
        self.reviewed_at = timezone.now()
        self.save()

    def reject(self, reviewer, note=""):
        self.review_status = self.REVIEW_REJECTED
        self.review_note = note
        self.reviewed_by = reviewer
        self.reviewed_at = timezone.now()
        self.save()

    def supersede(self, reviewer=None, **changes):
        """
        Replace this row with an edited copy awaiting review.

        The current row is rejected with a note pointing at its successor,
        so approved history is never rewritten in place.
        """
        copied = {
            field.attname: getattr(self, field.attname)
            for field in self._meta.concrete_fields
            if not field.primary_key
            and field.name not in self.REVIEW_FIELDS
            and field.name != "created_at"
        }
        copied["external_teacher_pay_status"] = self.external_teacher_pay_status
        for name, value in changes.items():
            if name in ("teacher", "substitute_teacher"):
                copied[f"{name}_id"] = value.pk if value is not None else None
            else:
                copied[name] = value

        with transaction.atomic():
            successor = type(self)(**copied)
            successor.save()
            self.review_status = self.REVIEW_REJECTED
            self.review_note = f"Superseded by entry #{successor.pk}"
            self.reviewed_by = reviewer
            self.reviewed_at = timezone.now()
            self.save()
        return successor

    def save(self, *args, **kwargs):
        # Validate before saving
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.teacher.get_full_name()} - {self.work_date} ({self.status})"
