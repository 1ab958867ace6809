from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from users.models import Employee

from .services.enums import AckStatus, ContractType, ItemKind, RunStatus


def _default_currency():
    return getattr(settings, "PAYROLL_CURRENCY", "KRW")


class TeacherPayrollProfileQuerySet(models.QuerySet):
    def for_teacher(self, teacher):
        return self.filter(teacher=teacher)

    def covering(self, period_start, period_end):
        """Profiles whose effective range covers the whole period"""
        return self.filter(effective_from__lte=period_start).filter(
            models.Q(effective_to__isnull=True) | models.Q(effective_to__gte=period_end)
        )


class TeacherPayrollProfile(models.Model):
    """Effective-dated pay terms of one teacher"""

    CONTRACT_CHOICES = [
        (ContractType.EMPLOYEE.value, "Employee"),
        (ContractType.FREELANCER.value, "Freelancer"),
        (ContractType.NONE.value, "None"),
    ]

    teacher = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="payroll_profiles"
    )

    hourly_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Pay per billable hour",
    )
    hourly_currency = models.CharField(max_length=3, default=_default_currency)
    base_salary_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        null=True,
        blank=True,
        help_text="Fixed amount paid per settlement period",
    )
    base_salary_currency = models.CharField(max_length=3, default=_default_currency)

    contract_type = models.CharField(
        max_length=20, choices=CONTRACT_CHOICES, default=ContractType.EMPLOYEE.value
    )
    insurance_enrolled = models.BooleanField(
        default=False, help_text="Social insurance enrollment, employees only"
    )

    effective_from = models.DateField()
    effective_to = models.DateField(
        null=True, blank=True, help_text="Last day the terms apply; empty = open ended"
    )

    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_payroll_profiles",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TeacherPayrollProfileQuerySet.as_manager()

    class Meta:
        verbose_name = "Teacher Payroll Profile"
        verbose_name_plural = "Teacher Payroll Profiles"
        ordering = ["teacher", "-effective_from"]
        indexes = [
            models.Index(
                fields=["teacher", "effective_from"], name="pay_profile_teacher_from_idx"
            ),
        ]

    def clean(self):
        """Validate the effective range and contract fields"""
        errors = {}

        if self.effective_to and self.effective_from and self.effective_to < self.effective_from:
            errors["effective_to"] = "Effective end must not be before effective start."

        if self.hourly_rate is not None and self.hourly_rate < 0:
            errors["hourly_rate"] = "Hourly rate cannot be negative."

        if errors:
            raise ValidationError(errors)

        # Insurance only applies to employed staff
        if self.contract_type != ContractType.EMPLOYEE.value:
            self.insurance_enrolled = False

    @property
    def contract(self) -> ContractType:
        return ContractType.from_string(self.contract_type)

    def covers(self, period_start, period_end) -> bool:
        if self.effective_from > period_start:
            return False
        return self.effective_to is None or self.effective_to >= period_end

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return (
            f"{self.teacher.get_full_name()} - {self.contract_type} "
            f"from {self.effective_from}"
        )


class TeacherPayrollRun(models.Model):
    """Persisted settlement snapshot for one teacher and one period"""

    STATUS_CHOICES = [(status.value, status.display_name) for status in RunStatus]

    teacher = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="payroll_runs"
    )
    payroll_profile = models.ForeignKey(
        TeacherPayrollProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="runs",
    )
    period_start = models.DateField()
    period_end = models.DateField()

    # Contract snapshot taken at compute time
    contract_type = models.CharField(
        max_length=20, choices=TeacherPayrollProfile.CONTRACT_CHOICES
    )
    insurance_enrolled = models.BooleanField(default=False)

    # Totals
    total_work_hours = models.DecimalField(
        max_digits=8, decimal_places=2, default=Decimal("0")
    )
    hourly_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    weekly_allowance = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    base_salary_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    adjustment_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"),
        help_text="Sum of manual additions and incentives",
    )
    gross_pay = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    deductions_total = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    net_pay = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0"),
        help_text="May be negative; surfaced as-is",
    )

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=RunStatus.DRAFT.value
    )
    message_preview = models.TextField(blank=True)
    meta = models.JSONField(default=dict, blank=True)

    requested_by = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="requested_payroll_runs",
    )
    requested_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_payroll_runs",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Teacher Payroll Run"
        verbose_name_plural = "Teacher Payroll Runs"
        unique_together = ["teacher", "period_start", "period_end"]
        ordering = ["-period_start", "teacher"]
        indexes = [
            models.Index(fields=["period_start", "period_end"], name="pay_run_period_idx"),
            models.Index(fields=["status"], name="pay_run_status_idx"),
        ]

    @property
    def run_status(self) -> RunStatus:
        return RunStatus(self.status)

    def __str__(self):
        return (
            f"{self.teacher.get_full_name()} - {self.period_start} to "
            f"{self.period_end} ({self.status})"
        )


class TeacherPayrollRunItem(models.Model):
    """Ordered line item of a run; rebuilt in full on every recompute"""

    KIND_CHOICES = [
        (ItemKind.EARNING.value, "Earning"),
        (ItemKind.DEDUCTION.value, "Deduction"),
        (ItemKind.INFO.value, "Info"),
    ]

    run = models.ForeignKey(
        TeacherPayrollRun, on_delete=models.CASCADE, related_name="items"
    )
    item_kind = models.CharField(max_length=20, choices=KIND_CHOICES)
    label = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    metadata = models.JSONField(default=dict, blank=True)
    order_index = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Teacher Payroll Run Item"
        verbose_name_plural = "Teacher Payroll Run Items"
        ordering = ["run", "order_index"]

    def __str__(self):
        return f"{self.item_kind}: {self.label} {self.amount}"


class TeacherPayrollAcknowledgement(models.Model):
    """Teacher confirmation state of a run"""

    STATUS_CHOICES = [
        (AckStatus.PENDING.value, "Pending"),
        (AckStatus.CONFIRMED.value, "Confirmed"),
    ]

    run = models.OneToOneField(
        TeacherPayrollRun, on_delete=models.CASCADE, related_name="acknowledgement"
    )
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=AckStatus.PENDING.value
    )
    requested_by = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="requested_acknowledgements",
    )
    requested_at = models.DateTimeField(null=True, blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    note = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Teacher Payroll Acknowledgement"
        verbose_name_plural = "Teacher Payroll Acknowledgements"

    def __str__(self):
        return f"Acknowledgement of run #{self.run_id} ({self.status})"
