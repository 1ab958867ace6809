# users/models.py
import re

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import models


class EmployeeQuerySet(models.QuerySet):
    """QuerySet helpers for staff lookups"""

    def active(self):
        return self.filter(is_active=True)

    def teachers(self):
        return self.filter(role=Employee.ROLE_TEACHER)


class Employee(models.Model):
    """Staff member record; teachers are the payees of payroll settlements"""

    ROLE_TEACHER = "teacher"
    ROLE_PRINCIPAL = "principal"
    ROLE_MANAGER = "manager"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_TEACHER, "Teacher"),
        (ROLE_PRINCIPAL, "Principal"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_ADMIN, "Administrator"),
    ]

    # Roles allowed to run and publish settlements
    PAYROLL_ADMIN_ROLES = (ROLE_PRINCIPAL, ROLE_ADMIN)

    objects = EmployeeQuerySet.as_manager()

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="employees",
        null=True,
        blank=True,
        help_text="Django user account used to sign in",
    )

    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        help_text="Phone number in international format",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_TEACHER)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["last_name", "first_name"]
        verbose_name = "Employee"
        verbose_name_plural = "Employees"
        indexes = [
            models.Index(fields=["role", "is_active"], name="users_emp_role_active_idx"),
        ]

    def clean(self):
        super().clean()

        if self.phone and not self._is_valid_phone(self.phone):
            raise ValidationError(
                {"phone": "Phone number must be in international format (+82...)"}
            )

    def _is_valid_phone(self, phone):
        cleaned_phone = phone.replace(" ", "").replace("-", "")
        return re.match(r"^\+\d{1,3}\d{7,15}$", cleaned_phone) is not None

    def get_full_name(self):
        """Return the employee's full name"""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self):
        """Name used on statements, falling back to the e-mail address"""
        return self.get_full_name() or self.email

    @property
    def is_payroll_admin(self):
        return self.role in self.PAYROLL_ADMIN_ROLES

    def __str__(self):
        return self.get_full_name() or self.email
