"""
Tests for safe logging utilities
"""

from django.test import SimpleTestCase

from core.logging_utils import (
    err_tag,
    mask_email,
    mask_name,
    public_emp_id,
    safe_log_employee,
)
from users.models import Employee


class SafeLoggingUtilsTest(SimpleTestCase):
    """Tests for PII data masking functions"""

    def test_mask_email(self):
        self.assertEqual(mask_email("admin@example.com"), "a***@example.com")
        self.assertEqual(mask_email("a@test.com"), "*@test.com")
        self.assertEqual(mask_email(""), "[invalid_email]")
        self.assertEqual(mask_email("invalid-email"), "[invalid_email]")

    def test_mask_name(self):
        self.assertEqual(mask_name("Mina Cho"), "M.C.")
        self.assertEqual(mask_name("Mina"), "M.")
        self.assertEqual(mask_name("  "), "[no_name]")

    def test_public_emp_id_is_stable_and_opaque(self):
        self.assertEqual(public_emp_id(42), public_emp_id(42))
        self.assertNotEqual(public_emp_id(42), public_emp_id(43))
        self.assertTrue(public_emp_id(42).startswith("emp_"))
        self.assertEqual(public_emp_id(None), "emp_anon")

    def test_safe_log_employee(self):
        employee = Employee(
            pk=7, first_name="Mina", last_name="Cho", email="mina@example.com", role="teacher"
        )

        data = safe_log_employee(employee, "payroll_profile_created")

        self.assertEqual(data["action"], "payroll_profile_created")
        self.assertEqual(data["employee_hash"], public_emp_id(7))
        self.assertEqual(data["email_masked"], "m***@example.com")
        self.assertEqual(data["name_initials"], "M.C.")
        self.assertNotIn("mina@example.com", str(data))

    def test_safe_log_without_employee(self):
        self.assertEqual(safe_log_employee(None, "x"), {"action": "x", "employee": "none"})

    def test_err_tag_strips_pii(self):
        tag = err_tag(ValueError("failed for john@example.com"))

        self.assertNotIn("john@example.com", tag)
        self.assertEqual(err_tag(ValueError("")), "ValueError")
