# tests/base.py
import uuid
from decimal import Decimal

from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from django.contrib.auth.models import User
from django.test import TestCase

from users.models import Employee


def create_employee(role=Employee.ROLE_TEACHER, first_name="John", last_name="Doe", with_user=True):
    """Create an employee (and optionally a linked user) with unique credentials"""
    suffix = str(uuid.uuid4())[:8]
    email = f"{first_name.lower()}_{suffix}@example.com"
    user = None
    if with_user:
        user = User.objects.create_user(
            username=f"{first_name.lower()}_{suffix}",
            email=email,
            password="testpass123",
        )
    return Employee.objects.create(
        user=user,
        first_name=first_name,
        last_name=last_name,
        email=email,
        role=role,
    )


class BaseTestCase(TestCase):
    """Base test case with a principal and a teacher"""

    def setUp(self):
        """Set up test data"""
        self.principal = create_employee(Employee.ROLE_PRINCIPAL, "Paula", "Park")
        self.teacher = create_employee(Employee.ROLE_TEACHER, "John", "Doe")


class BaseAPITestCase(APITestCase):
    """Base API test case with authenticated principal and teacher clients"""

    def setUp(self):
        """Set up test data and authentication"""
        self.principal = create_employee(Employee.ROLE_PRINCIPAL, "Paula", "Park")
        self.teacher = create_employee(Employee.ROLE_TEACHER, "John", "Doe")
        self.other_teacher = create_employee(Employee.ROLE_TEACHER, "Jane", "Smith")

        self.principal_client = self.client_for(self.principal)
        self.teacher_client = self.client_for(self.teacher)
        self.other_teacher_client = self.client_for(self.other_teacher)

    def client_for(self, employee):
        """Token-authenticated client for an employee's user"""
        token = Token.objects.create(user=employee.user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Token " + token.key)
        return client

    def assertDecimalEqual(self, actual, expected):
        self.assertEqual(Decimal(str(actual)), Decimal(str(expected)))
