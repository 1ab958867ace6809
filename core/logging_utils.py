"""
Utilities for safe logging with automatic PII data masking
"""

import hashlib
import re
from typing import Any, Dict


def mask_email(email: str) -> str:
    """
    Masks email address for safe logging

    Args:
        email: Email address to mask

    Returns:
        Masked email (e.g., a***@example.com)
    """
    if not email or "@" not in email:
        return "[invalid_email]"

    username, domain = email.split("@", 1)
    if len(username) <= 1:
        return f"*@{domain}"

    return f"{username[0]}***@{domain}"


def mask_name(full_name: str) -> str:
    """
    Masks full name for safe logging

    Args:
        full_name: Full name to mask

    Returns:
        Initials (e.g., M.P.)
    """
    if not full_name or not full_name.strip():
        return "[no_name]"

    parts = full_name.strip().split()
    if len(parts) == 1:
        return f"{parts[0][0]}."
    return f"{parts[0][0]}.{parts[1][0]}."


def public_emp_id(employee_id: int, salt: str = "tutorpay_emp") -> str:
    """
    Create safe public employee identifier for logging

    Args:
        employee_id: Employee ID
        salt: Salt for hashing to prevent reverse lookup

    Returns:
        Safe public employee identifier (emp_123456789abc)
    """
    if not employee_id:
        return "emp_anon"

    hash_input = f"{salt}:{employee_id}"
    hash_obj = hashlib.blake2b(hash_input.encode(), digest_size=6)
    return f"emp_{hash_obj.hexdigest()}"


def safe_log_employee(employee, action: str = "action") -> Dict[str, Any]:
    """
    Creates safe object for logging staff data

    Args:
        employee: Employee object
        action: Action description

    Returns:
        Dictionary with safe data for logging
    """
    if not employee:
        return {"action": action, "employee": "none"}

    safe_data = {
        "action": action,
        "employee_hash": public_emp_id(employee.pk),
        "role": getattr(employee, "role", "unknown"),
    }

    if getattr(employee, "email", None):
        safe_data["email_masked"] = mask_email(employee.email)

    full_name = f"{getattr(employee, 'first_name', '') or ''} {getattr(employee, 'last_name', '') or ''}".strip()
    if full_name:
        safe_data["name_initials"] = mask_name(full_name)

    return safe_data


def err_tag(exc: BaseException) -> str:
    """
    Extract safe error tag from exception for logging

    Args:
        exc: Exception instance

    Returns:
        Safe error tag with sanitized message content
    """
    for attr in ("safe_message", "public_message"):
        msg = getattr(exc, attr, None)
        if msg:
            return str(msg)[:120]

    text = str(exc)

    # Strip emails and long tokens
    text = re.sub(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}", "***@***", text)
    text = re.sub(r"\b(?:Bearer\s+)?[A-Za-z0-9._-]{16,}\b", "****", text)

    return text[:120] if text.strip() else exc.__class__.__name__
