"""Validation for registration and early-detection form input.

Every validator returns ``(is_valid, error_message)``; the message is empty
when the value is valid.
"""
import re
from typing import Tuple

from grahmeen_health.infrastructure.auth.user_manager import ROLES


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
SPECIAL_CHARS = r'[!@#$%^&*(),.?":{}|<>_\-+=\[\]\\\/;\'`~]'


def validate_email(email: str) -> Tuple[bool, str]:
    if not email or not email.strip():
        return False, "Email is required"

    email = email.strip().lower()

    if not re.match(EMAIL_PATTERN, email):
        return False, "Invalid email format"

    # RFC 5321 limits
    if len(email) > 254:
        return False, "Email is too long"

    local_part, domain = email.rsplit('@', 1)
    if len(local_part) > 64:
        return False, "Email local part is too long"
    if len(domain) > 253:
        return False, "Email domain is too long"

    if '..' in email:
        return False, "Email cannot contain consecutive dots"
    if local_part.startswith('.') or local_part.endswith('.'):
        return False, "Email local part cannot start or end with a dot"

    return True, ""


def validate_password(password: str) -> Tuple[bool, str]:
    """
    Validate password strength.

    Password requirements:
    - 8 to 128 characters
    - At least one uppercase letter, one lowercase letter and one number
    - At least one special character
    """
    if not password:
        return False, "Password is required"
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if len(password) > 128:
        return False, "Password is too long (max 128 characters)"
    if not re.search(r'[A-Z]', password):
        return False, "Password must contain at least one uppercase letter"
    if not re.search(r'[a-z]', password):
        return False, "Password must contain at least one lowercase letter"
    if not re.search(r'\d', password):
        return False, "Password must contain at least one number"
    if not re.search(SPECIAL_CHARS, password):
        return False, "Password must contain at least one special character"
    return True, ""


def validate_name(name: str, field_name: str = "Name") -> Tuple[bool, str]:
    if not name or not name.strip():
        return False, f"{field_name} is required"

    name = name.strip()
    if len(name) < 2:
        return False, f"{field_name} must be at least 2 characters long"
    if len(name) > 50:
        return False, f"{field_name} is too long (max 50 characters)"

    # Letters, spaces, hyphens and apostrophes
    if not re.match(r"^[a-zA-Z\s\-']+$", name):
        return False, f"{field_name} can only contain letters, spaces, hyphens, and apostrophes"

    return True, ""


def passwords_match(password: str, confirm_password: str) -> Tuple[bool, str]:
    if password != confirm_password:
        return False, "Passwords do not match"
    return True, ""


def validate_role(role: str) -> Tuple[bool, str]:
    if not role or not role.strip():
        return False, "Role is required"
    if role.strip().lower() not in ROLES:
        return False, "Invalid role"
    return True, ""


def validate_age(age: str) -> Tuple[bool, str]:
    if age is None or not str(age).strip():
        return False, "Age is required"
    age = str(age).strip()
    if not age.isdigit():
        return False, "Age must be a whole number"
    if int(age) > 120:
        return False, "Age must be between 0 and 120"
    return True, ""
