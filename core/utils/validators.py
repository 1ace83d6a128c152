"""Validation utilities for marketplace identity and contact fields."""

import re
from typing import Iterable, Optional, Union
from email_validator import validate_email as _validate_email, EmailNotValidError


PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$"
)
PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,15}$")
AADHAAR_PATTERN = re.compile(r"^[2-9]{1}[0-9]{11}$")
GST_PATTERN = re.compile(
    r"^\d{2}[A-Z]{5}\d{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$", re.IGNORECASE
)


def validate_email(email: str) -> tuple[bool, Optional[str]]:
    """
    Validate email address format.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, normalized_email or error_message)
    """
    try:
        validation = _validate_email(email, check_deliverability=False)
        return True, validation.normalized
    except EmailNotValidError as e:
        return False, str(e)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_phone(phone: str) -> bool:
    """Accept +[country code][number] or a local number."""
    return bool(PHONE_PATTERN.match(phone))


def validate_password_strength(password: str) -> tuple[bool, list[str]]:
    """
    Validate password strength.

    Args:
        password: Password to validate

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters")

    if not PASSWORD_PATTERN.match(password):
        errors.append(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number and one special character"
        )

    return len(errors) == 0, errors


def validate_aadhaar(number: str) -> bool:
    """12 digits, first digit 2-9."""
    return bool(AADHAAR_PATTERN.match(number))


def validate_gst(number: str) -> bool:
    return bool(GST_PATTERN.match(number))


def normalize_skills(skills: Union[str, Iterable[str], None]) -> Optional[str]:
    """
    Normalize a skills value into the stored comma-separated form.

    Accepts either a comma-separated string or a list of strings. Blank
    entries are dropped and case-insensitive duplicates collapse to the
    first spelling seen.

    Returns:
        "a, b, c" or None when nothing is left
    """
    if skills is None:
        return None
    items = skills.split(",") if isinstance(skills, str) else list(skills)

    seen: set[str] = set()
    cleaned: list[str] = []
    for item in items:
        skill = str(item).strip()
        if skill and skill.lower() not in seen:
            seen.add(skill.lower())
            cleaned.append(skill)
    return ", ".join(cleaned) if cleaned else None


def split_skills(skills: Optional[str]) -> list[str]:
    if not skills:
        return []
    return [s.strip() for s in skills.split(",") if s.strip()]
