"""
Input validation and sanitization shared by the module schemas and services.

The check_* functions return an error message, or None when the value is
acceptable, so they can feed both pydantic validators and per-field error maps.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.countries import Country, find_country

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\s\-+()]+$")
UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
SEARCH_RE = re.compile(r"^[a-zA-Z0-9\s@._-]+$")
UNSAFE_CHARS_RE = re.compile(r"[%;\\]")

SENSITIVE_FIELDS = ("password", "reset_token", "access_token", "refresh_token")

MAX_EMAIL_LENGTH = 255
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 255
MIN_PHONE_LENGTH = 8
MAX_PHONE_LENGTH = 20
MAX_PAGE_SIZE = 100


def sanitize_string(value: Any, max_length: int = 255) -> str:
    if not isinstance(value, str):
        return ""
    return UNSAFE_CHARS_RE.sub("", value.strip()[:max_length])


def is_valid_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(UUID_RE.match(value))


def is_valid_search_term(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip()) and bool(SEARCH_RE.match(value.strip()))


def check_name(value: Optional[str], label: str = "Full name") -> Optional[str]:
    if value is None or not value.strip():
        return f"{label} is required"
    if len(value.strip()) < MIN_NAME_LENGTH:
        return f"{label} must be at least {MIN_NAME_LENGTH} characters"
    if len(value.strip()) > MAX_NAME_LENGTH:
        return f"{label} must be at most {MAX_NAME_LENGTH} characters"
    return None


def check_email(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return "Email is required"
    if len(value) > MAX_EMAIL_LENGTH or not EMAIL_RE.match(value.strip()):
        return "Please enter a valid email address"
    return None


def check_password(value: Optional[str], min_length: int) -> Optional[str]:
    if not value:
        return "Password is required"
    if len(value) < min_length:
        return f"Password must be at least {min_length} characters"
    return None


def check_country(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return "Country is required"
    if find_country(value) is None:
        return "Please select a valid country"
    return None


def national_digits(phone: str, country: Country) -> str:
    """Digits of the phone number with a leading +<country code> removed."""
    digits = re.sub(r"\D", "", phone)
    code_digits = re.sub(r"\D", "", country.phone_code)
    if phone.strip().startswith("+") and digits.startswith(code_digits):
        return digits[len(code_digits):]
    return digits


def check_phone(value: Optional[str], country: Optional[str] = None) -> Optional[str]:
    """Phone is optional; when given it must fit the selected country's numbering."""
    phone = value.strip() if value else ""
    if not phone:
        return None
    if not PHONE_RE.match(phone):
        return "Please enter a valid phone number (only numbers allowed)"
    selected = find_country(country)
    if selected is not None:
        digits = national_digits(phone, selected)
        if not digits:
            return "Phone number cannot be empty"
        if len(digits) != selected.national_length:
            return (
                f"Phone number must be exactly {selected.national_length} digits for "
                f"{selected.name} (you entered {len(digits)} digits)"
            )
        return None
    if len(phone) < MIN_PHONE_LENGTH or len(phone) > MAX_PHONE_LENGTH:
        return f"Phone number must be between {MIN_PHONE_LENGTH} and {MAX_PHONE_LENGTH} characters"
    return None


def format_phone(phone: Optional[str], country: Optional[str]) -> Optional[str]:
    """Store numbers as "<phone code> <national number>" when the country is known."""
    phone = phone.strip() if phone else ""
    if not phone:
        return None
    selected = find_country(country)
    if selected is None or phone.startswith("+"):
        return phone
    return f"{selected.phone_code} {phone}"


def validate_pagination(page: Any, limit: Any, default_limit: int = 50) -> Tuple[int, int, int]:
    """Clamp page/limit query values. Returns (page, limit, offset)."""
    try:
        page_num = max(1, int(page))
    except (TypeError, ValueError):
        page_num = 1
    try:
        limit_num = min(MAX_PAGE_SIZE, max(1, int(limit)))
    except (TypeError, ValueError):
        limit_num = default_limit
    return page_num, limit_num, (page_num - 1) * limit_num


def sanitize_record(record: Optional[Dict[str, Any]], sensitive_fields: Iterable[str] = SENSITIVE_FIELDS) -> Optional[Dict[str, Any]]:
    if not isinstance(record, dict):
        return record
    return {key: value for key, value in record.items() if key not in sensitive_fields}


def sanitize_records(records: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    if not isinstance(records, list):
        return []
    return [sanitize_record(record) for record in records]
