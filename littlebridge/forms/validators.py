"""
Client-side form validation.

Each validator takes the raw form values and returns {field: message}; an
empty dict means the form may be submitted.
"""
import re
from typing import Any, Dict, Mapping

from littlebridge.modules.enquiries.schemas import MAX_MESSAGE_LENGTH

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8
SIGNUP_ROLES = ("family", "center")

Errors = Dict[str, str]


def _text(values: Mapping[str, Any], field: str) -> str:
    return (values.get(field) or "").strip()


def _check_email(values: Mapping[str, Any], errors: Errors, invalid: str = "Please enter a valid email address"):
    email = _text(values, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = invalid


def _require(values: Mapping[str, Any], errors: Errors, field: str, message: str):
    if not _text(values, field):
        errors[field] = message


def validate_educator_signup(values: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _require(values, errors, "full_name", "Full name is required")
    _check_email(values, errors)
    _require(values, errors, "suburb", "Suburb is required")
    if not values.get("languages"):
        errors["languages"] = "Please select at least one language"
    return errors


def validate_account_signup(values: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _check_email(values, errors)

    password = values.get("password") or ""
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    confirm = values.get("confirm_password") or ""
    if not confirm:
        errors["confirm_password"] = "Please confirm your password"
    elif confirm != password:
        errors["confirm_password"] = "Passwords do not match"

    if values.get("role") not in SIGNUP_ROLES:
        errors["role"] = "Please choose family or center"
    return errors


def validate_guest_enquiry(values: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _require(values, errors, "name", "Name is required")
    _check_email(values, errors, invalid="Please enter a valid email")
    _require(values, errors, "child_age", "Child's age is required")

    message = values.get("message") or ""
    if not message.strip():
        errors["message"] = "Message is required"
    elif len(message) > MAX_MESSAGE_LENGTH:
        errors["message"] = f"Message must be under {MAX_MESSAGE_LENGTH} characters"
    return errors


def validate_center_profile(values: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _require(values, errors, "center_name", "Center name is required")
    _require(values, errors, "suburb", "Suburb is required")
    _require(values, errors, "postcode", "Postcode is required")
    _require(values, errors, "phone", "Phone is required")
    _check_email(values, errors)
    return errors


def validate_waitlist(values: Mapping[str, Any]) -> Errors:
    errors: Errors = {}
    _require(values, errors, "email", "Email is required")
    return errors
