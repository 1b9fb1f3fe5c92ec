"""
Validation utilities for the admin console
"""

from typing import Iterable, List

from email_validator import validate_email, EmailNotValidError

from inventory_admin.models.user import RegistrationRequest, UserRole


def validate_registration(
    request: RegistrationRequest,
    allowed_roles: Iterable[UserRole] = tuple(UserRole)
) -> List[str]:
    """
    Validate registration input before it is sent to the identity provider
    Returns list of validation errors
    """
    errors = []

    if not request.first_name.strip():
        errors.append("First name is required")

    if not request.last_name.strip():
        errors.append("Last name is required")

    if not request.email.strip():
        errors.append("Email is required")
    else:
        try:
            validate_email(request.email.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            errors.append(f"Invalid email address: {e}")

    if not request.password:
        errors.append("Password is required")
    elif request.password != request.confirm_password:
        errors.append("Passwords do not match")

    try:
        role = UserRole(request.role)
    except ValueError:
        errors.append(f"Invalid role: {request.role}")
    else:
        if role not in set(allowed_roles):
            errors.append(f"Role {role.value} cannot be assigned at registration")

    return errors
