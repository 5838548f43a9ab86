"""
PII (Personally Identifiable Information) masking utilities.
"""
import re
from typing import Any

UUID_RE = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.I)

# Keys are compared after lower-casing and dropping underscores,
# so both "zip_code" and "zipCode" match.
PII_FIELDS = {
    "email", "username", "firstname", "lastname", "userid",
    "address", "shippingaddress", "zipcode",
}


def mask_email(email: str) -> str:
    """Mask email address."""
    if "@" not in email:
        return email
    local, domain = email.split("@", 1)
    if len(local) <= 2:
        masked = "**"
    else:
        masked = local[:2] + "*" * (len(local) - 2)
    return f"{masked}@{domain}"


def mask_name(name: str) -> str:
    """Mask name."""
    if len(name) <= 2:
        return "**"
    return name[0] + "*" * (len(name) - 2) + name[-1]


def mask_uuid(uuid_str: str) -> str:
    """Mask UUID (show first 8 chars only)."""
    if len(uuid_str) < 8:
        return "*" * len(uuid_str)
    return uuid_str[:8] + "-****-****-****-************"


def mask_text(value: str) -> str:
    """Mask free text such as street addresses, keeping only the length."""
    return "*" * len(value)


def _mask_value(key: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if "@" in value:
        return mask_email(value)
    if UUID_RE.match(value):
        return mask_uuid(value)
    if "name" in key:
        return mask_name(value)
    return mask_text(value)


def mask_pii_in_dict(data: dict) -> dict:
    """Mask PII in dictionary recursively."""
    masked = {}
    for key, value in data.items():
        normalized = key.lower().replace("_", "")

        if isinstance(value, dict):
            masked[key] = mask_pii_in_dict(value)
        elif isinstance(value, list):
            masked[key] = [mask_pii_in_dict(item) if isinstance(item, dict) else item for item in value]
        elif normalized in PII_FIELDS:
            masked[key] = _mask_value(normalized, value)
        else:
            masked[key] = value

    return masked
