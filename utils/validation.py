"""Input validation and sanitization utilities"""
import re
from typing import Any, Dict, Optional

# local-part@domain.tld with no whitespace anywhere
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def sanitize_string(value: Any, max_length: Optional[int] = None, allow_empty: bool = True) -> Optional[str]:
    """Sanitize string input"""
    if value is None:
        return None if allow_empty else ""

    # Convert to string and strip whitespace
    sanitized = str(value).strip()

    # Remove null bytes and control characters (except newlines and tabs)
    sanitized = re.sub(r'[\x00-\x08\x0b-\x0c\x0e-\x1f]', '', sanitized)

    # Enforce max length
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized if (sanitized or allow_empty) else None


def validate_email(email: str) -> bool:
    """Validate email format"""
    if not email:
        return False
    return bool(EMAIL_PATTERN.fullmatch(email))


def get_json_body(request) -> Dict[str, Any]:
    """Parsed JSON object from a Flask request, or {} when absent or malformed"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data
