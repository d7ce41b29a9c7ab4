import re
import secrets
import string

from flask import current_app

from ..models.link import SHORT_CODE_MAX_LENGTH

ALPHABET = string.ascii_letters + string.digits
CUSTOM_CODE_PATTERN = re.compile(rf"^[A-Za-z0-9_-]{{3,{SHORT_CODE_MAX_LENGTH}}}$")

# Paths served by the app itself; a short code with one of these names would
# never be reachable through the redirect route.
RESERVED_CODES = frozenset({
    "api",
    "health",
    "links",
    "static",
})


def generate_short_code(length: int = 7) -> str:
    length = max(1, min(length, SHORT_CODE_MAX_LENGTH))
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def validate_custom_code(code: str) -> tuple[bool, str | None]:
    """Return (is_valid, reason) for a user-chosen short code."""
    if not code:
        return False, "Short code cannot be empty"
    if len(code) > SHORT_CODE_MAX_LENGTH:
        return False, f"Short code must be at most {SHORT_CODE_MAX_LENGTH} characters"
    if not CUSTOM_CODE_PATTERN.match(code):
        return False, (
            "Short code must be 3-20 characters of letters, numbers, '_' or '-'"
        )
    if code.lower() in RESERVED_CODES:
        return False, f"'{code}' is reserved"
    return True, None


def build_short_url(short_code: str) -> str:
    base_url = current_app.config.get("BASE_URL", "http://127.0.0.1:5000").rstrip("/")
    return f"{base_url}/{short_code}"
