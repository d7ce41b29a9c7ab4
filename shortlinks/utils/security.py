from urllib.parse import urlparse

MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = ("http", "https")

# Keywords that mark a destination as unsafe. Extend as needed.
BAD_KEYWORDS = [
    # "phishing", "malware",
]

# Domains that may never be shortened. BLOCKED_DOMAINS from config is added
# on top of this list at check time.
BAD_DOMAINS = [
    # "malicious-site.com",
]


def _has_scheme(url: str) -> bool:
    parsed = urlparse(url)
    if not parsed.scheme:
        return False
    if parsed.netloc:
        return True
    # "example.com:8080/page" parses with scheme "example.com"; a port after
    # the colon means there was no scheme at all
    rest = url.split(":", 1)[1]
    return not rest[:1].isdigit()


def normalize_url(url: str) -> str:
    """Strip whitespace and default to https:// when no scheme is given."""
    url = (url or "").strip()
    try:
        has_scheme = _has_scheme(url)
    except ValueError:
        # validate_url reports the parse error
        return url
    if url and not has_scheme:
        url = "https://" + url
    return url


def validate_url(url: str) -> tuple[bool, str | None]:
    """Check a normalized URL is an absolute http(s) URL of sane length."""
    if not url:
        return False, "original_url is required"
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL must be at most {MAX_URL_LENGTH} characters"

    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "URL could not be parsed"

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return False, "URL must use http or https"
    if not parsed.hostname:
        return False, "URL must include a host"
    try:
        parsed.port
    except ValueError:
        return False, "URL has an invalid port"
    return True, None


def is_unsafe_url(url: str, extra_domains=None) -> tuple[bool, str | None]:
    """
    Checks if a URL is unsafe based on a local blocklist of keywords and domains.

    Args:
        url (str): The URL to check.
        extra_domains (iterable[str] | None): Additional blocked domains.

    Returns:
        tuple[bool, str | None]: (is_unsafe, reason)
    """
    if not url:
        return False, None

    url_lower = url.lower()

    for keyword in BAD_KEYWORDS:
        if keyword in url_lower:
            return True, f"URL contains possibly inappropriate content: '{keyword}'"

    blocked = [d.lower() for d in BAD_DOMAINS]
    blocked.extend(d.lower() for d in (extra_domains or []))

    try:
        domain = (urlparse(url).hostname or "").lower()
    except ValueError:
        return True, "URL could not be parsed"

    # Subdomains of a blocked domain are blocked too
    for bad_domain in blocked:
        if domain == bad_domain or domain.endswith("." + bad_domain):
            return True, f"Domain '{domain}' is blocked."

    return False, None
