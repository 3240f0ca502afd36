"""Text processing utilities."""

import re
import secrets
import time

from assetflow.core.constants import MAX_SLUG_LENGTH


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Converts the input string to a URL-friendly slug by:
    - Converting to lowercase
    - Removing special characters
    - Replacing spaces and hyphens with single hyphens
    - Truncating to max_length

    Examples:
        >>> generate_slug("My Company Name")
        'my-company-name'
        >>> generate_slug("Hello! World@2024")
        'hello-world2024'
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug[:max_length]


def organization_slug_for_email(email: str) -> str:
    """Build an organization slug from the first label of the email domain.

    A millisecond timestamp plus a short random tail keeps slugs unique
    across registrations from the same domain.

    >>> organization_slug_for_email("alice@acme.io").startswith("acme-")
    True
    """
    domain = email.rsplit("@", 1)[-1]
    label = domain.split(".", 1)[0] or "org"
    suffix = f"{int(time.time() * 1000)}{secrets.token_hex(2)}"
    base = generate_slug(label, MAX_SLUG_LENGTH - len(suffix) - 1) or "org"
    return f"{base}-{suffix}"
