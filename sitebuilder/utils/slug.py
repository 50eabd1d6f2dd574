import re
import unicodedata

from sitebuilder.exceptions.custom import ConflictError

SLUG_PATTERN = re.compile(r"^[a-z0-9-]{3,50}$")
SLUG_MAX_LENGTH = 50


def slugify(value: str) -> str:
    """Lowercase, ASCII-only, hyphen separated."""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return value[:SLUG_MAX_LENGTH].strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(value) and SLUG_PATTERN.match(value) is not None


def unique_slug(base: str, exists, max_attempts: int = 100) -> str:
    """Append -1, -2, ... to `base` until `exists(slug)` is false."""
    base = slugify(base) or "site"
    if len(base) < 3:
        base = f"{base}-site"
    slug = base
    counter = 1
    while exists(slug):
        if counter > max_attempts:
            raise ConflictError("Unable to generate a unique slug", code="SLUG_TAKEN")
        suffix = f"-{counter}"
        slug = f"{base[:SLUG_MAX_LENGTH - len(suffix)]}{suffix}"
        counter += 1
    return slug
