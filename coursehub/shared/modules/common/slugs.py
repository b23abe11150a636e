import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str) -> str:
    """
    Turn a display name into a URL-safe slug.

    "Émerald Cultural Institute, Dublin" -> "emerald-cultural-institute-dublin"
    """
    normalized = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"[^a-zA-Z0-9]+", "-", normalized).strip("-")
    return normalized.lower()


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(SLUG_PATTERN.match(slug))
