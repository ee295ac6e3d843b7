"""URL-safe slug generation for entity identifiers."""

import re
import secrets
import unicodedata


def slugify(text: str) -> str:
    """Normalise arbitrary text into a lowercase, hyphenated, ASCII slug.

    Accents are folded (``"Élodie"`` -> ``"elodie"``) before anything that is
    not a word character, space or hyphen is dropped.
    """
    value = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    value = value.lower().strip()
    value = re.sub(r"[^\w\s-]", "", value)
    value = re.sub(r"[\s_]+", "-", value)
    return re.sub(r"-+", "-", value).strip("-")


def short_id() -> str:
    """Short random suffix used to keep person slugs unique."""
    return secrets.token_hex(4)
