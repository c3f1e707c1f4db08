"""Text normalisation utilities: slug generation, plain-text excerpts, image data URIs."""

import base64
import re
import unicodedata

from bs4 import BeautifulSoup

from visacms.services.errors import ValidationError

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB
EXCERPT_LENGTH = 100


def slugify(text: str) -> str:
    """Return a URL-safe slug for *text*.

    The slug is lowercased, ASCII-only, and uses single hyphens as separators
    with no leading or trailing hyphen.  Text without any letter or digit
    yields an empty string.
    """
    if not text:
        return ""

    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", text)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", slug.lower())
    return slug.strip("-")


def excerpt(markup: str, limit: int = EXCERPT_LENGTH) -> str:
    """Return the first *limit* characters of the visible text in *markup*."""
    if not markup or not markup.strip():
        return ""
    text = BeautifulSoup(markup, "lxml").get_text(" ", strip=True)
    text = re.sub(r"\s+", " ", text)
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def make_data_uri(data: bytes, media_type: str) -> str:
    """Inline *data* as a ``data:`` URI after checking it is a reasonably sized image.

    Raises:
        ValidationError: if *media_type* is not an image type or *data* is
            empty or larger than MAX_IMAGE_SIZE.
    """
    if not media_type or not media_type.lower().startswith("image/"):
        raise ValidationError("Please upload a valid image file.")
    if not data:
        raise ValidationError("The uploaded image is empty.")
    if len(data) > MAX_IMAGE_SIZE:
        raise ValidationError("Image size should be less than 5MB.")

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type.lower()};base64,{encoded}"
