# -*- coding: utf-8 -*-
from __future__ import annotations

import re

from .errors import ValidationError

_CSS = "/assets/css/"

# Stylesheets each page links, first listed is linked first
PAGE_STYLESHEETS: dict[str, tuple[str, ...]] = {
    "index": (_CSS + "styles.css", _CSS + "gallery.css", _CSS + "services.css"),
    "about": (_CSS + "about.css", _CSS + "styles.css", _CSS + "services.css"),
    "services": (_CSS + "services.css", _CSS + "styles.css"),
    "blog": (_CSS + "blog.css", _CSS + "styles.css"),
    "booking": (_CSS + "booking.css",),
    "contact": (_CSS + "contact.css", _CSS + "styles.css", _CSS + "services.css"),
    "gallery": (_CSS + "gallery.css", _CSS + "styles.css", _CSS + "services.css"),
    "packages": (_CSS + "package.css",),
    "trailers": (_CSS + "trailers.css", _CSS + "services.css", _CSS + "styles.css"),
    "students": (_CSS + "trailers.css", _CSS + "services.css", _CSS + "styles.css"),
    "video-productions": (_CSS + "trailers.css", _CSS + "services.css", _CSS + "styles.css"),
    "film-productions": (_CSS + "trailers.css", _CSS + "services.css", _CSS + "styles.css"),
    "faq": (_CSS + "faq.css", _CSS + "styles.css"),
    "awards": (_CSS + "styles.css", _CSS + "about.css", _CSS + "services.css"),
}

FILENAME_RE = re.compile(r"[A-Za-z0-9_\- ]+\.html")


def is_valid_filename(filename) -> bool:
    return isinstance(filename, str) and FILENAME_RE.fullmatch(filename) is not None


def require_valid_filename(filename) -> str:
    if not is_valid_filename(filename):
        raise ValidationError("Invalid filename format")
    return filename


def slug_from_filename(filename: str) -> str:
    return filename[: -len(".html")] if filename.endswith(".html") else filename


def stylesheets_for(slug: str) -> list[str]:
    return list(PAGE_STYLESHEETS.get(slug, ()))
