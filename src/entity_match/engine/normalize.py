"""Canonical forms used for exact-match field comparison."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")
# Repeated scheme prefixes are stripped too, so normalizing twice changes nothing.
_URL_PREFIX = re.compile(r"^(?:https?://(?:www\.)?)+")


def normalize_phone(value: str | None) -> str:
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def normalize_url(value: str | None) -> str:
    """Lower-case and drop the scheme, a ``www.`` right after it and trailing slashes."""
    if not value:
        return ""
    return _URL_PREFIX.sub("", value.lower()).rstrip("/")


def normalize_email(value: str | None) -> str:
    if not value:
        return ""
    return value.strip().lower()
