from __future__ import annotations

import re

UNKNOWN_REPOSITORY = "unknown/unknown"

_WEB_URL = re.compile(r"github\.com/([^/\s?#]+)/([^/\s?#]+)", re.IGNORECASE)
_API_REPO_URL = re.compile(r"/repos/([^/\s?#]+)/([^/\s?#]+)/?$")
_FULL_NAME = re.compile(r"^([\w.-]+)/([\w.-]+)$")


def parse_repository_url(url: str | None) -> tuple[str, str] | None:
    """Extract (owner, name) from a github.com URL or a bare "owner/name"."""
    if not url:
        return None
    url = url.strip()
    m = _WEB_URL.search(url) or _FULL_NAME.match(url)
    if not m:
        return None
    owner, name = m.group(1), m.group(2)
    if name.endswith(".git"):
        name = name[:-4]
    if not owner or not name:
        return None
    return owner, name


def repo_full_name_from_api_url(url: str | None) -> str:
    """Join key for an issue's ``repository_url`` back-reference.

    Never raises: empty or unrecognised input yields ``UNKNOWN_REPOSITORY``.
    """
    if not url:
        return UNKNOWN_REPOSITORY
    m = _API_REPO_URL.search(url.strip())
    if not m:
        return UNKNOWN_REPOSITORY
    return f"{m.group(1)}/{m.group(2)}"


def split_full_name(full_name: str) -> tuple[str, str]:
    owner, sep, name = full_name.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ValueError(f"Not an owner/name pair: {full_name!r}")
    return owner, name
