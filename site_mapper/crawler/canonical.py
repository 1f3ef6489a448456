"""
URL canonicalization used for deduplication, origin checks and binary filtering.

Every URL that reaches the frontier or the graph passes through
:func:`canonicalize` first, so string equality is URL equality.
"""
from __future__ import annotations

import re
import string
from typing import Optional, Tuple
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

import idna

__all__ = ("BINARY_EXTENSIONS", "Origin", "canonicalize", "is_binary", "origin", "same_origin")

_ALLOWED_SCHEMES = frozenset(("http", "https"))
_DEFAULT_PORTS = {"http": 80, "https": 443}

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")
_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")
_PATH_SAFE = "%/:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"

# images, stylesheets, scripts, fonts and documents
BINARY_EXTENSIONS: frozenset[str] = frozenset((
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg", ".ico",
    ".css", ".js",
    ".woff", ".woff2", ".ttf", ".eot", ".otf",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
))

Origin = Tuple[str, str, int]


def _unescape(match: re.Match) -> str:
    char = chr(int(match.group(1), 16))
    return char if char in _UNRESERVED else f"%{match.group(1).upper()}"


def _requote(component: str, safe: str) -> str:
    """Percent-encode *component* into one fixed form.

    Escapes of unreserved characters are decoded, other escapes are
    upper-cased and kept (``%2F`` stays ``%2F``), and raw characters outside
    *safe* are UTF-8 encoded.
    """
    component = _STRAY_PERCENT.sub("%25", component)
    component = _ESCAPE.sub(_unescape, component)
    return quote(component, safe=safe)


def _ascii_host(hostname: str) -> Optional[str]:
    if hostname.isascii():
        return hostname.lower()
    try:
        return idna.encode(hostname, uts46=True).decode("ascii")
    except idna.IDNAError:
        return None


def canonicalize(raw_url: str, base_url: Optional[str] = None) -> Optional[str]:
    """
    Normalize *raw_url* into its canonical string form.

    - Resolves relative references against *base_url*
    - Lower-cases the hostname and IDNA-encodes non-ASCII hosts
    - Drops default ports (:80 for http, :443 for https)
    - Strips trailing slashes, except for the root path ``/``
    - Re-quotes path and query, so ``/café`` and ``/caf%C3%A9`` are equal
    - Drops the fragment, keeps query parameters in their order

    Returns None for malformed URLs and for anything that is not http(s).
    """
    if raw_url is None:
        return None
    raw_url = raw_url.strip()
    if not raw_url and not base_url:
        return None

    try:
        absolute = urljoin(base_url, raw_url) if base_url else raw_url
        parts = urlsplit(absolute)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None

    if parts.scheme not in _ALLOWED_SCHEMES or not hostname:
        return None

    netloc = _ascii_host(hostname)
    if netloc is None:
        return None
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if port is not None and port != _DEFAULT_PORTS[parts.scheme]:
        netloc = f"{netloc}:{port}"
    if "@" in parts.netloc:
        netloc = f"{parts.netloc.rsplit('@', 1)[0]}@{netloc}"

    path = _requote(parts.path, _PATH_SAFE).rstrip("/") or "/"
    query = _requote(parts.query, _QUERY_SAFE)
    return urlunsplit((parts.scheme, netloc, path, query, ""))


def is_binary(url: str) -> bool:
    """True if the URL path ends with one of :data:`BINARY_EXTENSIONS`."""
    try:
        path = urlsplit(url).path.lower()
    except ValueError:
        return False
    return any(path.endswith(ext) for ext in BINARY_EXTENSIONS)


def origin(url: str) -> Optional[Origin]:
    """Return ``(scheme, host, port)`` with the port made explicit."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if parts.scheme not in _ALLOWED_SCHEMES or not hostname:
        return None
    host = _ascii_host(hostname)
    if host is None:
        return None
    return parts.scheme, host, port if port is not None else _DEFAULT_PORTS[parts.scheme]


def same_origin(url: str, start: Optional[Origin]) -> bool:
    return start is not None and origin(url) == start
