from __future__ import annotations

import re
from urllib.parse import quote, urlsplit, urlunsplit

from .errors import ConceptTreeError

_DEFAULT_PORTS = {"http": "80", "https": "443", "ftp": "21"}
_PERCENT_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")
_UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~")
# Everything already legal in a URI component; only other characters are escaped.
_URI_SAFE = "!#$%&'()*+,/:;=?@[]~"


def _normalize_escape(match: re.Match[str]) -> str:
    char = chr(int(match.group(1), 16))
    if char in _UNRESERVED:
        return char
    return "%" + match.group(1).upper()


def _ascii_component(value: str) -> str:
    return quote(_PERCENT_ESCAPE.sub(_normalize_escape, value), safe=_URI_SAFE)


def _remove_dot_segments(path: str) -> str:
    """Remove ``.`` and ``..`` segments from a path (RFC 3986, section 5.2.4)."""
    remaining = path
    output: list[str] = []
    while remaining:
        if remaining.startswith("../"):
            remaining = remaining[3:]
        elif remaining.startswith("./"):
            remaining = remaining[2:]
        elif remaining.startswith("/./"):
            remaining = "/" + remaining[3:]
        elif remaining == "/.":
            remaining = "/"
        elif remaining.startswith("/../") or remaining == "/..":
            remaining = "/" + remaining[4:]
            if output:
                output.pop()
        elif remaining in (".", ".."):
            remaining = ""
        else:
            next_slash = remaining.find("/", 1 if remaining.startswith("/") else 0)
            if next_slash < 0:
                output.append(remaining)
                remaining = ""
            else:
                output.append(remaining[:next_slash])
                remaining = remaining[next_slash:]
    return "".join(output)


def _ascii_host(host: str, iri: str) -> str:
    if host.isascii():
        return host.lower()
    try:
        return host.lower().encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise ConceptTreeError(
            code="IRI_NOT_NORMALIZABLE",
            message=f"Unable to normalize an IRI into a URL: {iri}",
            context={"iri": iri},
        ) from exc


def _ascii_netloc(scheme: str, netloc: str, iri: str) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    host, port = hostport, ""
    if not hostport.startswith("["):
        host, colon, port = hostport.partition(":")
        if not colon:
            port = ""
    if port == _DEFAULT_PORTS.get(scheme):
        port = ""
    authority = _ascii_host(host, iri) if not host.startswith("[") else host.lower()
    if port:
        authority += ":" + port
    if at:
        authority = _ascii_component(userinfo) + "@" + authority
    return authority


def resolvable_url(iri: str) -> str | None:
    """Return the normalized ASCII URL of an IRI, or None when it equals the IRI.

    Scheme and host are lower-cased, the host is IDNA encoded, default ports
    and dot segments are dropped and non-ASCII characters are percent-encoded
    as UTF-8.
    """
    parts = urlsplit(iri)
    if not parts.scheme:
        return None
    scheme = parts.scheme.lower()
    netloc = _ascii_netloc(scheme, parts.netloc, iri) if parts.netloc else ""
    path = _ascii_component(_remove_dot_segments(parts.path))
    if parts.netloc and not path:
        path = "/"
    url = urlunsplit(
        (
            scheme,
            netloc,
            path,
            _ascii_component(parts.query),
            _ascii_component(parts.fragment),
        )
    )
    # urlunsplit drops empty query and fragment markers.
    head, hash_mark, _ = iri.partition("#")
    if "?" in head and not parts.query:
        url = url.replace("#", "?#", 1) if "#" in url else url + "?"
    if hash_mark and not parts.fragment:
        url += "#"
    if url == iri:
        return None
    return url
