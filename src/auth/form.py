"""
Form Decoder

Parses ``application/x-www-form-urlencoded`` request bodies
(``key=value&key2=value2``) submitted by the login form.
"""

import re
from urllib.parse import unquote_to_bytes

# A '%' that does not start a two-digit hex escape
_BAD_ESCAPE_RE = re.compile(rb"%(?![0-9A-Fa-f]{2})")


def percent_unescape(raw: bytes) -> str | None:
    """
    Percent-decode a form value.

    Args:
        raw: Undecoded value bytes ('+' already replaced)

    Returns:
        Decoded text, or None if an escape is malformed or the result is not UTF-8
    """
    if _BAD_ESCAPE_RE.search(raw):
        return None
    try:
        return unquote_to_bytes(raw).decode("utf-8")
    except UnicodeDecodeError:
        return None


def parse_form(body: bytes | str) -> dict[str, str]:
    """
    Parse a URL-encoded form body into a field mapping.

    Segments without '=' are skipped. A value that cannot be percent-decoded
    is kept as raw text. When a key repeats, the last occurrence wins.

    Args:
        body: Raw request body

    Returns:
        Mapping of field name to decoded value
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    fields: dict[str, str] = {}
    for segment in body.split(b"&"):
        key, sep, raw = segment.partition(b"=")
        if not sep:
            continue
        raw = raw.replace(b"+", b" ")
        value = percent_unescape(raw)
        if value is None:
            value = raw.decode("utf-8", errors="replace")
        fields[key.decode("utf-8", errors="replace")] = value
    return fields
