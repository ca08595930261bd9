"""Cookie header lookup."""


def get_cookie(header: str | None, name: str) -> str | None:
    """
    Find a named cookie in a raw ``Cookie`` header value.

    Pairs are separated by ';' with optional leading spaces. The name
    must match exactly; the first match wins.

    Args:
        header: Raw Cookie header value, or None if the request has none
        name: Cookie name to look for

    Returns:
        The cookie value, or None if the header is absent or has no such cookie
    """
    if header is None:
        return None

    prefix = f"{name}="
    for pair in header.split(";"):
        pair = pair.lstrip(" ")
        if pair.startswith(prefix):
            return pair[len(prefix):]
    return None
