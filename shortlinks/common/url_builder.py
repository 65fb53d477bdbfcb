"""Short URL construction."""


def build_short_url(uid: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and UID into the public short URL.

    Args:
        uid: The generated short code
        base_url: Base URL (e.g., https://sho.rt or https://sho.rt/)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    parts = [base_url.rstrip("/")]
    prefix = path_prefix.strip("/")
    if prefix:
        parts.append(prefix)
    parts.append(uid)
    return "/".join(parts)
