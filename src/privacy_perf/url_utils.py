"""URL helpers shared by the measurers."""

from urllib.parse import urlsplit

PUBLIC_WEB_SCHEMES = frozenset({"http", "https"})


def is_public_web_url(url: str) -> bool:
    """True for http(s) URLs; data:, about:, file: and friends carry no page timing."""
    if not url:
        return False
    return urlsplit(url).scheme.lower() in PUBLIC_WEB_SCHEMES


__all__ = ["PUBLIC_WEB_SCHEMES", "is_public_web_url"]
