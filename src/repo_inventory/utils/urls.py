"""URL helpers for code host connections."""

from urllib.parse import SplitResult, urlsplit


def url_host(hostname: str) -> str:
    """Return ``hostname`` as it is written in a URL, bracketing IPv6 literals."""
    return f"[{hostname}]" if ":" in hostname else hostname


def normalize_base_url(url: str) -> SplitResult:
    """Parse and normalize a code host base URL.

    Lowercases scheme and host and strips trailing slashes from the path,
    so ``HTTPS://Bitbucket.org/`` and ``https://bitbucket.org`` compare equal.

    Raises ValueError when the URL is not an absolute http(s) URL.
    """
    parsed = urlsplit(url.strip())
    if parsed.scheme.lower() not in ("http", "https"):
        raise ValueError(f"invalid URL scheme in {url!r}, expected http or https")
    if not parsed.hostname:
        raise ValueError(f"missing host in URL {url!r}")

    netloc = url_host(parsed.hostname)
    if parsed.port is not None:
        netloc = f"{netloc}:{parsed.port}"

    return SplitResult(
        scheme=parsed.scheme.lower(),
        netloc=netloc,
        path=parsed.path.rstrip("/"),
        query=parsed.query,
        fragment=parsed.fragment,
    )
