from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def with_query_params(url: str, params: Mapping[str, str]) -> str:
    """Return a copy of ``url`` with ``params`` set, replacing existing keys."""
    parts = urlsplit(url)

    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(params)

    return urlunsplit(parts._replace(query=urlencode(query)))


def error_redirect_url(url: str, error: str) -> str:
    """
    Build the URL of the error page for ``url``.

    ``/error`` is appended to the path and the ``error`` query parameter is
    set, other query parameters are kept. ``url`` itself is left untouched.

    Example:
        >>> error_redirect_url("https://app.com/api/auth", "SignInError")
        'https://app.com/api/auth/error?error=SignInError'
    """
    parts = urlsplit(url)
    parts = parts._replace(path=parts.path.rstrip("/") + "/error")

    return with_query_params(urlunsplit(parts), {"error": error})


def auth_base_url(url: str, trailing_segments: int, base_url: str | None = None) -> str:
    """
    Strip ``trailing_segments`` path segments (and the query) from a request URL.

    Used to go from ``.../auth/signin/github`` back to ``.../auth``. If
    ``base_url`` is provided, it replaces the scheme and host of the request,
    this is useful when the internal request URL differs from the
    external-facing URL (e.g. Docker containers, reverse proxies).
    """
    parts = urlsplit(url)
    path_parts = parts.path.rstrip("/").split("/")

    if trailing_segments:
        path_parts = path_parts[:-trailing_segments]

    path = "/".join(path_parts)

    if base_url:
        return f"{base_url.rstrip('/')}{path}"

    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))
