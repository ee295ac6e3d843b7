from collections.abc import Iterable
from urllib.parse import unquote

PAGINATION_KEYS = ("page", "perPage")


def extract_filter_params(url: str, prefix: str, params: Iterable[str] | None = None) -> str:
    """
    Extract the caller's extra query parameters so pagination links keep them.

    The route prefix, its ``?``, the ``page``/``perPage`` pairs and every pair
    whose key is listed in ``params`` are removed; the rest is kept verbatim.

    Args:
        url: Requested path with its query string
        prefix: Route prefix to strip (e.g. "/offers")
        params: Additional keys to strip (e.g. ["annualSalary[criterias][]"])

    Returns:
        "" when nothing remains, otherwise the remainder prefixed with "&"

    Example:
        >>> extract_filter_params("/offers?job[criterias][]=dev&perPage=100&page=0", "/offers")
        '&job[criterias][]=dev'
    """
    stripped = set(PAGINATION_KEYS)
    stripped.update(params or ())

    remainder = url[len(prefix):] if prefix and url.startswith(prefix) else url
    remainder = remainder.lstrip("?")

    kept = []
    for pair in remainder.split("&"):
        if not pair:
            continue
        key = pair.split("=", 1)[0]
        if key in stripped or unquote(key) in stripped:
            continue
        kept.append(pair)

    if not kept:
        return ""
    return "&" + "&".join(kept)
