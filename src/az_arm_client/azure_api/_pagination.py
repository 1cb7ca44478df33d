"""ARM pagination helper."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

from az_arm_client.azure_api._http import HttpExecutor


def _paginate(executor: HttpExecutor, path: str, params: dict[str, str]) -> list[dict]:
    """Fetch all pages from an ARM list endpoint and return the merged values.

    ``nextLink`` URLs are absolute and carry their own query string (including
    ``api-version`` and the skip token), so they replace *path* and *params*.
    Only the path and query of ``nextLink`` are used: every page is fetched
    from the configured resource manager endpoint, whatever host the link
    names.
    """
    items: list[dict] = []
    next_path: str | None = path
    while next_path:
        data = executor.request("GET", next_path, params) or {}
        items.extend(data.get("value", []))
        next_link = data.get("nextLink")
        if not next_link:
            break
        parts = urlsplit(next_link)
        next_path = parts.path
        params = dict(parse_qsl(parts.query))
    return items
