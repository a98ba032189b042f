"""
Embedded page-state reader.

Career sites built on client frameworks ship their own data on the page
(`window.__appData` on AshbyHQ, `window.__remixContext` on Greenhouse).
These are undocumented and shift between releases, so every read is a
guarded path lookup.
"""
from typing import Any, Optional

from jobclip.core.page import PageSnapshot
from .chain import dig


def read_state(page: PageSnapshot, name: str, *path: Any) -> Optional[Any]:
    """Value at `path` inside the embedded global `name`, or None."""
    root = page.global_state(name)
    if root is None:
        return None
    return dig(root, *path)


def find_route_data(page: PageSnapshot, name: str, route_fragment: str, *path: Any) -> Optional[Any]:
    """
    Value inside the first Remix route whose key contains `route_fragment`.

    Remix keeps per-route loader results under state.loaderData, keyed by
    route id (e.g. "routes/$url_token_.jobs_.$job_post_id").
    """
    loader_data = read_state(page, name, "state", "loaderData")
    if not isinstance(loader_data, dict):
        return None
    for key, route in loader_data.items():
        if route_fragment in str(key):
            return dig(route, *path)
    return None
