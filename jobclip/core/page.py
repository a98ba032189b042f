"""
Page snapshot passed to every extractor.

Holds everything an extractor may read from one page at one moment:
the address, the parsed document, and the embedded page-state globals
(e.g. `window.__appData`). Extractors never reach for ambient state.
"""
import json
import logging
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# window.__appData = {...}  /  window["__remixContext"] = {...}
WINDOW_ASSIGNMENT = re.compile(
    r'window(?:\.(?P<dot>__[A-Za-z0-9_]+)|\[\s*["\'](?P<key>__[A-Za-z0-9_]+)["\']\s*\])\s*=\s*'
)


class PageSnapshot:
    """Read-only view of a career-site page."""

    def __init__(
        self,
        url: str,
        html: str = "",
        state: Optional[Mapping[str, Any]] = None,
        today: Optional[date] = None,
    ):
        """
        Args:
            url: Page address, used for extractor dispatch
            html: Rendered page markup
            state: Embedded globals supplied by the host, keyed by name
            today: Reference date for relative dates (defaults to today, UTC)
        """
        self.url = url or ""
        self.html = html or ""
        self.soup = BeautifulSoup(self.html, "lxml")
        self.today = today or datetime.now(timezone.utc).date()

        globals_found = _parse_window_assignments(self.soup)
        if state:
            globals_found.update(state)
        self._state: Dict[str, Any] = globals_found
        self._derived: Dict[str, Any] = {}

    def global_state(self, name: str) -> Optional[Any]:
        """Return an embedded global by name (e.g. '__appData')."""
        return self._state.get(name)

    def derived(self, key: str, compute: Callable[["PageSnapshot"], Any]) -> Any:
        """Value computed from this page once, then reused by later reads."""
        if key not in self._derived:
            self._derived[key] = compute(self)
        return self._derived[key]

    @property
    def state_names(self):
        return sorted(self._state)

    def __repr__(self):
        return f"<PageSnapshot(url={self.url[:80]}, globals={self.state_names})>"


def _parse_window_assignments(soup: BeautifulSoup) -> Dict[str, Any]:
    """Recover `window.__name = {...}` object literals from inline scripts."""
    found: Dict[str, Any] = {}
    decoder = json.JSONDecoder()

    for script in soup.find_all("script"):
        if script.get("src"):
            continue
        code = script.string or script.get_text() or ""
        if "window" not in code:
            continue

        for match in WINDOW_ASSIGNMENT.finditer(code):
            name = match.group("dot") or match.group("key")
            start = match.end()
            while start < len(code) and code[start].isspace():
                start += 1
            if start >= len(code) or code[start] not in "{[":
                continue
            try:
                value, _ = decoder.raw_decode(code, start)
            except json.JSONDecodeError as e:
                logger.debug(f"[page] Skipping malformed window.{name} literal: {e}")
                continue
            found.setdefault(name, value)

    return found
