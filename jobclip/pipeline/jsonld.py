"""
JSON-LD reader.

Finds the schema.org JobPosting embedded in `application/ld+json` scripts.
Sites encode it as a singleton object, an array of objects, or inside an
@graph container; all three are accepted.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from jobclip.core.normalize import clean_text
from jobclip.core.page import PageSnapshot
from .chain import dig

logger = logging.getLogger(__name__)


def _load_scripts(page: PageSnapshot) -> List[Any]:
    """Parsed payload of every JSON-LD script; malformed ones are skipped."""
    payloads = []
    for script in page.soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text() or ""
        if not raw.strip():
            continue
        try:
            payloads.append(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.debug(f"[jsonld] Failed to parse JSON-LD: {e}")
    return payloads


def _flatten(data: Any) -> List[Dict]:
    items = []
    if isinstance(data, dict):
        items.append(data)
        graph = data.get("@graph")
        if isinstance(graph, list):
            items.extend(item for item in graph if isinstance(item, dict))
    elif isinstance(data, list):
        for element in data:
            items.extend(_flatten(element))
    return items


def is_job_posting(item: Dict) -> bool:
    item_type = item.get("@type", "")
    if isinstance(item_type, str):
        return "JobPosting" in item_type
    if isinstance(item_type, list):
        return any("JobPosting" in str(t) for t in item_type)
    return False


def read_job_posting(page: PageSnapshot) -> Optional[Dict]:
    """
    The page's JobPosting object.

    A typed JobPosting wins; otherwise a lone untyped object (some boards
    omit @type) is used. Parsed once per snapshot.
    """
    return page.derived("jsonld.job_posting", _find_job_posting)


def _find_job_posting(page: PageSnapshot) -> Optional[Dict]:
    payloads = _load_scripts(page)
    untyped = None

    for payload in payloads:
        for item in _flatten(payload):
            if is_job_posting(item):
                return item
            if untyped is None and isinstance(payload, dict) and "@type" not in item:
                untyped = item

    return untyped


def read_field(page: PageSnapshot, *path: Any) -> Optional[Any]:
    """Value at `path` inside the page's JobPosting, or None."""
    posting = read_job_posting(page)
    if posting is None:
        return None
    return dig(posting, *path)


def hiring_organization(posting: Optional[Dict]) -> Optional[str]:
    if not isinstance(posting, dict):
        return None
    org = posting.get("hiringOrganization")
    if isinstance(org, dict):
        return clean_text(org.get("name")) or clean_text(org.get("legalName")) or None
    if isinstance(org, str):
        return clean_text(org) or None
    return None


def _address_text(address: Any) -> Optional[str]:
    if isinstance(address, str):
        return clean_text(address) or None
    if not isinstance(address, dict):
        return None

    parts = []
    for key in ("addressLocality", "addressRegion", "addressCountry"):
        value = address.get(key)
        if isinstance(value, dict):
            value = value.get("name")
        value = clean_text(value)
        if value:
            parts.append(value)
    return ", ".join(parts) if parts else None


def job_location(posting: Optional[Dict]) -> Optional[str]:
    """
    Location text from jobLocation.

    Accepts a Place with a PostalAddress, a Place with a plain string
    address or name, a bare string, or a list of any of these (first
    usable entry).
    """
    if not isinstance(posting, dict):
        return None

    location = posting.get("jobLocation")
    candidates = location if isinstance(location, list) else [location]

    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
        if not isinstance(candidate, dict):
            continue
        text = _address_text(candidate.get("address"))
        if text:
            return text
        name = clean_text(candidate.get("name"))
        if name:
            return name

    return None
